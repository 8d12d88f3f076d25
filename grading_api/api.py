"""FastAPI application factory for the grading API."""

import inspect
import logging
import re

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import APIKeyAuthenticator
from .config import Settings
from .cors import CORSPolicy, CORSPreflightMiddleware
from .errors import APIError, InternalError
from .models import HealthResponse
from .processor import ActionResult, BaseRouter, RouteAction
from .responses import api_error_response, error_response, success_response
from .routes import build_routers
from .services.base import Services
from .services.memory import create_memory_services
from .validation import validate_request

logger = logging.getLogger(__name__)


def _check_path_params(action: RouteAction) -> None:
    path_param_names = set(re.findall(r"\{(\w+)\}", action.path))
    model_field_names = set()
    if action.path_model:
        model_field_names = {
            field.alias or name for name, field in action.path_model.model_fields.items()
        }
    if path_param_names != model_field_names:
        raise ValueError(
            f"Path parameters in '{action.path}' do not match "
            f"path_model fields for action '{action.name}'. "
            f"Path has {path_param_names}, model has {model_field_names}"
        )


def create_app(
    services: Services | None = None,
    settings: Settings | None = None,
    routers: list[BaseRouter] | None = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        services: Domain services to call; defaults to the in-memory ones
        settings: Process configuration; defaults to one read from the environment
        routers: Override the routers built from ``services``
    """

    settings = settings or Settings()
    services = services or create_memory_services()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
    )

    app.state.settings = settings
    app.state.services = services

    authenticator = APIKeyAuthenticator(settings.api_secret_key)
    require_api_key = authenticator.require_api_key()
    expose_details = not settings.is_production

    app.add_middleware(CORSPreflightMiddleware, policy=CORSPolicy.from_settings(settings))

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Render typed errors as failure envelopes; the kind decides the status."""
        if isinstance(exc, InternalError):
            logger.error(
                "Internal error on %s %s",
                request.method,
                request.url.path,
                exc_info=exc.original,
            )
        else:
            logger.info("%s on %s: %s", exc.kind.value, request.url.path, exc.message)
        return api_error_response(exc, expose_details=expose_details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unknown routes and wrong methods still answer with an envelope."""
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return error_response(message, exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """Catch-all for failures outside route handlers."""
        logger.error("Unhandled exception on %s", request.url.path, exc_info=exc)
        return api_error_response(InternalError(exc), expose_details=expose_details)

    @app.get("/", response_model=HealthResponse)
    async def root():
        return HealthResponse(status="healthy", version=settings.api_version)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(status="healthy", version=settings.api_version)

    def make_endpoint(action: RouteAction):
        async def run(request: Request):
            inputs = await validate_request(request, action)
            try:
                call_result = action.handler(**inputs)
                if inspect.isawaitable(call_result):
                    call_result = await call_result
            except APIError:
                raise
            except Exception as exc:
                raise InternalError(exc) from exc

            if isinstance(call_result, Response):
                return call_result
            if not isinstance(call_result, ActionResult):
                call_result = ActionResult(data=call_result)
            return success_response(call_result.data, call_result.message, action.status_code)

        if action.requires_auth:
            async def endpoint(request: Request, _auth: None = Depends(require_api_key)):
                return await run(request)
        else:
            async def endpoint(request: Request):
                return await run(request)

        return endpoint

    for router in routers if routers is not None else build_routers(services):
        actions = router.get_actions()
        if not actions:
            logger.warning("Router %s registered but get_actions() returned nothing.", router.name)

        for action in actions:
            _check_path_params(action)
            path = settings.api_prefix.rstrip("/") + action.path
            logger.info("Registering action '%s' at %s %s", action.name, ",".join(action.methods), path)

            route_kwargs = {
                "methods": list(action.methods),
                "status_code": action.status_code,
                "summary": action.summary,
                "description": action.description,
                "tags": list(action.tags) if action.tags else [router.name],
                "response_class": JSONResponse,
            }
            route_kwargs = {k: v for k, v in route_kwargs.items() if v is not None}

            app.api_route(path, name=action.name, **route_kwargs)(make_endpoint(action))

    return app
