"""CORS preflight handling for the API prefix."""

import logging
from dataclasses import dataclass

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .config import Settings

logger = logging.getLogger(__name__)

ALLOW_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
ALLOW_HEADERS = ("Content-Type", "Authorization", "X-API-Key")


@dataclass(frozen=True)
class CORSPolicy:
    """Preflight decision inputs, fixed at startup."""

    allowed_origins: tuple[str, ...]
    path_prefix: str = "/api"
    allow_methods: tuple[str, ...] = ALLOW_METHODS
    allow_headers: tuple[str, ...] = ALLOW_HEADERS
    allow_credentials: bool = True
    max_age: int = 86400

    @classmethod
    def from_settings(cls, settings: Settings) -> "CORSPolicy":
        return cls(
            allowed_origins=tuple(settings.allowed_origins),
            path_prefix=settings.api_prefix,
            max_age=settings.cors_max_age,
        )

    def applies_to(self, path: str) -> bool:
        prefix = self.path_prefix.rstrip("/")
        return not prefix or path == prefix or path.startswith(prefix + "/")

    def is_allowed(self, origin: str | None) -> bool:
        return bool(origin) and origin in self.allowed_origins

    def preflight_headers(self, origin: str | None) -> dict[str, str]:
        headers = {
            "Access-Control-Allow-Methods": ", ".join(self.allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.allow_headers),
            "Access-Control-Max-Age": str(self.max_age),
        }
        if self.allow_credentials:
            headers["Access-Control-Allow-Credentials"] = "true"
        # Unlisted or missing origins get no allow-origin header; the browser blocks the real request.
        if self.is_allowed(origin):
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        return headers


class CORSPreflightMiddleware(BaseHTTPMiddleware):
    """Answers OPTIONS requests under the API prefix; everything else passes through."""

    def __init__(self, app, *, policy: CORSPolicy) -> None:
        super().__init__(app)
        self.policy = policy

    async def dispatch(self, request: Request, call_next):
        if request.method != "OPTIONS" or not self.policy.applies_to(request.url.path):
            return await call_next(request)

        origin = request.headers.get("origin")
        if origin and not self.policy.is_allowed(origin):
            logger.info("Preflight from unlisted origin %s for %s", origin, request.url.path)
        return Response(status_code=200, headers=self.policy.preflight_headers(origin))
