"""Schema validation for path, query and body input."""

import json
import logging
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .models import FieldError
from .processor import RouteAction

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _field_errors(exc: PydanticValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors(include_url=False, include_input=False):
        field = ".".join(str(part) for part in error["loc"]) or "body"
        errors.append(FieldError(field=field, message=error["msg"]))
    return errors


def check(schema: type[SchemaT], data: Any, *, strict: bool = False) -> tuple[SchemaT | None, list[FieldError]]:
    """
    Validate ``data`` and return ``(model, [])`` or ``(None, errors)``.

    Strict checks run in JSON mode since ``data`` is a decoded JSON body.
    """
    try:
        if strict:
            return schema.model_validate_json(json.dumps(data), strict=True), []
        return schema.model_validate(data), []
    except PydanticValidationError as exc:
        return None, _field_errors(exc)


def validate(schema: type[SchemaT], data: Any, *, strict: bool = False) -> SchemaT:
    """
    Validate ``data`` against ``schema``.

    Every violated constraint is reported, not just the first one.

    Raises:
        ValidationError: carrying one FieldError per violation.
    """
    model, errors = check(schema, data, strict=strict)
    if errors:
        raise ValidationError(errors)
    return model


async def read_json_body(request: Request) -> Any:
    """Parse the request body; an empty body reads as an empty object."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.info("Malformed JSON body on %s: %s", request.url.path, exc)
        raise ValidationError([FieldError(field="body", message="Malformed JSON body")]) from exc


async def validate_request(request: Request, action: RouteAction) -> dict[str, BaseModel]:
    """
    Validate the path, query and body declared by ``action``.

    Errors from all three sources are merged so the caller gets the whole
    list in one response. Bodies are validated strictly; path and query
    values are strings and are parsed into their declared types.
    """
    validated: dict[str, BaseModel] = {}
    errors: list[FieldError] = []

    sources = [
        ("path", action.path_model, request.path_params),
        ("query", action.query_model, request.query_params),
    ]
    for key, schema, params in sources:
        if schema is None:
            continue
        model, found = check(schema, dict(params))
        errors.extend(found)
        if model is not None:
            validated[key] = model

    if action.body_model is not None:
        try:
            body = await read_json_body(request)
        except ValidationError as exc:
            errors.extend(exc.errors)
        else:
            model, found = check(action.body_model, body, strict=True)
            errors.extend(found)
            if model is not None:
                validated["body"] = model

    if errors:
        raise ValidationError(errors)
    return validated
