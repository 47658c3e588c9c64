"""Error taxonomy and the JSON handlers that render it.

Every failure leaves the API as ``{"message": ..., "errors": {...}}`` where
``errors`` is only present for field-level validation problems.
"""

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    """Malformed or missing input (422) with per-field messages."""

    status_code = 422
    default_message = "The given data was invalid."

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        super().__init__(message or summarize(errors), errors)


class AuthError(AppError):
    """Missing, invalid, expired or revoked credentials (401)."""

    status_code = 401
    default_message = "Unauthenticated."


class Unauthorized(AppError):
    """Valid caller acting on a resource owned by someone else (403)."""

    status_code = 403
    default_message = "Unauthorized"


class NotFound(AppError):
    status_code = 404
    default_message = "Todo not found"


def summarize(errors: Dict[str, List[str]]) -> str:
    """Build a top-level message from the first field error.

    ``{"title": ["The title field is required."], "due_date": [...]}`` becomes
    ``"The title field is required. (and 1 more error)"``.
    """
    messages = [m for field_messages in errors.values() for m in field_messages]
    if not messages:
        return ValidationError.default_message
    extra = len(messages) - 1
    if extra == 0:
        return messages[0]
    return f"{messages[0]} (and {extra} more error{'s' if extra > 1 else ''})"


def _field_name(loc, prefixed: bool = True) -> str:
    # drop the "body"/"query"/"path" prefix FastAPI puts in front of field paths
    if prefixed and len(loc) > 1:
        loc = loc[1:]
    parts = [str(p) for p in loc]
    return ".".join(parts)


def _human_message(field: str, error: dict) -> str:
    label = field.replace("_", " ")
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    if kind == "missing":
        return f"The {label} field is required."
    if kind == "string_too_long":
        return f"The {label} field must not be greater than {ctx.get('max_length')} characters."
    if kind == "string_too_short":
        return f"The {label} field must be at least {ctx.get('min_length')} characters."
    if kind == "string_type":
        return f"The {label} field must be a string."
    if kind.startswith("bool_"):
        return f"The {label} field must be true or false."
    if kind.startswith("date_") or kind.startswith("datetime_"):
        return f"The {label} field must be a valid date."
    if kind.startswith("int_"):
        return f"The {label} field must be an integer."
    if kind == "value_error":
        # pydantic prefixes messages raised from validators
        msg = error.get("msg", "")
        return msg.removeprefix("Value error, ")
    if kind == "json_invalid":
        return "The request body must be valid JSON."
    return error.get("msg", "Invalid value.")


def translate_validation_errors(errors, prefixed: bool = True) -> Dict[str, List[str]]:
    """Map pydantic/FastAPI error dicts to ``{field: [message, ...]}``.

    Pass ``prefixed=False`` for errors from a plain ``model_validate`` call,
    whose locations do not start with "body".
    """
    result: Dict[str, List[str]] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()), prefixed)
        result.setdefault(field, []).append(_human_message(field, error))
    return result


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = translate_validation_errors(exc.errors())
        logger.info("Validation failed on %s %s: %s", request.method, request.url.path, list(errors))
        return JSONResponse(status_code=422, content=ValidationError(errors).to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Generic error handler to return JSON errors for unexpected exceptions
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
