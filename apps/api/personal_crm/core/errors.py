"""API error envelope, error codes and the exception handlers that emit them.

Every handled failure leaves the API as

    {"error": {"message": <str | list[str]>, "error_code": <int>}}

Routers raise the ``ApiError`` subclasses below; request validation and rate
limiting failures raised by FastAPI/slowapi are translated here too.
"""

import logging
from typing import Any, TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from slowapi.errors import RateLimitExceeded

from personal_crm.core.structured_logging import build_log_context

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


ERROR_CODES: dict[int, str] = {
    30: "The limit parameter is too big",
    31: "The resource has not been found",
    32: "Error while validating the data",
    34: "Too many attempts, please slow down the request",
    37: "Problems parsing JSON",
    41: "Invalid parameters",
}


class ApiError(Exception):
    """Base class for errors rendered with the API error envelope."""

    status_code: int = 400
    error_code: int = 41

    def __init__(self, message: str | list[str] | None = None):
        self.message = message if message is not None else ERROR_CODES[self.error_code]
        super().__init__(self.message)


class LimitTooBigError(ApiError):
    """Requested page size is above the configured maximum."""

    error_code = 30


class NotFoundError(ApiError):
    """Resource (or a related entity) is missing or outside the account."""

    status_code = 404
    error_code = 31


class ValidationFailedError(ApiError):
    """Request fields failed validation."""

    error_code = 32


class TooManyRequestsError(ApiError):
    status_code = 429
    error_code = 34


class InvalidJsonError(ApiError):
    error_code = 37


class InvalidParametersError(ApiError):
    """The data layer rejected the write."""

    error_code = 41


# =============================================================================
# Validation messages
# =============================================================================

_REQUIRED_TYPES = {"missing", "string_too_short"}
_DATE_TYPES = {
    "datetime_parsing",
    "datetime_from_date_parsing",
    "datetime_type",
    "datetime_range",
    "date_parsing",
}
_INTEGER_TYPES = {"int_parsing", "int_type", "int_from_float"}
_NULLABLE_TYPES = {"string_type", "datetime_type", "int_type"}


def _field_name(loc: tuple[Any, ...]) -> str | None:
    # loc is ("body", "content"), ("query", "page") or just ("body",)
    parts = [str(p) for p in loc[1:] if not isinstance(p, int)]
    return ".".join(parts) if parts else None


def validation_message(error: dict[str, Any]) -> str:
    """Turn one pydantic error into a human-readable sentence."""
    field = _field_name(tuple(error.get("loc", ())))
    if field is None:
        return "The request body is required."

    label = field.replace("_", " ")
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type in _REQUIRED_TYPES or (
        error_type in _NULLABLE_TYPES and error.get("input") is None
    ):
        return f"The {label} field is required."
    if error_type == "string_too_long":
        return f"The {label} may not be greater than {ctx.get('max_length')} characters."
    if error_type in _DATE_TYPES:
        return f"The {label} is not a valid date."
    if error_type in _INTEGER_TYPES:
        return f"The {label} must be an integer."
    if error_type == "string_type":
        return f"The {label} must be a string."
    if error_type == "greater_than_equal":
        return f"The {label} must be at least {ctx.get('ge')}."
    if error_type == "less_than_equal":
        return f"The {label} may not be greater than {ctx.get('le')}."
    return f"The {label} is invalid."


def validation_messages(errors: list[dict[str, Any]]) -> list[str]:
    """Unique messages in the order the errors were reported."""
    messages: list[str] = []
    for error in errors:
        message = validation_message(error)
        if message not in messages:
            messages.append(message)
    return messages


def validate_payload(model: type[ModelT], payload: Any) -> ModelT:
    """
    Validate a request body inside the handler.

    Used where the record has to be found before its body is checked.

    Raises:
        ValidationFailedError: payload does not fit ``model``
    """
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        errors = [{**e, "loc": ("body", *e["loc"])} for e in exc.errors()]
        raise ValidationFailedError(validation_messages(errors))


# =============================================================================
# Exception handlers
# =============================================================================

def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": {"message": error.message, "error_code": error.error_code}},
    )


def _log_api_error(request: Request, error: ApiError) -> None:
    logger.warning(
        "API error %s on %s %s",
        error.error_code,
        request.method,
        request.url.path,
        extra=build_log_context(
            request_id=getattr(request.state, "request_id", None),
            route=request.url.path,
            method=request.method,
            error_code=error.error_code,
        ),
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    _log_api_error(request, exc)
    return error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = list(exc.errors())
    if any(e.get("type") == "json_invalid" for e in errors):
        error: ApiError = InvalidJsonError()
    else:
        error = ValidationFailedError(validation_messages(errors))
    _log_api_error(request, error)
    return error_response(error)


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Sync: SlowAPIMiddleware calls this directly
    error = TooManyRequestsError()
    _log_api_error(request, error)
    return error_response(error)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the API error envelope on the application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
