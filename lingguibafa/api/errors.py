"""Error envelopes and exception handlers for the Linggui Bafa API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException

from ..errors import InvalidInstantError

LOG = logging.getLogger(__name__)


class ErrorEnvelope(BaseModel):
    """Standardized error payload returned by the public API."""

    code: str = Field(description="Machine readable error code.")
    message: str = Field(description="Human friendly summary of the error.")
    details: Any | None = Field(
        default=None, description="Optional structured details that expand on the error."
    )


def _status_to_code(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return "ERROR"


def _normalize_detail(detail: Any, status_code: int) -> ErrorEnvelope:
    """Convert ``HTTPException.detail`` payloads into an :class:`ErrorEnvelope`."""

    default_code = _status_to_code(status_code)
    try:
        default_message = HTTPStatus(status_code).phrase
    except ValueError:
        default_message = "Error"

    if isinstance(detail, ErrorEnvelope):
        return detail
    if isinstance(detail, Mapping):
        data = dict(detail)
        code = str(data.pop("code", None) or default_code)
        message = str(data.pop("message", None) or default_message)
        details = data.pop("details", None)
        if details is None and data:
            details = data
        return ErrorEnvelope(code=code, message=message, details=details)
    if isinstance(detail, str):
        return ErrorEnvelope(code=default_code, message=detail)
    return ErrorEnvelope(code=default_code, message=default_message, details=detail)


async def http_exception_handler(_: Request, exc: HTTPException) -> ORJSONResponse:
    envelope = _normalize_detail(exc.detail, exc.status_code)
    return ORJSONResponse(status_code=exc.status_code, content=envelope.model_dump())


async def validation_exception_handler(
    _: Request, exc: RequestValidationError
) -> ORJSONResponse:
    envelope = ErrorEnvelope(
        code="VALIDATION_ERROR",
        message="Request validation failed.",
        details=exc.errors(),
    )
    return ORJSONResponse(status_code=422, content=_jsonable(envelope))


async def invalid_instant_handler(_: Request, exc: InvalidInstantError) -> ORJSONResponse:
    envelope = ErrorEnvelope(code="INVALID_INSTANT", message=str(exc))
    return ORJSONResponse(status_code=422, content=envelope.model_dump())


async def unhandled_exception_handler(_: Request, exc: Exception) -> ORJSONResponse:
    LOG.exception("Unhandled error while serving request")
    envelope = ErrorEnvelope(
        code="INTERNAL_ERROR",
        message="An unexpected error occurred while processing the request.",
        details={"type": exc.__class__.__name__},
    )
    return ORJSONResponse(status_code=500, content=envelope.model_dump())


def _jsonable(envelope: ErrorEnvelope) -> dict[str, Any]:
    # Validation errors may carry exception objects in ``ctx``.
    return jsonable_encoder(envelope.model_dump(), custom_encoder={Exception: str})


def install_error_handlers(app: FastAPI) -> None:
    """Register shared exception handlers on ``app``."""

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(InvalidInstantError, invalid_instant_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "ErrorEnvelope",
    "http_exception_handler",
    "install_error_handlers",
    "invalid_instant_handler",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
