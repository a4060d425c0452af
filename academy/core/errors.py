# academy/core/errors.py
from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from academy.core.logging import log_tracked_request

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for failures that map onto a fixed HTTP status and error body."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Validation failed"


class UnauthorizedError(AppError):
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = HTTPStatus.CONFLICT
    default_message = "Already exists"


class InternalError(AppError):
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def error_payload(message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": message}
    if details:
        payload["details"] = details
    return payload


def format_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, str]:
    """
    Collapse pydantic error entries into {field: message}.
    The first message per field wins.
    """
    formatted: Dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        formatted.setdefault(field, msg)
    return formatted


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    log_tracked_request(request, exc.status_code)
    return JSONResponse(
        status_code=int(exc.status_code),
        content=error_payload(exc.message, jsonable_encoder(exc.details)),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = format_validation_errors(list(exc.errors()))
    log_tracked_request(request, HTTPStatus.BAD_REQUEST)
    logger.warning(
        "request validation failed",
        extra={
            "path": request.url.path,
            "correlation_id": getattr(request.state, "request_id", None),
            "errors": details,
        },
    )
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content=error_payload(ValidationError.default_message, details),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    log_tracked_request(request, HTTPStatus.INTERNAL_SERVER_ERROR, error_type=type(exc).__name__)
    logger.exception(
        "unhandled error",
        extra={
            "path": request.url.path,
            "correlation_id": getattr(request.state, "request_id", None),
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content=error_payload(InternalError.default_message),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
