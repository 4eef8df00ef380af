"""
Centralized exception handlers.

Routes do no local recovery: domain errors, request validation errors and
unexpected failures all ascend to the handlers registered here, which map
them to ``{"success": false, "message": ...}`` payloads.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"
INTERNAL_ERROR = "Internal Server Error"


def _error_body(message: str, **extra) -> dict:
    return {"success": False, "message": message, **extra}


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=_error_body(exc.message))


async def domain_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_error_body(VALIDATION_FAILED, errors=exc.errors),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Flatten pydantic errors into the same field/message shape as the domain."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body(VALIDATION_FAILED, errors=errors),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(INTERNAL_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the registration API's exception handlers on an app."""
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
