# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception handlers that render every failure as an ApiResponse envelope.

Domain errors carry their own HTTP status. Framework errors (validation,
HTTPException) keep theirs, except request validation which is reported
as 400. Anything else becomes a generic 500 without internal details.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from enrollment_service.domains.enrollment import EnrollmentServiceError
from enrollment_service.infrastructure.database.connection import DatabaseError
from enrollment_service.models.common import ApiResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build an error envelope response."""
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse.error(status_code, message).model_dump(),
    )


async def enrollment_error_handler(request: Request, exc: EnrollmentServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("Enrollment request failed: path=%s, error=%s", request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    logger.info("Invalid request: path=%s, fields=%s", request.url.path, fields)
    return error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request: {', '.join(fields)}")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error("Database error: path=%s, error=%s", request.url.path, str(exc))
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Database temporarily unavailable")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error: path=%s", request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all envelope-rendering exception handlers to the app."""
    app.add_exception_handler(EnrollmentServiceError, enrollment_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
