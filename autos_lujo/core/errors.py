"""
Application error taxonomy and the FastAPI handlers that render it.

Every error leaves the API as ``{"error": <message>, "detalles": <optional>}``
with the status code carried by the exception class.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detalles: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detalles = detalles


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ValidationError):
    """Unique value already taken (e.g. a registered email)."""


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str, detalles: Optional[Any] = None) -> dict:
    body = {"error": message}
    if detalles is not None:
        body["detalles"] = jsonable_encoder(detalles)
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.detalles))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Datos inválidos", exc.errors()),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Datos inconsistentes", str(exc.orig)),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Error en servidor"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Error en servidor"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    # anything else still leaves as JSON
    app.add_exception_handler(Exception, unhandled_error_handler)
