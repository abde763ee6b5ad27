"""Translate exceptions into the JSON error envelope"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import config
from app.utils.exceptions import AppException, ErrorCode, code_for_status
from app.utils.responses import error_response

logger = logging.getLogger(__name__)


def _log(request: Request, status_code: int, message: str, exc: Exception = None):
    if status_code >= 500:
        logger.error(f"Server Error: {message} [{request.method} {request.url.path}]", exc_info=exc)
    else:
        logger.warning(f"Client Error: {message} [{request.method} {request.url.path}]")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, AppException):
        code, details = exc.code, exc.details
    else:
        code, details = code_for_status(exc.status_code), None
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND and not isinstance(exc, AppException):
        message = "Resource not found"
    _log(request, exc.status_code, message)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_response(code.value, message, details)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    _log(request, status.HTTP_400_BAD_REQUEST, "Validation error")
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(error_response(ErrorCode.VALIDATION_ERROR.value, "Validation error", details)),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    _log(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error occurred", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(ErrorCode.DATABASE_ERROR.value, "Database error occurred"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    _log(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", exc)
    details = repr(exc) if config.APP_ENV == "development" else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(ErrorCode.INTERNAL_ERROR.value, "Internal server error", details),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
