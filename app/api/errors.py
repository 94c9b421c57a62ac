from __future__ import annotations

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import AppError, InternalError

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def error_payload(error: AppError) -> dict[str, dict[str, str]]:
    return {"detail": {"code": error.code, "message": error.message}}


def _error_response(error: AppError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error_payload(error))


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log("request_failed", code=exc.code, status_code=exc.status_code, reason=exc.message)
    return _error_response(exc)


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("database_error", error_type=type(exc).__name__, exc_info=exc)
    return _error_response(InternalError())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", error_type=type(exc).__name__, exc_info=exc)
    return _error_response(InternalError())


async def bind_request_context(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.middleware("http")(bind_request_context)
