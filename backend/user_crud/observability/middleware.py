from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_crud.schemas.common import error_response

from .metrics import UNMATCHED_ROUTE, observe_request

logger = structlog.get_logger("user_crud.http")


async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.perf_counter()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=str(request.url.path),
    )
    try:
        response = await call_next(request)
    except Exception:
        duration = time.perf_counter() - start
        observe_request(_route_label(request), request.method, 500, duration)
        logger.exception(
            "request.error",
            status_code=500,
            duration_ms=round(duration * 1000, 2),
        )
        structlog.contextvars.clear_contextvars()
        raise

    duration = time.perf_counter() - start
    observe_request(_route_label(request), request.method, response.status_code, duration)
    logger.info(
        "request.completed",
        status_code=response.status_code,
        duration_ms=round(duration * 1000, 2),
    )
    response.headers["X-Request-Id"] = request_id
    structlog.contextvars.clear_contextvars()
    return response


def _route_label(request: Request) -> str:
    # route template, so /users/1 and /users/2 share a series
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def register_request_middleware(app: FastAPI) -> None:
    app.middleware("http")(request_context_middleware)


def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.info("request.invalid", error_count=len(errors))
    return error_response(
        "VALIDATION_ERROR",
        "Request validation failed",
        status.HTTP_400_BAD_REQUEST,
        request_id=_request_id(request),
        details={"errors": errors},
    )


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request.unhandled_exception",
        exc_type=type(exc).__name__,
        error=str(exc),
    )
    return error_response(
        "INTERNAL_ERROR",
        "Internal Server Error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        request_id=_request_id(request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
