"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from src.cc_cashcard.api.router import router as cashcard_router
from src.cc_common.database import engine
from src.cc_common.errors import REQUEST_VALIDATION_ERROR_CODE, AppError, InternalError
from src.cc_common.response import error_response
from src.cc_gateway.middleware.request_log import RequestLogMiddleware

logger = logging.getLogger(__name__)

# Statuses rendered without a body.
_EMPTY_BODY_STATUSES = frozenset({401, 403, 404})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB connection. Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


def _request_id(request: Request, fallback: str) -> str:
    return getattr(request.state, "request_id", fallback)


def _error(
    request: Request,
    http_status: int,
    code: int,
    message: str,
    headers: dict[str, str] | None = None,
    data: object = None,
) -> Response:
    if http_status in _EMPTY_BODY_STATUSES:
        return Response(status_code=http_status, headers=headers)
    resp = error_response(code, message, data)
    resp.request_id = _request_id(request, resp.request_id)
    return JSONResponse(status_code=http_status, content=resp.model_dump(), headers=headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> Response:
    return _error(request, exc.http_status, exc.code, exc.message, exc.headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return _error(request, exc.status_code, exc.status_code, str(exc.detail), exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    return _error(
        request,
        400,
        REQUEST_VALIDATION_ERROR_CODE,
        "Request validation failed",
        data=jsonable_encoder(exc.errors()),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    err = InternalError()
    return _error(request, err.http_status, err.code, err.message)


app.include_router(cashcard_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
