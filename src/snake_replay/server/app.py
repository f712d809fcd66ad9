"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from snake_replay.config import ServiceConfig
from snake_replay.server.models import MessageResponse
from snake_replay.server.routes import router

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = "Method not allowed."
MALFORMED_BODY = "Malformed request body."
INTERNAL_ERROR = "Internal server error."


def _envelope(message: str) -> dict:
    return MessageResponse(message=message).model_dump()


async def _http_error(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    message = METHOD_NOT_ALLOWED if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(message),
        headers=exc.headers,
    )


async def _malformed_body(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    logger.warning("Malformed body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content=_envelope(MALFORMED_BODY))


async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s.", request.url.path)
    return JSONResponse(status_code=500, content=_envelope(INTERNAL_ERROR))


def create_app(config: ServiceConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(title="Snake Replay API", version="0.1.0")
    app.state.config = config if config is not None else ServiceConfig()
    app.include_router(router)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _malformed_body)
    app.add_exception_handler(Exception, _internal_error)
    return app
