from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from latex_proxy.config import Settings
from latex_proxy.core.envelope import INTERNAL_ERROR_MESSAGE, error_body

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Render every error as a ``{success: false, error}`` envelope."""

    async def http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(error_body(message), status_code=exc.status_code, headers=exc.headers)

    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=None if settings.is_production else exc,
        )
        return JSONResponse(error_body(INTERNAL_ERROR_MESSAGE), status_code=500)

    app.add_exception_handler(StarletteHTTPException, http_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error)
