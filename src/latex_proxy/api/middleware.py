"""ASGI middleware enforcing request body size and wall-clock limits."""

from __future__ import annotations

import asyncio
import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from latex_proxy.config import Settings
from latex_proxy.core.envelope import error_body

logger = logging.getLogger(__name__)


class RequestLimitsMiddleware(BaseHTTPMiddleware):
    """Rejects oversized bodies up front and aborts requests that run too long."""

    def __init__(self, app: ASGIApp, settings: Settings) -> None:
        super().__init__(app)
        self._max_body_bytes = settings.max_request_body_bytes
        self._timeout = settings.request_timeout_seconds

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                return JSONResponse(error_body("Invalid Content-Length header"), status_code=400)
            if declared > self._max_body_bytes:
                return JSONResponse(error_body("Request body too large"), status_code=413)

        try:
            return await asyncio.wait_for(call_next(request), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.warning("Request %s %s exceeded %.0fs", request.method, request.url.path, self._timeout)
            return JSONResponse(error_body("Request timeout"), status_code=504)
