"""Client for the LaTeX.Online compilation service."""

from __future__ import annotations

import logging

import httpx

from latex_proxy.config import Settings
from latex_proxy.core.diagnostics import limit_diagnostics, parse_latex_log
from latex_proxy.errors import FailureKind
from latex_proxy.models import Archive, CompilationFailure, CompilationOutcome, CompilationSuccess, DiagnosticRecord

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Compilation timeout"
UNAVAILABLE_MESSAGE = "Service temporarily unavailable"
GENERIC_FAILURE_MESSAGE = "Compilation failed"


class ResponseTooLargeError(httpx.HTTPError):
    """The remote service sent more than ``max_upstream_body_bytes``."""


def build_client(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.upstream_timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        transport=transport,
    )


class LatexOnlineCompiler:
    """Posts archives to LaTeX.Online and converts the reply into an outcome.

    Implements the ``RemoteCompiler`` protocol. Exactly one request is made per
    ``compile`` call; failures are reported, never retried.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = build_client(self._settings)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def compile(self, archive: Archive) -> CompilationOutcome:
        if archive.size > self._settings.max_upstream_body_bytes:
            return CompilationFailure(kind=FailureKind.TRANSPORT_ERROR, message=GENERIC_FAILURE_MESSAGE)
        try:
            status_code, body = await self._post(archive)
        except httpx.TimeoutException:
            logger.warning("Remote compiler timed out after %.0fs", self._settings.upstream_timeout_seconds)
            return CompilationFailure(kind=FailureKind.UPSTREAM_TIMEOUT, message=TIMEOUT_MESSAGE)
        except httpx.ConnectError as exc:
            logger.warning("Remote compiler unreachable: %s", exc)
            return CompilationFailure(kind=FailureKind.UPSTREAM_UNREACHABLE, message=UNAVAILABLE_MESSAGE)
        except httpx.HTTPError as exc:
            logger.warning("Remote compiler request failed: %s", exc)
            return CompilationFailure(kind=FailureKind.TRANSPORT_ERROR, message=GENERIC_FAILURE_MESSAGE)

        if 200 <= status_code < 300:
            return CompilationSuccess(pdf=body)
        return self._failure_from_log(status_code, body)

    async def _post(self, archive: Archive) -> tuple[int, bytes]:
        client = self._get_client()
        files = {"file": (archive.filename, archive.data, archive.content_type)}
        params = {"command": self._settings.compiler_command, "target": self._settings.entry_point}
        limit = self._settings.max_upstream_body_bytes

        async with client.stream("POST", self._settings.compiler_url, params=params, files=files) as response:
            chunks: list[bytes] = []
            received = 0
            async for chunk in response.aiter_bytes():
                received += len(chunk)
                if received > limit:
                    raise ResponseTooLargeError(f"Response body exceeds {limit} bytes")
                chunks.append(chunk)
            return response.status_code, b"".join(chunks)

    def _failure_from_log(self, status_code: int, body: bytes) -> CompilationFailure:
        log = body.decode("utf-8", errors="replace")
        message = log[: self._settings.max_error_chars] if log else GENERIC_FAILURE_MESSAGE
        diagnostics: tuple[DiagnosticRecord, ...] = ()
        try:
            diagnostics = limit_diagnostics(
                parse_latex_log(log, self._settings.max_diagnostic_message_chars),
                self._settings.max_diagnostics,
            )
        except Exception:
            logger.exception("Could not parse compiler log")
        logger.warning("Remote compiler returned %d with %d diagnostic(s)", status_code, len(diagnostics))
        return CompilationFailure(
            kind=FailureKind.UPSTREAM_FAILURE,
            message=message,
            diagnostics=diagnostics,
            status_code=status_code,
        )
