"""Wire representation of compilation outcomes."""

from __future__ import annotations

import base64
from typing import Any

from latex_proxy.config import Settings
from latex_proxy.models import CompilationOutcome, CompilationSuccess

DEFAULT_ERROR_STATUS = 500
INTERNAL_ERROR_MESSAGE = "Internal server error"


def encode_pdf(pdf: bytes) -> str:
    return base64.b64encode(pdf).decode("ascii")


def decode_pdf(envelope: dict[str, Any]) -> bytes:
    """Recover the PDF bytes from a success envelope."""
    return base64.b64decode(envelope["pdf"])


def error_body(message: str) -> dict[str, Any]:
    return {"success": False, "error": message, "errors": []}


def to_envelope(outcome: CompilationOutcome, settings: Settings) -> tuple[int, dict[str, Any]]:
    """Map an outcome to ``(status_code, body)``."""
    if isinstance(outcome, CompilationSuccess):
        return 200, {"success": True, "pdf": encode_pdf(outcome.pdf)}

    errors = [record.model_dump() for record in outcome.diagnostics[: settings.max_diagnostics]]
    body = {
        "success": False,
        "error": outcome.message[: settings.max_error_chars],
        "errors": errors,
    }
    return outcome.status_code or DEFAULT_ERROR_STATUS, body
