"""Tests for mapping outcomes to response envelopes."""

from __future__ import annotations

import base64

from latex_proxy.config import Settings
from latex_proxy.core.envelope import decode_pdf, encode_pdf, error_body, to_envelope
from latex_proxy.errors import FailureKind
from latex_proxy.models import CompilationFailure, CompilationSuccess, DiagnosticRecord


class TestToEnvelope:
    def test_success(self, settings: Settings, pdf_bytes: bytes) -> None:
        status, body = to_envelope(CompilationSuccess(pdf=pdf_bytes), settings)
        assert status == 200
        assert body == {"success": True, "pdf": base64.b64encode(pdf_bytes).decode()}

    def test_success_round_trip(self, settings: Settings, pdf_bytes: bytes) -> None:
        _, body = to_envelope(CompilationSuccess(pdf=pdf_bytes), settings)
        assert decode_pdf(body) == pdf_bytes

    def test_failure_with_upstream_status(self, settings: Settings) -> None:
        failure = CompilationFailure(
            kind=FailureKind.UPSTREAM_FAILURE,
            message="! Undefined control sequence.",
            diagnostics=(DiagnosticRecord(line=12, message="Undefined control sequence.", type="error"),),
            status_code=400,
        )
        status, body = to_envelope(failure, settings)
        assert status == 400
        assert body == {
            "success": False,
            "error": "! Undefined control sequence.",
            "errors": [{"line": 12, "message": "Undefined control sequence.", "type": "error"}],
        }

    def test_failure_without_status_defaults_to_500(self, settings: Settings) -> None:
        failure = CompilationFailure(kind=FailureKind.UPSTREAM_TIMEOUT, message="Compilation timeout")
        assert to_envelope(failure, settings) == (
            500,
            {"success": False, "error": "Compilation timeout", "errors": []},
        )

    def test_failure_bounds_message_and_diagnostics(self, settings: Settings) -> None:
        records = tuple(DiagnosticRecord(line=i, message=f"e{i}", type="error") for i in range(25))
        failure = CompilationFailure(
            kind=FailureKind.UPSTREAM_FAILURE, message="x" * 5000, diagnostics=records, status_code=500
        )
        _, body = to_envelope(failure, settings)
        assert len(body["error"]) == 1000
        assert len(body["errors"]) == 20


def test_encode_pdf_is_ascii_base64(pdf_bytes: bytes) -> None:
    assert base64.b64decode(encode_pdf(pdf_bytes)) == pdf_bytes


def test_error_body() -> None:
    assert error_body("Endpoint not found") == {"success": False, "error": "Endpoint not found", "errors": []}
