from latex_proxy.core.archive import build_archive
from latex_proxy.core.compile import compile_document
from latex_proxy.core.diagnostics import limit_diagnostics, parse_latex_log
from latex_proxy.core.envelope import decode_pdf, to_envelope
from latex_proxy.core.validation import validate_request

__all__ = [
    "build_archive",
    "compile_document",
    "decode_pdf",
    "limit_diagnostics",
    "parse_latex_log",
    "to_envelope",
    "validate_request",
]
