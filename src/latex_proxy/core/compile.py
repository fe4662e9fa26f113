import logging
from typing import Any

from latex_proxy.config import Settings
from latex_proxy.core.archive import build_archive
from latex_proxy.core.ports.compiler import RemoteCompiler
from latex_proxy.core.validation import validate_request
from latex_proxy.errors import GatewayError
from latex_proxy.models import CompilationFailure, CompilationOutcome

logger = logging.getLogger(__name__)


async def compile_document(compiler: RemoteCompiler, payload: Any, settings: Settings) -> CompilationOutcome:
    """Validate, pack and forward one compilation request.

    Local validation and size failures are returned as a ``CompilationFailure``
    without contacting the remote compiler.
    """
    try:
        request = validate_request(payload, settings)
        archive = build_archive(request, settings)
    except GatewayError as exc:
        logger.info("Rejected compilation request (%s): %s", exc.kind.value, exc.message)
        return CompilationFailure(kind=exc.kind, message=exc.message, status_code=exc.status_code)

    logger.info("Forwarding archive with %d entries (%d bytes)", len(archive.entries), archive.size)
    outcome = await compiler.compile(archive)
    if isinstance(outcome, CompilationFailure):
        logger.warning(
            "Compilation failed (%s, status=%s): %s",
            outcome.kind.value,
            outcome.status_code,
            outcome.message[:200],
        )
    return outcome
