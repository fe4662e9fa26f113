from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from latex_proxy.compiler.latexonline import LatexOnlineCompiler
from latex_proxy.config import Settings
from latex_proxy.core.ports.compiler import RemoteCompiler

_compiler: LatexOnlineCompiler | None = None


def get_app_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


async def get_compiler(request: Request) -> AsyncIterator[RemoteCompiler]:
    """Yield the shared ``RemoteCompiler``, creating it lazily on first call."""
    global _compiler  # noqa: PLW0603
    if _compiler is None:
        _compiler = LatexOnlineCompiler(get_app_settings(request))
    yield _compiler


async def shutdown_compiler() -> None:
    global _compiler  # noqa: PLW0603
    if _compiler is not None:
        await _compiler.aclose()
        _compiler = None
