from typing import Protocol

from latex_proxy.models import Archive, CompilationOutcome


class RemoteCompiler(Protocol):
    async def compile(self, archive: Archive) -> CompilationOutcome: ...

    async def aclose(self) -> None: ...
