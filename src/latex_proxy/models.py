from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from latex_proxy.errors import FailureKind

IMAGE_KIND = "image"


class ProjectFile(BaseModel):
    """An auxiliary file shipped next to the main document.

    ``kind`` is ``"image"`` for base64-encoded binary content; any other value
    is treated as plain text.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    content: str = Field(min_length=1)
    kind: str = Field(min_length=1, alias="type")

    @property
    def is_binary(self) -> bool:
        return self.kind == IMAGE_KIND


class CompilationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    latex_code: str = Field(min_length=1)
    project_files: tuple[ProjectFile, ...] = ()


class DiagnosticRecord(BaseModel):
    """One error or warning from a compiler log.

    ``message`` is not length-checked here; ``parse_latex_log`` truncates it to
    ``Settings.max_diagnostic_message_chars``.
    """

    model_config = ConfigDict(frozen=True)

    line: int = Field(default=0, ge=0)
    message: str
    type: Literal["error", "warning"]


@dataclass(frozen=True)
class Archive:
    """A finalized gzip-compressed tar archive, ready to be uploaded once."""

    data: bytes
    entries: tuple[str, ...]
    filename: str = "project.tar.gz"
    content_type: str = "application/gzip"

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class CompilationSuccess:
    pdf: bytes


@dataclass(frozen=True)
class CompilationFailure:
    kind: FailureKind
    message: str
    diagnostics: tuple[DiagnosticRecord, ...] = field(default_factory=tuple)
    status_code: int | None = None


CompilationOutcome = CompilationSuccess | CompilationFailure
