"""Shape and size checks for inbound compilation requests."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from latex_proxy.config import Settings
from latex_proxy.errors import InvalidInputError, PayloadTooLargeError
from latex_proxy.models import CompilationRequest, ProjectFile

logger = logging.getLogger(__name__)

_PROJECT_FILE_FIELDS = ("name", "content", "type")

# JSON allows unpaired UTF-16 surrogates, which cannot be encoded as UTF-8.
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def replace_lone_surrogates(text: str) -> str:
    return _LONE_SURROGATE.sub("\ufffd", text)


def _to_project_file(entry: Any) -> ProjectFile | None:
    """Return a ``ProjectFile`` or ``None`` when a required field is missing or empty."""
    if not isinstance(entry, Mapping):
        return None
    values = [entry.get(key) for key in _PROJECT_FILE_FIELDS]
    if not all(isinstance(v, str) and v for v in values):
        return None
    name, content, kind = (replace_lone_surrogates(v) for v in values)
    try:
        return ProjectFile.model_validate({"name": name, "content": content, "type": kind})
    except ValidationError:
        return None


def validate_request(payload: Any, settings: Settings) -> CompilationRequest:
    """Validate a decoded JSON body and normalize it into a ``CompilationRequest``.

    Raises ``InvalidInputError`` for a missing/empty ``latexCode`` or a bad
    ``projectFiles`` list, and ``PayloadTooLargeError`` when ``latexCode``
    exceeds ``settings.max_source_chars``. Malformed project file entries are
    dropped without failing the request.
    """
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Valid LaTeX code is required")

    latex_code = payload.get("latexCode")
    if not isinstance(latex_code, str) or not latex_code:
        raise InvalidInputError("Valid LaTeX code is required")

    if len(latex_code) > settings.max_source_chars:
        raise PayloadTooLargeError("LaTeX code is too large")

    raw_files = payload.get("projectFiles")
    if raw_files is None:
        raw_files = []
    if not isinstance(raw_files, list) or len(raw_files) > settings.max_project_files:
        raise InvalidInputError("Invalid project files")

    project_files: list[ProjectFile] = []
    for index, entry in enumerate(raw_files):
        project_file = _to_project_file(entry)
        if project_file is None:
            logger.debug("Dropping project file #%d: missing name, content or type", index)
            continue
        project_files.append(project_file)

    return CompilationRequest(
        latex_code=replace_lone_surrogates(latex_code),
        project_files=tuple(project_files),
    )
