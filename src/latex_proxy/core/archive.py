"""Pack a compilation request into a deterministic ``.tar.gz`` archive."""

from __future__ import annotations

import base64
import gzip
import io
import logging
import tarfile

from latex_proxy.config import Settings
from latex_proxy.errors import PayloadTooLargeError
from latex_proxy.models import Archive, CompilationRequest, ProjectFile

logger = logging.getLogger(__name__)


def decode_binary_content(content: str) -> bytes | None:
    """Decode base64 file content, ignoring whitespace. Returns ``None`` when malformed."""
    cleaned = "".join(content.split())
    try:
        return base64.b64decode(cleaned, validate=True)
    except ValueError:
        return None


def _file_payload(project_file: ProjectFile, settings: Settings) -> bytes | None:
    if project_file.is_binary:
        data = decode_binary_content(project_file.content)
        if data is None:
            logger.debug("Skipping %s: content is not valid base64", project_file.name)
            return None
        if len(data) > settings.max_binary_file_bytes:
            logger.debug("Skipping %s: %d bytes exceeds binary file limit", project_file.name, len(data))
            return None
        return data

    if len(project_file.content) > settings.max_text_file_chars:
        logger.debug("Skipping %s: text file exceeds size limit", project_file.name)
        return None
    return project_file.content.encode("utf-8")


def _add_entry(tar: tarfile.TarFile, name: str, data: bytes) -> None:
    # TarInfo defaults (mtime 0, mode 0o644, uid/gid 0) keep the output reproducible.
    info = tarfile.TarInfo(name=name)
    info.size = len(data)
    tar.addfile(info, io.BytesIO(data))


def build_archive(request: CompilationRequest, settings: Settings) -> Archive:
    """Write the entry point document and the project files into a gzip tarball.

    The main document always comes first, followed by project files in input
    order. Files that cannot be decoded or exceed their per-kind ceiling are
    skipped. Raises ``PayloadTooLargeError`` when the finished archive is larger
    than ``settings.max_archive_bytes``.
    """
    entries: list[str] = []
    buffer = io.BytesIO()

    with gzip.GzipFile(fileobj=buffer, mode="wb", mtime=0) as gz, tarfile.open(fileobj=gz, mode="w") as tar:
        _add_entry(tar, settings.entry_point, request.latex_code.encode("utf-8"))
        entries.append(settings.entry_point)

        for project_file in request.project_files:
            data = _file_payload(project_file, settings)
            if data is None:
                continue
            _add_entry(tar, project_file.name, data)
            entries.append(project_file.name)

    archive = Archive(data=buffer.getvalue(), entries=tuple(entries))
    if archive.size > settings.max_archive_bytes:
        raise PayloadTooLargeError("Project size exceeds limit")

    logger.debug("Built archive with %d entries (%d bytes)", len(archive.entries), archive.size)
    return archive
