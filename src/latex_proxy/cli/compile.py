"""Local compilation and log inspection commands."""

from __future__ import annotations

import asyncio
import base64
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from latex_proxy.config import configure_logging, get_settings
from latex_proxy.core.compile import compile_document
from latex_proxy.core.diagnostics import parse_latex_log
from latex_proxy.core.envelope import decode_pdf, to_envelope
from latex_proxy.core.ports.compiler import RemoteCompiler
from latex_proxy.models import IMAGE_KIND, DiagnosticRecord

console = Console()

_BINARY_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".gif", ".pdf", ".eps"})


def _render_diagnostics(records: Sequence[DiagnosticRecord]) -> None:
    table = Table(show_lines=False)
    for header in ("type", "line", "message"):
        table.add_column(header)
    for record in records:
        style = "red" if record.type == "error" else "yellow"
        table.add_row(f"[{style}]{record.type}[/{style}]", str(record.line), escape(record.message))
    console.print(table)
    console.print(f"({len(records)} diagnostics)")


def _project_file_entry(path: Path) -> dict[str, str]:
    if path.suffix.lower() in _BINARY_SUFFIXES:
        content = base64.b64encode(path.read_bytes()).decode("ascii")
        return {"name": path.name, "content": content, "type": IMAGE_KIND}
    return {"name": path.name, "content": path.read_text(encoding="utf-8"), "type": "text"}


def _get_compiler() -> RemoteCompiler:
    from latex_proxy.compiler.latexonline import LatexOnlineCompiler

    return LatexOnlineCompiler(get_settings())


def compile_file(
    main: Annotated[Path, typer.Argument(help="Main .tex document.", exists=True, dir_okay=False)],
    file: Annotated[
        list[Path] | None,
        typer.Option("--file", "-f", help="Additional project file (repeatable).", exists=True, dir_okay=False),
    ] = None,
    output: Annotated[Path, typer.Option("--output", "-o", help="Where to write the PDF.")] = Path("main.pdf"),
) -> None:
    """Compile a LaTeX document through the remote service."""
    settings = get_settings()
    configure_logging(settings)
    payload: dict[str, Any] = {
        "latexCode": main.read_text(encoding="utf-8"),
        "projectFiles": [_project_file_entry(p) for p in file or []],
    }
    compiler = _get_compiler()

    async def _run() -> tuple[int, dict[str, Any]]:
        try:
            outcome = await compile_document(compiler, payload, settings)
            return to_envelope(outcome, settings)
        finally:
            await compiler.aclose()

    status_code, envelope = asyncio.run(_run())
    if envelope["success"]:
        output.write_bytes(decode_pdf(envelope))
        console.print(f"[green]Wrote[/green] {output}")
        return

    console.print(f"[red]Compilation failed ({status_code}):[/red] {escape(envelope['error'])}")
    if envelope["errors"]:
        _render_diagnostics([DiagnosticRecord.model_validate(e) for e in envelope["errors"]])
    raise typer.Exit(1)


def diagnose(
    log_file: Annotated[Path, typer.Argument(help="LaTeX .log file to inspect.", exists=True, dir_okay=False)],
) -> None:
    """Print the errors and warnings found in a LaTeX log."""
    settings = get_settings()
    records = parse_latex_log(
        log_file.read_text(encoding="utf-8", errors="replace"),
        settings.max_diagnostic_message_chars,
    )
    _render_diagnostics(records)
