"""Tests for the latex-proxy CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from latex_proxy.cli.app import app
from latex_proxy.cli.compile import _project_file_entry
from latex_proxy.errors import FailureKind
from latex_proxy.models import Archive, CompilationFailure, CompilationOutcome, CompilationSuccess, DiagnosticRecord

runner = CliRunner()


class _StubCompiler:
    def __init__(self, outcome: CompilationOutcome) -> None:
        self.outcome = outcome
        self.archives: list[Archive] = []
        self.closed = False

    async def compile(self, archive: Archive) -> CompilationOutcome:
        self.archives.append(archive)
        return self.outcome

    async def aclose(self) -> None:
        self.closed = True


@pytest.mark.parametrize(
    "args",
    [[], ["serve"], ["compile"], ["diagnose"]],
    ids=["root", "serve", "compile", "diagnose"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_project_file_entry_encodes_images(tmp_path: Path) -> None:
    image = tmp_path / "logo.PNG"
    image.write_bytes(b"\x89PNG")
    text = tmp_path / "refs.bib"
    text.write_text("@misc{a}", encoding="utf-8")

    assert _project_file_entry(image) == {"name": "logo.PNG", "content": "iVBORw==", "type": "image"}
    assert _project_file_entry(text) == {"name": "refs.bib", "content": "@misc{a}", "type": "text"}


def test_compile_writes_pdf(tmp_path: Path) -> None:
    main = tmp_path / "main.tex"
    main.write_text("\\documentclass{article}\\begin{document}Hi\\end{document}", encoding="utf-8")
    chapter = tmp_path / "chapter.tex"
    chapter.write_text("Chapter", encoding="utf-8")
    output = tmp_path / "out.pdf"
    stub = _StubCompiler(CompilationSuccess(pdf=b"%PDF-1.5"))

    with patch("latex_proxy.cli.compile._get_compiler", return_value=stub):
        result = runner.invoke(app, ["compile", str(main), "--file", str(chapter), "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b"%PDF-1.5"
    assert stub.archives[0].entries == ("main.tex", "chapter.tex")
    assert stub.closed is True


def test_compile_failure_prints_diagnostics(tmp_path: Path) -> None:
    main = tmp_path / "main.tex"
    main.write_text("\\foo", encoding="utf-8")
    failure = CompilationFailure(
        kind=FailureKind.UPSTREAM_FAILURE,
        message="! Undefined control sequence.",
        diagnostics=(DiagnosticRecord(line=1, message="Undefined control sequence.", type="error"),),
        status_code=400,
    )

    with patch("latex_proxy.cli.compile._get_compiler", return_value=_StubCompiler(failure)):
        result = runner.invoke(app, ["compile", str(main), "--output", str(tmp_path / "out.pdf")])

    assert result.exit_code == 1
    assert "Compilation failed (400)" in result.output
    assert "Undefined control sequence." in result.output
    assert not (tmp_path / "out.pdf").exists()


def test_diagnose_prints_table(tmp_path: Path) -> None:
    log = tmp_path / "main.log"
    log.write_text("! Emergency stop.\nLaTeX Warning: Label(s) may have changed.\n", encoding="utf-8")

    result = runner.invoke(app, ["diagnose", str(log)])

    assert result.exit_code == 0
    assert "Emergency stop." in result.output
    assert "(2 diagnostics)" in result.output
