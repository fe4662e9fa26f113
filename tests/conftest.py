"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from latex_proxy.config import Settings

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the process environment."""
    return Settings()


@pytest.fixture
def minimal_document() -> str:
    return "\\documentclass{article}\\begin{document}Hi\\end{document}"


@pytest.fixture
def pdf_bytes() -> bytes:
    return b"%PDF-1.5\n\x00\xff\xfe binary body\n%%EOF"
