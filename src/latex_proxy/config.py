"""Runtime settings read from the environment.

Settings are resolved once per process and are read-only afterwards, so every
request sees the same limits and timeouts.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from latex_proxy import __version__

MIB = 1024 * 1024

_PRODUCTION_TIMEOUT_SECONDS = 90.0
_DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    compiler_url: str = "https://latexonline.cc/data"
    compiler_command: str = "pdflatex"
    entry_point: str = "main.tex"
    user_agent: str = f"latex-proxy/{__version__}"
    upstream_timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    request_timeout_seconds: float = 120.0
    log_level: str = "INFO"
    port: int = 3001

    max_source_chars: int = MIB
    max_project_files: int = 50
    max_text_file_chars: int = MIB
    max_binary_file_bytes: int = 10 * MIB
    max_archive_bytes: int = 50 * MIB
    max_upstream_body_bytes: int = 100 * MIB
    max_request_body_bytes: int = 50 * MIB
    max_error_chars: int = 1000
    max_diagnostics: int = 20
    max_diagnostic_message_chars: int = 200

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


class _EnvironmentOverrides(BaseModel):
    """Typed view of the ``LATEX_PROXY_*`` variables; unset or empty values keep the defaults."""

    model_config = ConfigDict(extra="ignore")

    compiler_url: str = Field(Settings.compiler_url, alias="LATEX_PROXY_COMPILER_URL")
    compiler_command: str = Field(Settings.compiler_command, alias="LATEX_PROXY_COMPILER_COMMAND")
    upstream_timeout_seconds: float | None = Field(None, alias="LATEX_PROXY_TIMEOUT_SECONDS")
    log_level: str = Field(Settings.log_level, alias="LATEX_PROXY_LOG_LEVEL")
    port: int = Field(Settings.port, alias="PORT")


def load_settings() -> Settings:
    """Build ``Settings`` from ``LATEX_PROXY_*`` environment variables.

    Raises ``pydantic.ValidationError`` (a ``ValueError``) naming the variable
    when a numeric value cannot be parsed.
    """
    environment = os.getenv("LATEX_PROXY_ENV") or os.getenv("NODE_ENV") or "development"
    overrides = _EnvironmentOverrides.model_validate({k: v for k, v in os.environ.items() if v != ""})
    if overrides.upstream_timeout_seconds is None:
        timeout = _PRODUCTION_TIMEOUT_SECONDS if environment == "production" else _DEFAULT_TIMEOUT_SECONDS
    else:
        timeout = overrides.upstream_timeout_seconds
    return Settings(
        environment=environment,
        compiler_url=overrides.compiler_url,
        compiler_command=overrides.compiler_command,
        upstream_timeout_seconds=timeout,
        log_level=overrides.log_level.upper(),
        port=overrides.port,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
