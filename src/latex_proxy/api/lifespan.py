from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from latex_proxy.api.dependencies import shutdown_compiler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("LaTeX proxy ready (environment: %s)", app.state.settings.environment)
    yield
    # uvicorn has already drained in-flight requests when shutdown runs.
    logger.info("Shutdown signal received, shutting down gracefully")
    await shutdown_compiler()
