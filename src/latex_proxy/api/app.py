from __future__ import annotations

from fastapi import FastAPI

from latex_proxy import __version__
from latex_proxy.api.errors import register_exception_handlers
from latex_proxy.api.lifespan import lifespan
from latex_proxy.api.middleware import RequestLimitsMiddleware
from latex_proxy.api.routes.compile import router as compile_router
from latex_proxy.api.routes.health import router as health_router
from latex_proxy.config import Settings, get_settings


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="LaTeX Proxy",
        description="Pack LaTeX projects and compile them on a remote service.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestLimitsMiddleware, settings=settings)
    register_exception_handlers(app, settings)

    app.include_router(health_router, include_in_schema=False)
    app.include_router(compile_router)

    return app
