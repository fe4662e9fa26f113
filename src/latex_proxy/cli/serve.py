from typing import Annotated

import typer
from rich.console import Console

from latex_proxy.config import configure_logging, get_settings

console = Console()


def serve(
    host: Annotated[str, typer.Option(help="Interface to bind.")] = "0.0.0.0",
    port: Annotated[int | None, typer.Option(help="Port to listen on (defaults to $PORT or 3001).")] = None,
) -> None:
    """Start the compilation API server."""
    import uvicorn

    from latex_proxy.api.app import create_app

    settings = get_settings()
    configure_logging(settings)
    app = create_app(settings)
    bind_port = port if port is not None else settings.port

    console.print(f"[green]Starting LaTeX proxy on {host}:{bind_port}[/green]")
    console.print(f"Environment: {settings.environment}")
    uvicorn.run(app, host=host, port=bind_port, log_level=settings.log_level.lower())
