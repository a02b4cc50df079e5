"""HTTP server CLI command."""

import typer
import uvicorn
from rich.console import Console

from src.authbridge.runtime.context import get_config

console = Console()


def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
) -> None:
    """Run the identity HTTP API."""
    server_config = get_config().app
    host = host or server_config.host
    port = port or server_config.port

    console.print(f"[blue]🚀 Serving authbridge on http://{host}:{port}[/blue]")
    uvicorn.run(
        "src.authbridge.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )
