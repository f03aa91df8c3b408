"""Web server command."""

import click

from .base import ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the JSON API server.

    Examples:

        avo-forms serve

        avo-forms serve --port 3000 --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting avo-forms API...", fg="green"))
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo(f"  Docs:    http://{host}:{port}/docs")
    click.echo()

    uvicorn.run(
        create_app() if not reload else "avo_forms.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_level=ctx.obj.get("log_level", "warning").lower() if ctx.obj else "warning",
    )
