"""
Command line entry point for the Notevault backend.
"""

import os
import sys

import click
import uvicorn

from . import __version__
from .config import settings
from .database.cli import db
from .logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="notevault")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def cli(log_level: str) -> None:
    """Notevault CLI - run the server and manage the database."""
    configure_logging(debug=(log_level == "debug"))


cli.add_command(db)


@cli.command()
@click.option("--host", default=settings.api_host, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option("--workers", default=1, type=int, help="Number of worker processes (default: 1)")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool, workers: int) -> None:
    """Start the Notevault API server."""
    log_level = ctx.parent.params["log_level"] if ctx.parent else "info"

    logger.info(
        "Starting Notevault API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # The app module reads settings at import time
    if log_level == "debug":
        os.environ["NOTEVAULT_DEBUG"] = "true"
        os.environ["NOTEVAULT_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("NOTEVAULT_DEBUG", "false")
        os.environ.setdefault("NOTEVAULT_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "notevault.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),
                log_level=log_level,
                access_log=True,
            )
        else:
            from .api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
