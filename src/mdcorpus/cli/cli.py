"""CLI entrypoint: Typer app definition, logging setup, and command registration"""

import logging
import sys
from typing import Annotated, Optional

import structlog
import typer

from mdcorpus.cli.commands import (
    _settings, check_cmd, export_cmd, links_cmd, list_cmd, show_cmd, tags_cmd,
)


def configure_logging(level: str) -> None:
    """Route structlog events at or above level to stderr."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
    )


app = typer.Typer(name="mdcorpus", no_args_is_help=True, help="Validate and query a Markdown/MDX content collection")


@app.callback()
def main(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")] = None,
    ):
    settings = _settings(overrides={"log_level": log_level})
    configure_logging(settings.log_level)


app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="tags")(tags_cmd)
app.command(name="links")(links_cmd)
app.command(name="export")(export_cmd)
