"""Main CLI application."""

import typer
from pydantic import ValidationError

from ..common.exceptions import ConfigError
from ..common.logging import setup_logging
from ..config.settings import get_settings
from .config_cmd import config_app
from .formatters import print_error
from .scan_cmd import scan

app = typer.Typer(
    name="local-dedup",
    help="Find duplicate files in a local directory tree",
    add_completion=False,
)

# Register subcommands
app.add_typer(config_app, name="config")

# Add main commands
app.command(name="scan")(scan)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Content-based duplicate file finder."""
    try:
        settings = get_settings()
        log_level = "DEBUG" if verbose else settings.log_level
        setup_logging(level=log_level, log_file=settings.log_file)
    except (ConfigError, ValidationError) as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)
