"""Configuration display command."""

import typer
from humanize import naturalsize

from ..config.settings import get_settings
from .formatters import console, create_table, print_info

config_app = typer.Typer(help="Inspect configuration settings")


@config_app.command()
def show() -> None:
    """Show current configuration."""
    settings = get_settings()

    table = create_table(title="Configuration")
    table.add_column("Setting", style="cyan", width=22)
    table.add_column("Value", style="white")

    table.add_row("Extensions", ", ".join(settings.extensions))
    table.add_row("Extension sensitive", str(settings.extension_sensitive))
    table.add_row("Chunk size", naturalsize(settings.chunk_size, binary=True))
    table.add_row("Hash workers", str(settings.hash_workers))
    table.add_row("Max in-flight reads", str(settings.max_in_flight))
    table.add_row("Queue size", str(settings.queue_size))
    table.add_row("Progress interval", str(settings.progress_interval))
    table.add_row("Log level", settings.log_level)
    table.add_row("Log file", str(settings.log_file) if settings.log_file else "None")

    console.print(table)
    print_info("Override any setting with a LOCAL_DEDUP_<NAME> environment variable")
