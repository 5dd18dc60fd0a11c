"""Scan command."""

from pathlib import Path
from typing import Optional

import typer
from humanize import naturalsize
from pydantic import ValidationError

from ..common.exceptions import ConfigError, ScanError
from ..config.settings import Settings, get_settings
from ..detector.pipeline import DetectionPipeline
from .formatters import (
    console,
    create_progress,
    groups_table,
    print_error,
    print_info,
    print_panel,
    print_success,
    print_warning,
)


def scan(
    directory: Optional[Path] = typer.Argument(
        None, help="Directory to scan (default: current directory)"
    ),
    ext_insensitive: bool = typer.Option(
        False,
        "--ext-insensitive",
        help="Match files by size alone, ignoring extensions",
    ),
    extensions: Optional[list[str]] = typer.Option(
        None, "--extension", "-e", help="Extension to scan (repeatable)"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", help="Number of concurrent file reads"
    ),
    limit: int = typer.Option(
        20, "--limit", help="Maximum number of groups to display"
    ),
) -> None:
    """Scan a directory tree for files with identical content."""
    root = (directory or Path.cwd()).absolute()

    try:
        settings = _effective_settings(ext_insensitive, extensions, workers)
        pipeline = DetectionPipeline(settings)

        with create_progress() as progress:
            progress.add_task(f"[cyan]Scanning {root}...", total=None)
            result = pipeline.detect_duplicates(root)

    except ConfigError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)
    except ScanError as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(1)

    print_success(f"Scanned {result.files_scanned} files")

    if result.hash_failures:
        print_warning(f"{result.hash_failures} files could not be read and were skipped")

    if not result.groups:
        print_success("No duplicates found!")
        return

    summary_text = f"""
Files scanned: {result.files_scanned:,}
Files hashed: {result.hash_requests:,}
Duplicate groups: {len(result.groups):,}
Duplicate files: {result.duplicate_files:,}
Wasted space: {naturalsize(result.wasted_size)}
"""

    print_panel("Scan Summary", summary_text.strip(), style="green")

    groups = sorted(result.groups, key=lambda g: g.wasted_size, reverse=True)
    print_info(f"Top {min(limit, len(groups))} duplicate groups by wasted space:")
    console.print(groups_table(groups, limit))


def _effective_settings(
    ext_insensitive: bool,
    extensions: Optional[list[str]],
    workers: Optional[int],
) -> Settings:
    """Overlay command-line options on the configured settings."""
    overrides: dict[str, object] = {}

    if ext_insensitive:
        overrides["extension_sensitive"] = False
    if extensions:
        overrides["extensions"] = extensions
    if workers is not None:
        overrides["hash_workers"] = workers

    try:
        settings = get_settings()
        if not overrides:
            return settings
        return Settings(**{**settings.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigError(str(e)) from e
