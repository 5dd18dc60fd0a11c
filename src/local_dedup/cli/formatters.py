"""Rich formatting utilities for terminal output."""

from typing import Any, Optional

from humanize import naturalsize
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..detector.models import DuplicateGroup

console = Console()


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")


def print_info(message: str) -> None:
    """Print info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def print_panel(title: str, content: str, style: str = "blue") -> None:
    """Print content in a panel.

    Args:
        title: Panel title
        content: Panel content
        style: Panel border style
    """
    console.print(Panel(content, title=title, border_style=style))


def create_progress() -> Progress:
    """Create a spinner for work of unknown length.

    Returns:
        Configured Progress instance
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def create_table(title: Optional[str] = None, **kwargs: Any) -> Table:
    """Create a Rich table with common styling.

    Args:
        title: Optional table title
        **kwargs: Additional Table arguments

    Returns:
        Configured Table instance
    """
    return Table(title=title, show_header=True, header_style="bold cyan", **kwargs)


def groups_table(groups: list[DuplicateGroup], limit: Optional[int] = None) -> Table:
    """Render duplicate groups, one row per group.

    Args:
        groups: Groups to render
        limit: Maximum number of rows

    Returns:
        Table ready for printing
    """
    table = create_table()
    table.add_column("Group", style="cyan", width=6)
    table.add_column("Files", style="yellow", width=6)
    table.add_column("Size", style="green", width=10)
    table.add_column("Wasted", style="red", width=10)
    table.add_column("SHA-256", style="magenta", no_wrap=True)
    table.add_column("Paths", style="white")

    for group in groups[:limit]:
        table.add_row(
            str(group.group_id),
            str(group.count),
            naturalsize(group.size),
            naturalsize(group.wasted_size),
            group.hex_digest[:16],
            "\n".join(str(p) for p in group.paths),
        )

    return table
