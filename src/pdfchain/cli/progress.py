"""
Rich console output helpers for the pdfchain CLI.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pdfchain.core.pipeline.validator import WarningType

# Global console instance
console = Console()

WARNING_STYLES = {
    WarningType.ERROR: "red",
    WarningType.WARNING: "yellow",
    WarningType.SUGGESTION: "cyan",
}


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]![/yellow] {message}")


def print_table(
    title: str,
    columns: list,
    rows: list,
    show_header: bool = True,
) -> None:
    """
    Print a formatted table.

    Args:
        title: Table title
        columns: List of column names
        rows: List of row data (each row is a list of values)
        show_header: Whether to show column headers
    """
    table = Table(title=title, show_header=show_header)

    for col in columns:
        table.add_column(col)

    for row in rows:
        table.add_row(*[str(v) for v in row])

    console.print(table)


def print_validation_warnings(warnings: list) -> None:
    """Print validation findings, colored by severity."""
    for warning in warnings:
        style = WARNING_STYLES.get(warning.type, "white")
        console.print(f"  [{style}]{warning.type.value}[/{style}]: {warning.message}")


def print_summary(
    title: str,
    stats: dict,
    style: str = "blue",
) -> None:
    """
    Print a summary panel with statistics.

    Args:
        title: Summary title
        stats: Dictionary of stat names to values
        style: Border style color
    """
    lines = []
    for key, value in stats.items():
        if isinstance(value, float):
            lines.append(f"[bold]{key}:[/bold] {value:.1f}")
        else:
            lines.append(f"[bold]{key}:[/bold] {value}")

    console.print(Panel("\n".join(lines), title=title, border_style=style))
