# ABOUTME: Rich table utilities for run summaries and logging status
# ABOUTME: Provides pre-configured table generators for the CLI commands

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

from sprite_composer.core.models import RunSummary


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_run_summary_table(summary: RunSummary, output_dir: str) -> Table:
    """Create the end-of-run summary for the compose command."""
    summary_data = {
        "🧍 Characters Found": str(summary.characters_found),
        "🖼️ Characters Composed": str(summary.characters_composed),
        "💾 Sprite Files": str(len(summary.written)),
        "❌ Characters Failed": str(summary.characters_failed),
        "🧩 Layers Drawn": str(summary.layers_drawn),
        "⚠️ Layers Failed": str(summary.layers_failed),
        "📁 Output Directory": output_dir,
    }

    return create_key_value_table(
        title="🎨 Composition Summary",
        data=summary_data,
        title_style="bold green",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_failures_table(summary: RunSummary) -> Table:
    """List characters that produced no sprite."""
    table = Table(
        title="[bold red]🚨 Failed Characters[/bold red]",
        box=ROUNDED,
        show_header=True,
        header_style="bold magenta",
        border_style="red",
        title_justify="left",
    )
    table.add_column("Character", style="bold")
    table.add_column("Error Type", style="yellow")
    table.add_column("Error", style="white")

    for failure in summary.failures:
        table.add_row(failure.name, failure.error_type, failure.error)

    return table


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing."""
    console.print()
    console.print(table)
    console.print()
