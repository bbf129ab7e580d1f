# ABOUTME: Rich tables summarising a scrape run and the logging setup for the CLI
# ABOUTME: Statistics, top-villain ranking and logging status, all printed through print_rich_table

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

from villain_timeline.core.models import CanonicalVillain, ProcessedData
from villain_timeline.core.serialize import round_half_up


def create_key_value_table(title: str, rows: dict[str, str], accent: str = "green", key_style: str = "cyan") -> Table:
    """Two-column Field/Value table with a coloured title.

    Args:
        title: Title text, emoji allowed
        rows: Field label to display value
        accent: Colour of the title
        key_style: Style of the field column
    """
    table = Table(
        title=f"[bold {accent}]{title}[/bold {accent}]",
        title_justify="left",
        box=ROUNDED,
        border_style="cyan",
        header_style="bold magenta",
        expand=False,
    )
    table.add_column("Field", style=key_style)
    table.add_column("Value", style="white")

    for label, value in rows.items():
        table.add_row(label, str(value))
    return table


def create_statistics_table(data: ProcessedData) -> Table:
    """Create the post-scrape statistics table."""
    leader = data.stats.most_frequent
    leader_text = f"{leader.canonical_name} ({leader.frequency} appearances)" if leader else "None"

    return create_key_value_table(
        "📊 Statistics",
        {
            "📚 Series": data.series,
            "🦹 Total Villains": str(data.stats.total_villains),
            "🏆 Most Frequent": leader_text,
            "📈 Average Frequency": f"{round_half_up(data.stats.average_frequency):.2f}",
            "📅 Issues in Timeline": str(len(data.timeline)),
        },
    )


def create_top_villains_table(villains: list[CanonicalVillain], limit: int = 10) -> Table:
    """Create a ranked table of the most frequent villains.

    Args:
        villains: Registry entries in first-seen order
        limit: Maximum number of rows

    Returns:
        Table ordered by frequency, then first appearance
    """
    ranked = sorted(villains, key=lambda v: (-v.frequency, v.first_appearance))[:limit]

    table = Table(
        title="[bold magenta]🦹 Top Villains[/bold magenta]",
        title_justify="left",
        box=SIMPLE,
        border_style="cyan",
        header_style="bold magenta",
        row_styles=["", "dim"],
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Villain", style="bold red")
    table.add_column("Appearances", style="green", justify="right")
    table.add_column("First Issue", style="cyan", justify="right")

    for rank, villain in enumerate(ranked, start=1):
        table.add_row(str(rank), villain.canonical_name, str(villain.frequency), f"#{villain.first_appearance}")

    return table


_LOG_FILE_LABELS = {"main": "📝 Main Log", "json": "📊 JSON Log", "errors": "🚨 Error Log"}


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create the table shown by the logging-status command from get_logging_status() output."""
    rows = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Quieted Libraries": ", ".join(status["third_party_suppressed"]),
    }
    # Production mode has no log files
    rows.update({label: path for key, label in _LOG_FILE_LABELS.items() if (path := status["log_files"][key])})

    return create_key_value_table("🔍 Logging Configuration", rows, key_style="blue")


def print_rich_table(console: Console, table: Table) -> None:
    """Print a table with a blank line above and below."""
    console.print()
    console.print(table)
    console.print()
