"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from panels_dl.models.stats import DownloadStats
from panels_dl.utils.formatting import format_duration, format_size, format_speed


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "FetchError": [
            "• Check your internet connection.",
            "• The manifest endpoint may have moved; pass another one with --source.",
            "• Run the command again with -vv for request details.",
        ],
        "ParseError": [
            "• The source URL may not point at an image manifest.",
            "• The manifest format may have changed upstream.",
        ],
        "DirectoryError": [
            "• Make sure the parent of the output directory exists.",
            "• Remove or rename any file occupying the output path.",
            "• Choose another location with --output.",
        ],
        "ConfigurationError": [
            "• Review the values in your config file (see --show-config).",
            "• Run `panels-dl init --force` to write a fresh default config.",
        ],
        "TimeoutError": [
            "• The server stopped responding; try again later.",
            "• Raise the socket timeout with --timeout.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any], console: Console):
    """Displays the effective configuration."""
    content = ""
    for key, value in config_data.items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        content += f"{key} = {value}\n"

    source = str(config_path) if config_path.is_file() else "built-in defaults"
    console.print(
        Panel(
            Text(content.strip()),
            title=f"Configuration ([dim]{source}[/dim])",
            border_style="cyan",
        )
    )


def print_summary_panel(stats: DownloadStats, duration_s: float, console: Console):
    """Displays the final summary of the run."""
    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row(
        "✓ Downloaded:",
        f"[bold green]{stats.images_downloaded}[/bold green] / {stats.images_total}",
    )

    if stats.images_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.images_failed}[/bold red]")

    stats_table.add_row("", "")  # Spacer

    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    stats_table.add_row(
        "Avg. Speed:",
        f"[magenta]{format_speed(stats.total_size_downloaded, duration_s)}[/magenta]",
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if stats.dry_run:
        title = "🔍 [bold]Dry Run Summary[/bold]"
        border_color = "yellow"
    elif stats.has_failures:
        title = "⚠ [bold]Finished With Errors[/bold]"
        border_color = "red"
    else:
        title = "🖼 [bold]Download Complete![/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print(stats.summary_line(), markup=False, highlight=False)
