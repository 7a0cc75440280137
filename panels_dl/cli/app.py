"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from panels_dl import __version__
from panels_dl.api.client import ManifestClient, create_session
from panels_dl.core.download_manager import DownloadManager
from panels_dl.exceptions import PanelsDlError
from panels_dl.models.config import FetchConfig
from panels_dl.models.manifest import count_images
from panels_dl.models.stats import DownloadStats
from panels_dl.storage.config_manager import ConfigManager

from .formatters import format_error_with_suggestions, print_config, print_summary_panel
from .progress_manager import ProgressManager

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("panels_dl")

EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 3

app = typer.Typer(
    name="panels-dl",
    help=(
        "Download every high-resolution image listed in the Panels wallpaper"
        " manifest. Use 'panels-dl <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "panels-dl"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_config(cli_options: dict) -> FetchConfig:
    try:
        return ConfigManager(CONFIG_FILE).load_config(cli_options)
    except PanelsDlError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=EXIT_FATAL) from e


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the effective configuration."
    ),
):
    """Panels image downloader CLI"""
    if version:
        console.print(f"[bold]panels-dl[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("panels_dl").setLevel(log_level)

    if show_config:
        config = _load_config({})
        print_config(
            CONFIG_FILE,
            config.model_dump(exclude={"config_path", "dry_run"}),
            console,
        )
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    source: str | None = typer.Option(
        None, "--source", "-s", help="Manifest URL to store in the config."
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output directory to store in the config."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config without asking."
    ),
):
    """Write a configuration file with default values."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {
        key: value
        for key, value in {"source_url": source, "output_dir": output}.items()
        if value is not None
    }
    # Validate before writing so a bad value never lands in the file.
    try:
        FetchConfig(**settings)
        ConfigManager(CONFIG_FILE).save_new_config(settings)
    except ValueError as e:
        console.print(f"[red]✗ Invalid settings: {e}[/red]")
        raise typer.Exit(code=EXIT_FATAL) from e
    except PanelsDlError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command(name="download")
def download_command(
    source: str | None = typer.Option(
        None, "--source", "-s", help="URL of the JSON manifest to read."
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Directory to save images into (created if missing, one level only).",
    ),
    sort_entries: bool | None = typer.Option(
        None,
        "--sort/--no-sort",
        help="Assign file numbers in manifest key order instead of document order.",
    ),
    timeout: int | None = typer.Option(
        None, "--timeout", help="Socket read timeout in seconds."
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Fetch the manifest and list the files without downloading anything.",
    ),
):
    """Download every image listed in the manifest."""
    cli_options = {
        key: value
        for key, value in {
            "source_url": source,
            "output_dir": output,
            "sort_entries": sort_entries,
            "timeout": timeout,
        }.items()
        if value is not None
    }
    cli_options["dry_run"] = dry_run
    config = _load_config(cli_options)

    async def _download_async() -> DownloadStats:
        async with ProgressManager(
            console=console, dry_run=config.dry_run
        ) as progress_manager:
            manager = DownloadManager(config, progress_manager)
            return await manager.execute_downloads()

    try:
        stats = asyncio.run(_download_async())
    except PanelsDlError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    print_summary_panel(stats, stats.elapsed, console)

    if stats.has_failures:
        log.debug(f"{stats.images_failed} image(s) failed: {stats.failures}")
        raise typer.Exit(code=EXIT_PARTIAL_FAILURE)


@app.command()
def count(
    source: str | None = typer.Option(
        None, "--source", "-s", help="URL of the JSON manifest to read."
    ),
):
    """Fetch the manifest and report how many images it lists."""
    config = _load_config({"source_url": source} if source else {})

    async def _count_async() -> int:
        async with create_session(config.timeout) as session:
            manifest = await ManifestClient(session, config.source_url).fetch_manifest()
        return count_images(manifest)

    try:
        total = asyncio.run(_count_async())
    except PanelsDlError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=EXIT_FATAL) from e

    console.print(f"Total images available: [bold cyan]{total}[/bold cyan]")
