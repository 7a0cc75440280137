"""
Main entry point for the panels-dl application.
This module handles top-level setup, exception handling, and CLI invocation.

The Typer app runs with ``standalone_mode=False`` so that exit codes and
user cancellation are mapped here rather than by Click.
"""

import asyncio
import logging
import os
import sys

import click
import typer
from rich.console import Console

from panels_dl.cli.app import EXIT_FATAL, app
from panels_dl.cli.formatters import format_error_with_suggestions
from panels_dl.exceptions import PanelsDlError


def _cancelled_by_user(error: BaseException) -> bool:
    """Click wraps Ctrl-C in an Abort whose cause is the KeyboardInterrupt."""
    if isinstance(error, (KeyboardInterrupt, asyncio.CancelledError)):
        return True
    return isinstance(error.__cause__, (KeyboardInterrupt, EOFError))


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("panels_dl")
    console = Console()

    try:
        exit_code = app(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except (typer.Abort, KeyboardInterrupt, asyncio.CancelledError) as e:
        if _cancelled_by_user(e):
            console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
            sys.exit(0)
        console.print("[yellow]Aborted.[/yellow]")
        sys.exit(EXIT_FATAL)
    except PanelsDlError as e:
        console.print(format_error_with_suggestions(e))
        sys.exit(EXIT_FATAL)
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(EXIT_FATAL)

    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
