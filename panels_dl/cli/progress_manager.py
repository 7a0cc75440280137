"""
Manages the Rich progress bar shown while images are downloaded one by one.
"""

import logging

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
)

log = logging.getLogger("panels_dl")


class ProgressManager:
    """
    Wraps a single Rich progress bar sized to the number of images in the
    manifest. Log records printed through the shared console appear above it.
    """

    def __init__(self, console: Console, dry_run: bool = False):
        self.console = console
        self.dry_run = dry_run

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[{task.completed:.0f}/{task.total:.0f}]", markup=False),
            BarColumn(bar_width=None),
            "[progress.percentage]{task.percentage:>6.2f}%",
            TimeRemainingColumn(),
            console=console,
            transient=False,
        )
        self._task_id: TaskID | None = None
        self._started = False

    def log_message(self, message: str):
        """Prints directly in dry-run mode, otherwise logs at INFO."""
        if self.dry_run:
            self.console.print(f"[cyan]{message}[/cyan]")
        else:
            log.info(message)

    def initialize_session(self, total_images: int):
        """Creates the progress bar once the image count is known."""
        if self.dry_run:
            return
        self._task_id = self.progress.add_task(
            "Downloading", total=total_images, start=True
        )
        if not self._started:
            self.progress.start()
            self._started = True

    def advance(self, count: int = 1):
        if self._task_id is not None and not self.dry_run:
            self.progress.advance(self._task_id, count)

    @property
    def completed(self) -> int:
        if self._task_id is None:
            return 0
        task = next(t for t in self.progress.tasks if t.id == self._task_id)
        return int(task.completed)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._started:
            self.progress.stop()
            self._started = False
