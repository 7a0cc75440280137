"""
The main orchestrator: fetches the manifest, prepares the output directory and
downloads every image in sequence.
"""

import logging
from pathlib import Path

from rich.markup import escape

from panels_dl.api.client import ManifestClient, create_session
from panels_dl.cli.progress_manager import ProgressManager
from panels_dl.exceptions import FetchError, WriteError
from panels_dl.media import Downloader
from panels_dl.models.config import FetchConfig
from panels_dl.models.manifest import count_images
from panels_dl.models.stats import DownloadStats
from panels_dl.utils.path import (
    build_output_filename,
    ensure_directory,
    get_file_extension,
)

log = logging.getLogger(__name__)


class DownloadManager:
    """
    Orchestrates a single run.

    Failures while fetching or parsing the manifest, or while preparing the
    output directory, propagate to the caller and abort the run. Failures on an
    individual image are logged, counted and skipped.
    """

    def __init__(self, config: FetchConfig, progress_manager: ProgressManager):
        self.config = config
        self.progress_manager = progress_manager
        self.stats = DownloadStats(dry_run=config.dry_run)

    async def execute_downloads(self) -> DownloadStats:
        """Runs the whole batch and returns the collected statistics."""
        async with create_session(self.config.timeout) as session:
            client = ManifestClient(session, self.config.source_url)

            log.info(f"Fetching data from: [dim]{escape(client.source_url)}[/dim]")
            manifest = await client.fetch_manifest()

            self.stats.images_total = count_images(manifest)
            log.info(f"Total images to download: {self.stats.images_total}")

            entries = manifest.image_entries(sort=self.config.sort_entries)

            if self.config.dry_run:
                self._report_dry_run(entries)
                return self.stats

            download_dir = Path(self.config.output_dir)
            if ensure_directory(download_dir):
                log.info(f"Created directory: {escape(str(download_dir))}")

            self.progress_manager.initialize_session(self.stats.images_total)
            downloader = Downloader(session)
            for key, url in entries:
                await self._download_entry(downloader, key, url, download_dir)

        return self.stats

    async def _download_entry(
        self, downloader: Downloader, key: str, url: str, download_dir: Path
    ) -> None:
        """Downloads one image; the index only advances on success."""
        try:
            result = await downloader.download_image(
                url, download_dir, self.stats.next_index
            )
        except (FetchError, WriteError) as e:
            self.stats.record_failure(f"{key}: {e}")
            log.error(f"[red]✗ Error downloading image '{escape(key)}': {escape(str(e))}[/red]")
            return

        self.stats.record_success(result.size_bytes)
        self.progress_manager.advance()

    def _report_dry_run(self, entries: list[tuple[str, str]]) -> None:
        """Lists the files a real run would write, without touching the disk."""
        for index, (key, url) in enumerate(entries, start=1):
            file_name = build_output_filename(index, get_file_extension(url))
            self.progress_manager.log_message(
                f"  {escape(key)} -> {escape(str(Path(self.config.output_dir) / file_name))}"
            )
