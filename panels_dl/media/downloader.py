"""
Handles the low-level downloading of a single image over HTTP.

The response body is streamed into a '.part' file next to the final path and
only renamed into place once the transfer has completed.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

import aiofiles
import aiofiles.os
import aiohttp

from panels_dl.api.client import is_success_status
from panels_dl.exceptions import FetchError, WriteError
from panels_dl.utils.path import build_output_filename, get_file_extension

log = logging.getLogger(__name__)

PART_SUFFIX = ".part"


@dataclass(frozen=True)
class DownloadResult:
    """Where an image was saved and how many bytes were written."""

    path: Path
    size_bytes: int


class Downloader:
    """A sequential image downloader that writes files atomically."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(self, session: aiohttp.ClientSession, chunk_size: int = CHUNK_SIZE):
        self._session = session
        self.chunk_size = chunk_size

    async def download_image(
        self, url: str, download_dir: Path, file_index: int
    ) -> DownloadResult:
        """
        Downloads an image and saves it as '{file_index}{ext}' in download_dir.

        An existing file with the same name is overwritten.

        Raises:
            FetchError: On transport failure or a non-2xx response status.
            WriteError: If the file cannot be created, written or moved into place.
        """
        file_name = build_output_filename(file_index, get_file_extension(url))
        destination = download_dir / file_name
        part_path = destination.with_name(file_name + PART_SUFFIX)

        log.debug(f"GET {url} -> {destination}")
        try:
            async with self._session.get(url) as response:
                if not is_success_status(response.status):
                    raise FetchError(
                        "Failed to download image: "
                        f"{response.status} {response.reason or ''}".rstrip()
                    )
                size = await self._save_body(response, part_path)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Failed to download image: {e}") from e

        try:
            await aiofiles.os.replace(part_path, destination)
        except OSError as e:
            await self._discard(part_path)
            raise WriteError(f"Failed to save image: {e}") from e

        log.debug(f"Saved {destination} ({size} bytes).")
        return DownloadResult(destination, size)

    async def _save_body(
        self, response: aiohttp.ClientResponse, part_path: Path
    ) -> int:
        """Streams the response body into part_path and returns the byte count."""
        bytes_written = 0
        try:
            async with aiofiles.open(part_path, "wb") as f:
                async for chunk in response.content.iter_chunked(self.chunk_size):
                    await f.write(chunk)
                    bytes_written += len(chunk)
        except (OSError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            await self._discard(part_path)
            raise WriteError(f"Failed to save image: {e}") from e
        except BaseException:
            await self._discard(part_path)
            raise
        return bytes_written

    @staticmethod
    async def _discard(part_path: Path) -> None:
        """Removes a partially written file, if any."""
        try:
            await aiofiles.os.remove(part_path)
            log.debug(f"Removed partial file {part_path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            log.warning(f"[yellow]Could not remove partial file {part_path}: {e}[/yellow]")
