"""
Async client for fetching and decoding the image manifest.
"""

import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from panels_dl.exceptions import FetchError, ParseError
from panels_dl.models.config import DEFAULT_TIMEOUT
from panels_dl.models.manifest import Manifest

log = logging.getLogger(__name__)


def create_session(timeout: int = DEFAULT_TIMEOUT) -> aiohttp.ClientSession:
    """
    Creates the aiohttp session shared by the manifest fetch and every image
    download of a run. The caller owns it and must close it.

    Args:
        timeout: Socket read timeout in seconds. There is no total deadline so
        large images are not cut off mid-transfer.
    """
    connector = aiohttp.TCPConnector(
        limit=1,
        ttl_dns_cache=600,
        enable_cleanup_closed=True,
    )
    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(
            total=None, sock_connect=15, sock_read=timeout
        ),
        headers={"Accept-Encoding": "gzip, deflate"},
    )


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


def parse_manifest(raw: bytes | str) -> Manifest:
    """
    Decodes a manifest document.

    Raises:
        ParseError: If the body is not valid JSON or does not have the expected
        ``{"data": {...}}`` shape.
    """
    try:
        return Manifest.model_validate_json(raw)
    except ValidationError as e:
        raise ParseError(f"Failed to parse manifest: {e}") from e


class ManifestClient:
    """Fetches the manifest document from its source URL."""

    def __init__(self, session: aiohttp.ClientSession, source_url: str):
        self._session = session
        self.source_url = source_url

    async def fetch_manifest_body(self) -> bytes:
        """
        Performs the GET request for the manifest and returns the raw body.

        Raises:
            FetchError: On transport failure or a non-2xx response status.
        """
        log.debug(f"GET {self.source_url}")
        try:
            async with self._session.get(self.source_url) as response:
                if not is_success_status(response.status):
                    raise FetchError(
                        "Failed to fetch manifest: "
                        f"{response.status} {response.reason or ''}".rstrip()
                    )
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Failed to fetch manifest: {e}") from e

        log.debug(f"Fetched manifest ({len(body)} bytes).")
        return body

    async def fetch_manifest(self) -> Manifest:
        """Fetches and decodes the manifest."""
        body = await self.fetch_manifest_body()
        return parse_manifest(body)
