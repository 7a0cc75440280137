"""
Utilities for handling output paths and deriving file names from image URLs.
"""

import logging
from pathlib import Path

from pathvalidate import sanitize_filename

from panels_dl.exceptions import DirectoryError

log = logging.getLogger(__name__)


def strip_query_string(url: str) -> str:
    """Removes everything from the first '?' onward."""
    return url.split("?", 1)[0]


def get_file_extension(url: str) -> str:
    """
    Derives the file extension (including the dot) from the last path component
    of a URL, ignoring any query string. Returns '' if there is none.
    """
    last_component = strip_query_string(url).rsplit("/", 1)[-1]
    dot = last_component.rfind(".")
    if dot == -1:
        return ""
    return last_component[dot:]


def build_output_filename(index: int, extension: str) -> str:
    """Composes the '{index}{extension}' file name, safe on any platform."""
    return sanitize_filename(f"{index}{extension}", platform="universal")


def ensure_directory(directory_path: Path) -> bool:
    """
    Creates a single directory level if it does not already exist.

    Returns:
        True if the directory was created, False if it already existed.

    Raises:
        DirectoryError: If the path is occupied by a non-directory or cannot be
        created (including when its parent does not exist).
    """
    if directory_path.exists():
        if not directory_path.is_dir():
            raise DirectoryError(
                f"'{directory_path}' exists but is not a directory."
            )
        return False

    try:
        directory_path.mkdir()
    except OSError as e:
        raise DirectoryError(
            f"Failed to create directory '{directory_path}': {e}"
        ) from e
    log.debug(f"Created output directory {directory_path.resolve()}")
    return True
