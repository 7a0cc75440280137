"""
Media Layer.

This package is responsible for downloading images and writing them to disk.
"""

from .downloader import Downloader, DownloadResult

__all__ = ["DownloadResult", "Downloader"]
