"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that define the core
data structures used throughout the application: the manifest, configuration
and run statistics.
"""

from .config import FetchConfig
from .manifest import Manifest, ManifestEntry, count_images
from .stats import DownloadStats

__all__ = ["DownloadStats", "FetchConfig", "Manifest", "ManifestEntry", "count_images"]
