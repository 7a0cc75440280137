"""
Dataclass for tracking download session statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class DownloadStats:
    """Tracks the counters of a single download run."""

    images_total: int = 0
    images_downloaded: int = 0
    images_failed: int = 0
    total_size_downloaded: int = 0
    dry_run: bool = False
    failures: list[str] = field(default_factory=list)
    _start_time: float = field(default=0.0, repr=False)

    def __post_init__(self):
        self._start_time = time.monotonic()

    @property
    def next_index(self) -> int:
        """The sequential index the next successful download will be saved under."""
        return self.images_downloaded + 1

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._start_time

    @property
    def has_failures(self) -> bool:
        return self.images_failed > 0

    def record_success(self, size_bytes: int) -> None:
        self.images_downloaded += 1
        self.total_size_downloaded += size_bytes

    def record_failure(self, message: str) -> None:
        self.images_failed += 1
        self.failures.append(message)

    def summary_line(self) -> str:
        """The plain-text summary printed at the end of a run."""
        return (
            f"{self.images_downloaded}/{self.images_total} images downloaded "
            "successfully"
        )
