"""
Pydantic models for the remote image manifest.

The manifest has the shape ``{"data": {"<key>": {"dhd": "<url>", ...}, ...}}``.
Only the ``dhd`` field of each entry is kept; everything else is ignored.
"""

from pydantic import BaseModel


class ManifestEntry(BaseModel):
    """A single keyed record in the manifest."""

    dhd: str | None = None

    @property
    def image_url(self) -> str | None:
        """The high-resolution image URL, or None when absent or empty."""
        return self.dhd or None


class Manifest(BaseModel):
    """The top-level manifest document."""

    data: dict[str, ManifestEntry]

    def image_entries(self, sort: bool = False) -> list[tuple[str, str]]:
        """
        Returns (key, url) pairs for every entry with a non-empty image URL.

        Entries come back in document order unless ``sort`` is set, in which case
        they are ordered by key.
        """
        keys = sorted(self.data) if sort else list(self.data)
        return [
            (key, url)
            for key in keys
            if (url := self.data[key].image_url) is not None
        ]


def count_images(manifest: Manifest) -> int:
    """Returns the number of entries whose image URL is present and non-empty."""
    return sum(1 for entry in manifest.data.values() if entry.image_url)
