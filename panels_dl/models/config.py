"""
Pydantic model for application configuration.
Provides validation for all settings.
"""

from pydantic import BaseModel, Field, field_validator

DEFAULT_SOURCE_URL = (
    "https://storage.googleapis.com/panels-api/data/20240916/media-1a-i-p~s"
)
DEFAULT_OUTPUT_DIR = "downloads"
DEFAULT_TIMEOUT = 60


class FetchConfig(BaseModel):
    """A validated configuration model for the application."""

    source_url: str = DEFAULT_SOURCE_URL
    output_dir: str = DEFAULT_OUTPUT_DIR
    sort_entries: bool = False
    timeout: int = DEFAULT_TIMEOUT
    dry_run: bool = False

    # Internal field not loaded from INI file
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("source_url")
    @classmethod
    def validate_source_url(cls, v: str) -> str:
        """Ensures the manifest URL is an absolute HTTP(S) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Source URL must start with http:// or https://.")
        return v

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("Output directory cannot be empty.")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Ensures a reasonable socket read timeout."""
        if v < 1 or v > 3600:
            raise ValueError("Timeout must be between 1 and 3600 seconds.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path", "dry_run"}
        return {key for key in cls.model_fields if key not in internal_fields}
