"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class PanelsDlError(Exception):
    """Base exception for all application-specific errors."""


class FetchError(PanelsDlError):
    """Raised when a manifest or image request fails or returns a non-2xx status."""


class ParseError(PanelsDlError):
    """Raised when the manifest body is malformed or has an unexpected shape."""


class DirectoryError(PanelsDlError):
    """Raised when the output directory cannot be created or is not a directory."""


class WriteError(PanelsDlError):
    """Raised when a downloaded image cannot be written to disk."""


class ConfigurationError(PanelsDlError):
    """Raised for issues related to configuration loading or validation."""
