"""
Manifest API Layer.

This package handles communication with the remote manifest endpoint.
"""

from .client import ManifestClient, create_session, parse_manifest

__all__ = ["ManifestClient", "create_session", "parse_manifest"]
