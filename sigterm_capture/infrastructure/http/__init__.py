"""
HTTP Infrastructure

HTTP client adapters for the task metadata endpoint.
"""

from .metadata_client import MetadataClient

__all__ = ["MetadataClient"]
