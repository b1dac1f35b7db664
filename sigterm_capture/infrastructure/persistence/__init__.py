"""
Persistence Infrastructure

File system adapters.
"""

from .artifact_store import ARTIFACT_FILE_MODE, LocalArtifactStore

__all__ = ["ARTIFACT_FILE_MODE", "LocalArtifactStore"]
