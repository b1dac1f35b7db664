"""
Infrastructure Layer

Provides technical implementations for external concerns.
"""

from .aws import EcsControlPlaneClient
from .http import MetadataClient
from .persistence import LocalArtifactStore
from .shell import ShellCommandRunner

__all__ = [
    "EcsControlPlaneClient",
    "MetadataClient",
    "LocalArtifactStore",
    "ShellCommandRunner",
]
