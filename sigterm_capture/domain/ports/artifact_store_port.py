"""
Artifact Store Port Interface

Defines the contract for persisting diagnostic artifacts.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from sigterm_capture.domain.value_objects import Artifact


class IArtifactStorePort(ABC):
    """
    Port interface for artifact persistence.
    """

    @abstractmethod
    async def save(self, artifact: Artifact) -> bool:
        """
        Persist an artifact, replacing any previous content.

        Write failures are logged, never raised.

        Args:
            artifact: Artifact to persist

        Returns:
            True if written, False otherwise
        """
        pass

    @abstractmethod
    def path_for(self, name: str) -> Path:
        """
        Destination path for an artifact name.

        Args:
            name: Artifact name

        Returns:
            Deterministic file path
        """
        pass
