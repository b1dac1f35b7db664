"""
Local artifact store.

Writes artifacts to a mounted directory as
`status-{host_id}-{name}.txt`. Each write replaces the previous file
for the same host and name; only the latest snapshot is kept.
"""

import contextlib
import os
from pathlib import Path
from typing import Union

from sigterm_capture.domain.errors import PersistenceError
from sigterm_capture.domain.ports import IArtifactStorePort
from sigterm_capture.domain.value_objects import Artifact
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)

# Readable by the operator and log-collection sidecars, writable by owner only
ARTIFACT_FILE_MODE = 0o644


class LocalArtifactStore(IArtifactStorePort):
    """
    File system artifact store keyed by host identifier and artifact name.
    """

    def __init__(self, artifact_dir: Union[str, Path], host_id: str):
        """
        Initialize the artifact store.

        Args:
            artifact_dir: Directory artifacts are written to
            host_id: Host identifier (container hostname)
        """
        self.artifact_dir = Path(artifact_dir)
        self.host_id = host_id

    def path_for(self, name: str) -> Path:
        """
        Destination path for an artifact name.

        Implementation of IArtifactStorePort.path_for().
        """
        return self.artifact_dir / f"status-{self.host_id}-{name}.txt"

    async def save(self, artifact: Artifact) -> bool:
        """
        Persist an artifact.

        Implementation of IArtifactStorePort.save().

        Args:
            artifact: Artifact to persist

        Returns:
            True if written, False if the write failed
        """
        file_path = self.path_for(artifact.name)
        logger.info(
            "Writing artifact",
            artifact=artifact.name,
            file_path=str(file_path),
            size=artifact.size,
        )

        try:
            self._write(file_path, artifact.content)
        except PersistenceError as e:
            logger.error(
                "Failed to write artifact",
                artifact=artifact.name,
                file_path=str(file_path),
                error=str(e),
            )
            return False

        return True

    def _write(self, file_path: Path, content: bytes) -> None:
        """
        Replace file content and set permissions regardless of umask.

        Raises:
            PersistenceError: Any file system error
        """
        tmp_path = file_path.with_name(f".{file_path.name}.tmp")
        try:
            self.artifact_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(content)
            os.chmod(tmp_path, ARTIFACT_FILE_MODE)
            os.replace(tmp_path, file_path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write {file_path}: {e}", original_error=e) from e
