"""
Unit tests for LocalArtifactStore.
"""

import os
import stat

import pytest

from sigterm_capture.domain.value_objects import Artifact
from sigterm_capture.infrastructure.persistence.artifact_store import (
    ARTIFACT_FILE_MODE,
    LocalArtifactStore,
)


class TestLocalArtifactStore:
    """Tests for LocalArtifactStore."""

    @pytest.fixture
    def store(self, tmp_path):
        return LocalArtifactStore(tmp_path, host_id="ip-10-0-1-23")

    def test_path_for(self, store, tmp_path):
        assert store.path_for("process") == tmp_path / "status-ip-10-0-1-23-process.txt"

    @pytest.mark.asyncio
    async def test_save_writes_content(self, store):
        artifact = Artifact(name="env", content=b"PATH=/usr/bin\n")

        assert await store.save(artifact) is True
        assert store.path_for("env").read_bytes() == b"PATH=/usr/bin\n"

    @pytest.mark.asyncio
    async def test_save_is_world_readable_regardless_of_umask(self, store):
        previous = os.umask(0o077)
        try:
            await store.save(Artifact(name="env", content=b"x"))
        finally:
            os.umask(previous)

        mode = stat.S_IMODE(store.path_for("env").stat().st_mode)
        assert mode == ARTIFACT_FILE_MODE
        assert mode & stat.S_IROTH
        assert not mode & stat.S_IWOTH

    @pytest.mark.asyncio
    async def test_save_overwrites_previous(self, store, tmp_path):
        """Only the latest snapshot is kept; no extra files accumulate."""
        await store.save(Artifact(name="process", content=b"first run, longer content\n"))
        await store.save(Artifact(name="process", content=b"second\n"))
        await store.save(Artifact(name="process", content=b"second\n"))

        assert store.path_for("process").read_bytes() == b"second\n"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["status-ip-10-0-1-23-process.txt"]

    @pytest.mark.asyncio
    async def test_creates_missing_directory(self, tmp_path):
        store = LocalArtifactStore(tmp_path / "data", host_id="host")

        assert await store.save(Artifact(name="env", content=b"x")) is True
        assert (tmp_path / "data" / "status-host-env.txt").exists()

    @pytest.mark.asyncio
    async def test_write_failure_is_swallowed(self, tmp_path):
        """A file where the directory should be makes every write fail."""
        blocker = tmp_path / "data"
        blocker.write_text("not a directory")
        store = LocalArtifactStore(blocker, host_id="host")

        assert await store.save(Artifact(name="env", content=b"x")) is False
