"""
Tests for the FastAPI host and its lifespan.
"""

from unittest.mock import AsyncMock, Mock

from fastapi.testclient import TestClient

from helpers import FakeCommandRunner, FakeControlPlane, FakeMetadataPort
from sigterm_capture import __version__
from sigterm_capture.domain.value_objects import ShutdownState, Verdict
from sigterm_capture.infrastructure.dependencies import build_coordinator
from sigterm_capture.interfaces.http import create_app


class TestRestApp:
    """Tests for the HTTP host."""

    def test_root(self, settings):
        coordinator = build_coordinator(
            settings,
            metadata_port=FakeMetadataPort(),
            control_plane_port=FakeControlPlane(),
            command_runner=FakeCommandRunner(),
        )

        with TestClient(create_app(settings, coordinator=coordinator)) as client:
            response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"service": "sigterm-capture", "version": __version__}

    def test_health_while_running(self, settings):
        coordinator = build_coordinator(
            settings,
            metadata_port=FakeMetadataPort(),
            control_plane_port=FakeControlPlane(),
            command_runner=FakeCommandRunner(),
        )

        with TestClient(create_app(settings, coordinator=coordinator)) as client:
            response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["state"] == "running"
        assert body["version"] == __version__
        assert body["uptime_seconds"] >= 0

    def test_health_while_shutting_down(self, settings):
        coordinator = Mock()
        coordinator.is_shutting_down.return_value = True
        coordinator.state = ShutdownState.CLASSIFYING
        coordinator.run_with_grace_period = AsyncMock(return_value=None)

        with TestClient(create_app(settings, coordinator=coordinator)) as client:
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "shutting_down"
        assert response.json()["state"] == "classifying"

    def test_lifespan_shutdown_runs_pipeline(self, settings):
        coordinator = Mock()
        coordinator.is_shutting_down.return_value = False
        coordinator.state = ShutdownState.RUNNING
        coordinator.run_with_grace_period = AsyncMock(return_value=Verdict.EXPECTED)

        with TestClient(create_app(settings, coordinator=coordinator)):
            coordinator.run_with_grace_period.assert_not_awaited()

        coordinator.run_with_grace_period.assert_awaited_once()

    def test_default_wiring_outside_ecs(self, settings, tmp_path):
        """Without a metadata endpoint the shutdown is indeterminate and writes nothing."""
        settings = settings.model_copy(update={"metadata_uri": None})
        app = create_app(settings)

        with TestClient(app) as client:
            assert client.get("/health").status_code == 200
            coordinator = app.state.coordinator

        assert coordinator.state == ShutdownState.EXITED
        assert coordinator.verdict == Verdict.INDETERMINATE
        assert list(tmp_path.iterdir()) == []
