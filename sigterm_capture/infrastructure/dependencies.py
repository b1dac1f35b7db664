"""
Dependency wiring.

Builds the shutdown coordinator and its adapters from Settings.
"""

from typing import List, Optional

from botocore.exceptions import BotoCoreError

from sigterm_capture.application.services import (
    DiagnosticCapturer,
    MetadataResolver,
    ShutdownCoordinator,
    StatusClassifier,
)
from sigterm_capture.domain.errors import ControlPlaneFaultError
from sigterm_capture.domain.ports import (
    IArtifactStorePort,
    ICommandRunnerPort,
    IControlPlanePort,
    IMetadataPort,
)
from sigterm_capture.domain.services import StopReasonRule
from sigterm_capture.domain.value_objects import TaskRecord
from sigterm_capture.infrastructure.aws import EcsControlPlaneClient
from sigterm_capture.infrastructure.config import Settings
from sigterm_capture.infrastructure.http import MetadataClient
from sigterm_capture.infrastructure.persistence import LocalArtifactStore
from sigterm_capture.infrastructure.shell import ShellCommandRunner


def build_coordinator(
    settings: Settings,
    metadata_port: Optional[IMetadataPort] = None,
    control_plane_port: Optional[IControlPlanePort] = None,
    command_runner: Optional[ICommandRunnerPort] = None,
    artifact_store: Optional[IArtifactStorePort] = None,
) -> ShutdownCoordinator:
    """
    Build a ShutdownCoordinator.

    Adapters not supplied are created from settings. The ECS client is
    only created once a task identity has been resolved, so nothing
    touches AWS configuration outside ECS.

    Args:
        settings: Application settings
        metadata_port: Metadata endpoint adapter override
        control_plane_port: Control-plane adapter override
        command_runner: Command runner override
        artifact_store: Artifact store override

    Returns:
        Wired coordinator
    """
    if metadata_port is None:
        metadata_port = MetadataClient(settings.metadata_uri, timeout=settings.metadata_timeout)
    if control_plane_port is None:
        control_plane_port = _LazyEcsClient(settings)
    if command_runner is None:
        command_runner = ShellCommandRunner(shell=settings.diagnostic_shell)
    if artifact_store is None:
        artifact_store = LocalArtifactStore(settings.artifact_dir, settings.host_id)

    resolver = MetadataResolver(metadata_port=metadata_port, artifact_store=artifact_store)
    classifier = StatusClassifier(
        control_plane_port=control_plane_port,
        rule=StopReasonRule(settings.expected_stop_reasons),
        timeout=settings.describe_timeout,
        poll_interval=settings.poll_interval,
        max_poll_interval=settings.max_poll_interval,
    )
    capturer = DiagnosticCapturer(
        command_runner=command_runner,
        commands=settings.get_diagnostic_commands(),
        timeout=settings.command_timeout,
    )

    return ShutdownCoordinator(
        resolver=resolver,
        classifier=classifier,
        capturer=capturer,
        artifact_store=artifact_store,
        grace_period=settings.grace_period,
    )


class _LazyEcsClient(IControlPlanePort):
    """Creates the boto3 client on first use."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client: Optional[EcsControlPlaneClient] = None

    def describe_task(self, cluster: str, task_id: str) -> List[TaskRecord]:
        if self._client is None:
            try:
                self._client = EcsControlPlaneClient(
                    region_name=self._settings.aws_region,
                    timeout=self._settings.describe_timeout,
                )
            except BotoCoreError as e:
                raise ControlPlaneFaultError(f"Cannot create ECS client: {e}", original_error=e) from e
        return self._client.describe_task(cluster, task_id)
