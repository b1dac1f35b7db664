"""
Test doubles for the shutdown pipeline ports.
"""

import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from sigterm_capture.domain.errors import ConfigurationAbsentError
from sigterm_capture.domain.ports import (
    IArtifactStorePort,
    ICommandRunnerPort,
    IControlPlanePort,
    IMetadataPort,
)
from sigterm_capture.domain.value_objects import Artifact, CommandOutput, TaskRecord


TASK_ARN = "arn:aws:ecs:us-east-1:123456789012:task/my-cluster/abc123"
CLUSTER = "my-cluster"
HOST_ID = "ip-10-0-1-23"


class FakeMetadataPort(IMetadataPort):
    """Serves a fixed document, or raises when configured to."""

    def __init__(self, document: Optional[str] = None, error: Optional[Exception] = None):
        self.document = document
        self.error = error
        self.calls = 0

    async def fetch_metadata(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        if self.document is None:
            raise ConfigurationAbsentError("Metadata endpoint is not configured")
        return self.document


class FakeControlPlane(IControlPlanePort):
    """Returns canned task records and records every request."""

    def __init__(
        self,
        tasks: Optional[List[TaskRecord]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.tasks = tasks or []
        self.error = error
        self.delay = delay
        self.calls: List[Tuple[str, str]] = []

    def describe_task(self, cluster: str, task_id: str) -> List[TaskRecord]:
        self.calls.append((cluster, task_id))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.tasks)


class FakeCommandRunner(ICommandRunnerPort):
    """Maps command lines to canned outputs or errors."""

    def __init__(self, outputs: Optional[Dict[str, Union[CommandOutput, Exception]]] = None):
        self.outputs = outputs or {}
        self.calls: List[str] = []

    async def run(self, command: str, timeout: float) -> CommandOutput:
        self.calls.append(command)
        result = self.outputs.get(command)
        if isinstance(result, Exception):
            raise result
        if result is None:
            return CommandOutput(command=command, exit_code=0, stdout=f"output of {command}\n".encode())
        return result


class InMemoryArtifactStore(IArtifactStorePort):
    """Keeps saved artifacts in memory, keyed by name."""

    def __init__(self, fail_names: Tuple[str, ...] = ()):
        self.saved: Dict[str, bytes] = {}
        self.attempts: List[str] = []
        self.fail_names = fail_names

    def path_for(self, name: str) -> Path:
        return Path("/memory") / name

    async def save(self, artifact: Artifact) -> bool:
        self.attempts.append(artifact.name)
        if artifact.name in self.fail_names:
            return False
        self.saved[artifact.name] = artifact.content
        return True
