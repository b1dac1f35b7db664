"""
Shutdown Value Objects

Immutable value objects for the termination hook: task identity,
control-plane task records, verdicts and diagnostic artifacts.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class Verdict(str, Enum):
    """Classification of a shutdown event."""

    EXPECTED = "expected"
    FAILURE = "failure"
    # Identity or control-plane status could not be resolved.
    # Handled like EXPECTED (no capture) but reported separately.
    INDETERMINATE = "indeterminate"


class ShutdownState(str, Enum):
    """States of the shutdown coordinator."""

    RUNNING = "running"
    NOTIFIED = "notified"
    CLASSIFYING = "classifying"
    CAPTURING = "capturing"
    DRAINING = "draining"
    EXITED = "exited"


@dataclass(frozen=True)
class TaskIdentity:
    """
    Identity of the task this process runs in.

    Attributes:
        task_arn: Fully-qualified task resource name
        task_id: Canonical short task ID (segment after the last '/')
        cluster: Cluster name, None if the metadata did not carry it
    """

    task_arn: str
    task_id: str
    cluster: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True when both task id and cluster are known."""
        return bool(self.task_id) and bool(self.cluster)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task_arn": self.task_arn,
            "task_id": self.task_id,
            "cluster": self.cluster,
        }


@dataclass(frozen=True)
class StopReason:
    """Opaque stop reason string reported by the orchestrator."""

    raw: str

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class TaskRecord:
    """
    One task as returned by the control plane.

    Attributes:
        task_arn: Fully-qualified task resource name
        last_status: Last known task status (e.g. STOPPED, DEACTIVATING)
        stopped_reason: Stop reason, None while the task has not stopped
    """

    task_arn: str
    last_status: Optional[str] = None
    stopped_reason: Optional[str] = None

    @property
    def stop_reason(self) -> StopReason:
        return StopReason(raw=self.stopped_reason or "")


@dataclass(frozen=True)
class Artifact:
    """
    A named diagnostic snapshot.

    Attributes:
        name: Artifact name, used to derive the file name
        content: Raw content
    """

    name: str
    content: bytes

    def __post_init__(self):
        """Validate name for security (prevent traversal attacks)."""
        if not self.name:
            raise ValueError("Artifact name cannot be empty")
        if "/" in self.name or ".." in self.name:
            raise ValueError("Artifact name cannot contain '/' or '..'")
        if self.name.startswith("."):
            raise ValueError("Artifact name cannot start with '.'")

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class DiagnosticCommand:
    """
    A diagnostic command and the artifact name its output is stored under.

    Attributes:
        name: Artifact name (e.g. "process")
        command: Shell command line (e.g. "ps aux")
    """

    name: str
    command: str


@dataclass(frozen=True)
class CommandOutput:
    """
    Captured result of a shell command.

    Attributes:
        command: Command line that was executed
        exit_code: Process exit code
        stdout: Captured standard output
        stderr: Captured standard error
        duration_ms: Wall-clock time in milliseconds
    """

    command: str
    exit_code: int
    stdout: bytes
    stderr: bytes = b""
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
