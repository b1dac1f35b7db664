"""
SIGTERM Capture

Termination hook for ECS tasks: classifies a shutdown as expected or
failure and captures diagnostics on failure.
"""

__version__ = "1.0.0"

from .domain.value_objects import (
    Artifact,
    ShutdownState,
    StopReason,
    TaskIdentity,
    TaskRecord,
    Verdict,
)

__all__ = [
    "Artifact",
    "ShutdownState",
    "StopReason",
    "TaskIdentity",
    "TaskRecord",
    "Verdict",
]
