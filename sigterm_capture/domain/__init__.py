"""
Domain Layer

Value objects, errors and classification logic for the shutdown hook.
"""

from .value_objects import (
    Artifact,
    CommandOutput,
    DiagnosticCommand,
    ShutdownState,
    StopReason,
    TaskIdentity,
    TaskRecord,
    Verdict,
)
from .services import StopReasonRule, extract_attribute, task_id_from_arn

__all__ = [
    "Artifact",
    "CommandOutput",
    "DiagnosticCommand",
    "ShutdownState",
    "StopReason",
    "TaskIdentity",
    "TaskRecord",
    "Verdict",
    "StopReasonRule",
    "extract_attribute",
    "task_id_from_arn",
]
