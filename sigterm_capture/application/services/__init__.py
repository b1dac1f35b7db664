"""
Application Services

Service classes for the shutdown pipeline.
"""

from .diagnostic_capturer import DEFAULT_DIAGNOSTIC_COMMANDS, DiagnosticCapturer
from .metadata_resolver import METADATA_ARTIFACT, MetadataResolver
from .shutdown_coordinator import ShutdownCoordinator, register_signal_handlers
from .status_classifier import StatusClassifier

__all__ = [
    "DEFAULT_DIAGNOSTIC_COMMANDS",
    "DiagnosticCapturer",
    "METADATA_ARTIFACT",
    "MetadataResolver",
    "ShutdownCoordinator",
    "StatusClassifier",
    "register_signal_handlers",
]
