"""
Application Layer

Orchestrates domain objects to run the shutdown pipeline.
"""

from .services import (
    DiagnosticCapturer,
    MetadataResolver,
    ShutdownCoordinator,
    StatusClassifier,
    register_signal_handlers,
)

__all__ = [
    "DiagnosticCapturer",
    "MetadataResolver",
    "ShutdownCoordinator",
    "StatusClassifier",
    "register_signal_handlers",
]
