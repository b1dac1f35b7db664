"""
Domain Errors

Error types raised by adapters and handled by the shutdown pipeline.
None of them is allowed to escape the coordinator.
"""

from typing import Optional


class SigtermCaptureError(Exception):
    """Base class for shutdown hook errors."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class ConfigurationAbsentError(SigtermCaptureError):
    """Metadata endpoint is not configured (normal outside ECS)."""
    pass


class MetadataUnavailableError(SigtermCaptureError):
    """Metadata document could not be fetched."""
    pass


class ControlPlaneFaultError(SigtermCaptureError):
    """Control-plane task query failed."""
    pass


class CommandExecutionError(SigtermCaptureError):
    """Diagnostic command could not be spawned or timed out."""
    pass


class PersistenceError(SigtermCaptureError):
    """Artifact could not be written."""
    pass
