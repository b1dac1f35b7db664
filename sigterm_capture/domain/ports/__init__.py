"""
Domain Ports

Port interfaces defining contracts between layers.
All dependencies on external systems are abstracted through ports.
"""

from .metadata_port import IMetadataPort
from .control_plane_port import IControlPlanePort
from .command_runner_port import ICommandRunnerPort
from .artifact_store_port import IArtifactStorePort

__all__ = [
    "IMetadataPort",
    "IControlPlanePort",
    "ICommandRunnerPort",
    "IArtifactStorePort",
]
