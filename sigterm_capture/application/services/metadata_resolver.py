"""
Metadata Resolver

Resolves the identity of the task this process runs in from the
task metadata endpoint.
"""

from typing import Optional

from sigterm_capture.domain.errors import ConfigurationAbsentError, MetadataUnavailableError
from sigterm_capture.domain.ports import IArtifactStorePort, IMetadataPort
from sigterm_capture.domain.services import (
    CLUSTER_ATTRIBUTE,
    TASK_ARN_ATTRIBUTE,
    extract_attribute,
    task_id_from_arn,
)
from sigterm_capture.domain.value_objects import Artifact, TaskIdentity
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)

METADATA_ARTIFACT = "metadata"


class MetadataResolver:
    """
    Resolves TaskIdentity from the metadata document.

    The raw document is persisted as the `metadata` artifact whenever it
    was fetched, independent of the later verdict.
    """

    def __init__(
        self,
        metadata_port: IMetadataPort,
        artifact_store: IArtifactStorePort,
    ):
        """
        Initialize metadata resolver.

        Args:
            metadata_port: Port for the metadata endpoint
            artifact_store: Store for the raw metadata dump
        """
        self._metadata_port = metadata_port
        self._artifact_store = artifact_store

    async def resolve(self) -> Optional[TaskIdentity]:
        """
        Fetch the metadata document once and extract the task identity.

        Returns:
            TaskIdentity, or None when not available (not running on ECS,
            endpoint unreachable, or no task ARN in the document)
        """
        try:
            document = await self._metadata_port.fetch_metadata()
        except ConfigurationAbsentError:
            logger.info("Metadata endpoint not configured, skipping task lookup")
            return None
        except MetadataUnavailableError as e:
            logger.warning("Task metadata unavailable", error=e.message)
            return None

        await self._artifact_store.save(
            Artifact(name=METADATA_ARTIFACT, content=document.encode("utf-8"))
        )

        task_arn = extract_attribute(document, TASK_ARN_ATTRIBUTE)
        if not task_arn:
            logger.warning("Unable to find task ARN in metadata. Are you running on ECS?")
            return None

        identity = TaskIdentity(
            task_arn=task_arn,
            task_id=task_id_from_arn(task_arn),
            cluster=extract_attribute(document, CLUSTER_ATTRIBUTE) or None,
        )

        logger.info("Resolved task identity", **identity.to_dict())
        return identity
