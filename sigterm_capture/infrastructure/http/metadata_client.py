"""
Task metadata endpoint client.

Implements IMetadataPort over the ECS container metadata endpoint.
Performs a single GET with a short timeout; the endpoint is local to
the task so there is no retry.
"""

from typing import Optional

import httpx

from sigterm_capture.domain.errors import ConfigurationAbsentError, MetadataUnavailableError
from sigterm_capture.domain.ports import IMetadataPort
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)


class MetadataClient(IMetadataPort):
    """
    Async HTTP client for the task metadata endpoint.
    """

    def __init__(
        self,
        metadata_uri: Optional[str],
        timeout: float = 2.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize metadata client.

        Args:
            metadata_uri: Metadata endpoint address, None outside ECS
            timeout: Request timeout in seconds
            transport: Optional transport override (tests)
        """
        self.metadata_uri = metadata_uri
        self.timeout = httpx.Timeout(timeout)
        self._transport = transport

        # Lazy-initialized async client
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_metadata(self) -> str:
        """
        Fetch the raw metadata document.

        Implementation of IMetadataPort.fetch_metadata().

        Returns:
            Raw document text

        Raises:
            ConfigurationAbsentError: metadata_uri is not set
            MetadataUnavailableError: Request failed or returned non-2xx
        """
        if not self.metadata_uri:
            raise ConfigurationAbsentError("Metadata endpoint is not configured")

        try:
            client = await self._get_client()
            logger.debug("Fetching task metadata", metadata_uri=self.metadata_uri)
            response = await client.get(self.metadata_uri)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise MetadataUnavailableError(
                f"Failed to fetch task metadata from {self.metadata_uri}: {e}",
                original_error=e,
            ) from e

        return response.text
