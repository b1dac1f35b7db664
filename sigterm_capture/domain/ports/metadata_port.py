"""
Metadata Port Interface

Defines the contract for reading the task metadata document.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod


class IMetadataPort(ABC):
    """
    Port interface for the locally reachable task metadata endpoint.
    """

    @abstractmethod
    async def fetch_metadata(self) -> str:
        """
        Fetch the raw metadata document.

        Returns:
            Raw document text

        Raises:
            ConfigurationAbsentError: Endpoint address is not configured
            MetadataUnavailableError: Endpoint could not be reached
        """
        pass
