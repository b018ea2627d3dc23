"""Azure Blob Storage object store implementation."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp
from azure.core.exceptions import ResourceExistsError
from azure.core.pipeline.transport import AioHttpTransport
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobClient, BlobServiceClient, ContainerClient

from chalisha_reporter.uploaders.azure_blob_storage.config import (
    AzureBlobStorageConfig,
)
from chalisha_reporter.uploaders.base import (
    ContainerAccess,
    MissingCredentialError,
    ObjectStore,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class AzureBlobStore(ObjectStore[BlobClient]):
    """Object store backed by an Azure Blob Storage container.

    Object handles are blob clients of the configured container.
    """

    config: AzureBlobStorageConfig
    container: ContainerClient = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: AzureBlobStorageConfig
    ) -> AsyncGenerator["AzureBlobStore", None]:
        """Create store with managed client and session lifecycle.

        Raises:
            MissingCredentialError: If the connection string is empty

        """
        connection_string = config.connection_string.get_secret_value()
        if not connection_string:
            raise MissingCredentialError("Azure Storage connection string is missing")

        async with aiohttp.ClientSession() as session:
            transport = AioHttpTransport(session=session, session_owner=False)
            async with BlobServiceClient.from_connection_string(
                connection_string, transport=transport
            ) as service:
                log.info("Using Azure container: %s", config.container_name)
                yield cls(
                    config=config,
                    container=service.get_container_client(config.container_name),
                )

    async def create_container_if_not_exists(self, access: ContainerAccess) -> None:
        """Create the container, treating an existing one as success."""
        try:
            await self.container.create_container(public_access=access)
        except ResourceExistsError:
            log.debug("Container %s already exists", self.config.container_name)
        else:
            log.info("Created container %s", self.config.container_name)

    def get_object_handle(self, remote_path: str) -> BlobClient:
        """Return the blob client for remote_path."""
        return self.container.get_blob_client(remote_path)

    async def upload_bytes(
        self, handle: BlobClient, data: bytes, content_type: str
    ) -> None:
        """Upload data as a single block blob, overwriting existing content."""
        await handle.upload_blob(
            data,
            overwrite=True,
            content_settings=ContentSettings(content_type=content_type),
        )
