"""Azure Blob Storage uploader module."""

from chalisha_reporter.uploaders.azure_blob_storage.config import (
    AzureBlobStorageConfig,
)
from chalisha_reporter.uploaders.azure_blob_storage.manifest import (
    azure_blob_storage_manifest,
)
from chalisha_reporter.uploaders.azure_blob_storage.store import AzureBlobStore

__all__ = ["AzureBlobStorageConfig", "AzureBlobStore", "azure_blob_storage_manifest"]
