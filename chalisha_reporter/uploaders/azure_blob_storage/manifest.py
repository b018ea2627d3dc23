"""Azure Blob Storage uploader manifest."""

from chalisha_reporter.uploaders.azure_blob_storage.config import (
    AzureBlobStorageConfig,
)
from chalisha_reporter.uploaders.azure_blob_storage.store import AzureBlobStore
from chalisha_reporter.uploaders.manifest import UploaderManifest

azure_blob_storage_manifest = UploaderManifest(
    config_cls=AzureBlobStorageConfig,
    store_factory=AzureBlobStore.from_config,
)
