"""Configuration for Azure Blob Storage uploader."""

from pydantic import BaseModel, SecretStr


class AzureBlobStorageConfig(BaseModel):
    """Configuration for Azure Blob Storage uploader."""

    connection_string: SecretStr
    container_name: str = "reports"
