"""Abstract base class for remote object stores."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Literal, TypeAlias, TypeVar

ContainerAccess: TypeAlias = Literal["container", "blob"]

H = TypeVar("H")


class MissingCredentialError(Exception):
    """Raised when an object store is built without credentials."""


@dataclass(frozen=True, kw_only=True)
class ObjectStore(ABC, Generic[H]):
    """Abstract base for object stores reports are published to.

    Generic type H is the handle of a single remote object, obtained from
    get_object_handle and passed back to upload_bytes.
    """

    @abstractmethod
    async def create_container_if_not_exists(self, access: ContainerAccess) -> None:
        """Create the target container unless it already exists.

        Args:
            access: Public read access level of a newly created container

        """

    @abstractmethod
    def get_object_handle(self, remote_path: str) -> H:
        """Return a handle to the object stored at remote_path.

        Args:
            remote_path: Forward-slash separated path inside the container

        """

    @abstractmethod
    async def upload_bytes(self, handle: H, data: bytes, content_type: str) -> None:
        """Upload data as the whole content of an object, replacing it.

        Args:
            handle: Handle returned by get_object_handle
            data: Full object content
            content_type: MIME type stored with the object

        """
