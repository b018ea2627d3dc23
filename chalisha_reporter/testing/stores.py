"""In-memory object store for tests."""

from dataclasses import dataclass, field

from chalisha_reporter.uploaders.base import ContainerAccess, ObjectStore


@dataclass(frozen=True, kw_only=True)
class StoredObject:
    """Object uploaded to the in-memory store."""

    data: bytes
    content_type: str


@dataclass(frozen=True, kw_only=True)
class InMemoryObjectStore(ObjectStore[str]):
    """Object store keeping uploads in a dict, keyed by remote path."""

    objects: dict[str, StoredObject] = field(default_factory=dict)
    container_requests: list[ContainerAccess] = field(default_factory=list)
    failing_paths: frozenset[str] = frozenset()

    async def create_container_if_not_exists(self, access: ContainerAccess) -> None:
        """Record the request, creating nothing."""
        self.container_requests.append(access)

    def get_object_handle(self, remote_path: str) -> str:
        """Use the remote path itself as handle."""
        return remote_path

    async def upload_bytes(self, handle: str, data: bytes, content_type: str) -> None:
        """Store data, failing for paths listed in failing_paths."""
        if handle in self.failing_paths:
            raise ConnectionError(f"Upload of {handle} failed")
        self.objects[handle] = StoredObject(data=data, content_type=content_type)
