"""Mirroring of a local report directory into a remote object store."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from chalisha_reporter.uploaders.base import ContainerAccess, ObjectStore
from chalisha_reporter.uploaders.manifest import UploaderManifest

log = logging.getLogger(__name__)

H = TypeVar("H")
ConfigT = TypeVar("ConfigT", bound=BaseModel)

REMOTE_NAMESPACE = "chalisha-reporter"

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: Mapping[str, str] = {
    ".html": "text/html",
    ".json": "application/json",
    ".txt": "text/plain",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


class PublishState(StrEnum):
    """Progress of a publish operation."""

    IDLE = "idle"
    ENSURING_CONTAINER = "ensuring_container"
    UPLOADING = "uploading"
    DONE = "done"
    FAILED = "failed"


def content_type_for(file_name: str) -> str:
    """Return the MIME type of a file based on its extension."""
    return CONTENT_TYPES.get(Path(file_name).suffix.lower(), DEFAULT_CONTENT_TYPE)


def join_remote_path(prefix: str, name: str) -> str:
    """Join a remote prefix and a child name using forward slashes only."""
    path = f"{prefix.rstrip('/')}/{name}" if prefix else name
    return path.replace("\\", "/")


def remote_root(app_name: str, run_id: str) -> str:
    """Return the per-run remote directory: namespace, application and run id."""
    return "/".join(part for part in (REMOTE_NAMESPACE, app_name, run_id) if part)


@dataclass(kw_only=True)
class DirectoryMirrorPublisher(Generic[H]):
    """Uploads a local directory tree to an object store, preserving its layout."""

    store: ObjectStore[H]
    access: ContainerAccess = "container"
    state: PublishState = PublishState.IDLE

    async def ensure_container(self) -> None:
        """Make sure the target container exists."""
        self.state = PublishState.ENSURING_CONTAINER
        await self.store.create_container_if_not_exists(self.access)
        log.info("Container is ready")

    async def mirror(self, local_dir: Path, remote_prefix: str) -> Sequence[str]:
        """Recursively upload every file below local_dir.

        Args:
            local_dir: Directory to upload
            remote_prefix: Remote path local_dir maps to

        Returns:
            Remote paths of the uploaded files, in upload order

        """
        self.state = PublishState.UPLOADING
        uploaded: list[str] = []
        await self._upload_directory(local_dir, remote_prefix, uploaded)
        return uploaded

    async def publish(self, local_dir: Path, remote_prefix: str) -> bool:
        """Ensure the container and mirror local_dir, never raising.

        Returns:
            True if every file was uploaded, False otherwise

        """
        try:
            await self.ensure_container()
            await self.mirror(local_dir, remote_prefix)
        except Exception as e:
            self.state = PublishState.FAILED
            log.error("Error uploading report: %s", e, exc_info=True)
            return False

        self.state = PublishState.DONE
        log.info(
            'All files and folders from "%s" have been uploaded to "%s"',
            local_dir,
            remote_prefix,
        )
        return True

    async def _upload_directory(
        self, directory: Path, remote_path: str, uploaded: list[str]
    ) -> None:
        for entry in directory.iterdir():
            entry_remote_path = join_remote_path(remote_path, entry.name)

            if entry.is_symlink() and entry.is_dir():
                log.warning("Skipping symlinked directory: %s", entry)
                continue

            if entry.is_dir():
                await self._upload_directory(entry, entry_remote_path, uploaded)
                continue

            data = await asyncio.to_thread(entry.read_bytes)
            handle = self.store.get_object_handle(entry_remote_path)
            await self.store.upload_bytes(handle, data, content_type_for(entry.name))
            uploaded.append(entry_remote_path)
            log.info("Uploaded: %s", entry_remote_path)


async def publish_directory(
    manifest: UploaderManifest[ConfigT],
    config: ConfigT,
    local_dir: Path,
    remote_prefix: str,
) -> bool:
    """Build the uploader's store and publish local_dir to it.

    Any failure, including a store that cannot be built, is logged and
    reported as False.
    """
    try:
        async with manifest.store_factory(config) as store:
            publisher: DirectoryMirrorPublisher[Any] = DirectoryMirrorPublisher(
                store=store
            )
            return await publisher.publish(local_dir, remote_prefix)
    except Exception as e:
        log.error("Error uploading report: %s", e, exc_info=True)
        return False
