"""Resolution of the configured uploaders to their installed plugins.

Uploaders register a manifest under the ``chalisha_reporter.uploaders`` entry
point group. Only the uploaders enabled in the reporter options are imported.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Any

from pydantic import BaseModel

from chalisha_reporter.config import UploaderOptions
from chalisha_reporter.uploaders.manifest import UploaderManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "chalisha_reporter.uploaders"


class UploaderNotFoundError(Exception):
    """Raised when an uploader is requested but no plugin registers it."""


@dataclass(frozen=True, kw_only=True)
class ConfiguredUploader:
    """An installed uploader paired with the configuration to publish with."""

    key: str
    manifest: UploaderManifest[Any]
    config: BaseModel


def uploader_key(option_name: str) -> str:
    """Return the entry point name of the uploader configured under option_name."""
    return option_name.replace("_", "-")


def load_uploader_manifest(key: str) -> UploaderManifest[Any]:
    """Import the manifest registered under key.

    Raises:
        UploaderNotFoundError: If no installed distribution registers key

    """
    registered = entry_points(group=ENTRY_POINT_GROUP)
    if key not in registered.names:
        installed = ", ".join(sorted(registered.names)) or "none"
        raise UploaderNotFoundError(
            f"No uploader registered as {key!r} (installed: {installed})"
        )

    manifest: UploaderManifest[Any] = registered[key].load()
    return manifest


def resolve_configured_uploaders(
    options: UploaderOptions,
) -> Sequence[ConfiguredUploader]:
    """Load the plugin of every enabled uploader section.

    Sections that are absent or lack credentials are skipped without touching
    the entry point registry.

    Raises:
        UploaderNotFoundError: If an enabled section has no installed plugin
        pydantic.ValidationError: If a section is rejected by its plugin

    """
    resolved: list[ConfiguredUploader] = []
    for option_name, section in options.enabled_sections().items():
        key = uploader_key(option_name)
        manifest = load_uploader_manifest(key)
        config = manifest.config_cls.model_validate(section.model_dump())
        log.debug("Resolved uploader %s", key)
        resolved.append(ConfiguredUploader(key=key, manifest=manifest, config=config))
    return resolved
