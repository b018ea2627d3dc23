"""Configuration of the reporter."""

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)


class Options(BaseModel):
    """Base for option models, accepting camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploaderSection(Options):
    """Options of one uploader."""

    @property
    def enabled(self) -> bool:
        """Whether the section holds enough settings to publish."""
        return True


class AzureBlobStorageOptions(UploaderSection):
    """Azure Blob Storage upload options.

    Uploading is skipped when no connection string is given.
    """

    container_name: str = "reports"
    connection_string: SecretStr | None = None

    @property
    def enabled(self) -> bool:
        """Whether a non-empty connection string is set."""
        return bool(
            self.connection_string and self.connection_string.get_secret_value()
        )


class UploaderOptions(Options):
    """Remote destinations the report is published to after the run.

    Every field name maps to the uploader registered under the same name with
    dashes, e.g. ``azure_blob_storage`` to ``azure-blob-storage``.
    """

    azure_blob_storage: AzureBlobStorageOptions | None = None

    def enabled_sections(self) -> Mapping[str, UploaderSection]:
        """Return the usable uploader sections keyed by field name."""
        sections: dict[str, UploaderSection] = {}
        for name in type(self).model_fields:
            section = getattr(self, name)
            if isinstance(section, UploaderSection) and section.enabled:
                sections[name] = section
        return sections


class ReporterOptions(Options):
    """Options of the reporter."""

    report_dir: str = "reports/chalisha-reporter/"
    report_file_name: str = "report.json"
    result_file_name: str = "result.json"
    uploaders: UploaderOptions = Field(default_factory=UploaderOptions)


def load_host_app_name(project_root: Path) -> str:
    """Read the name of the host application from its pyproject.toml.

    Returns:
        The project name, or an empty string if it cannot be determined

    """
    pyproject_path = project_root / "pyproject.toml"
    try:
        with pyproject_path.open("rb") as f:
            metadata = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.error("Error reading the host application's pyproject.toml: %s", e)
        return ""

    name = metadata.get("project", {}).get("name", "")
    return name if isinstance(name, str) else ""
