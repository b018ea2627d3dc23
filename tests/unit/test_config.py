"""Tests for reporter configuration."""

from pathlib import Path

import pytest

from chalisha_reporter.config import ReporterOptions, load_host_app_name


def test_defaults() -> None:
    """Uses default report location and no uploader."""
    options = ReporterOptions()

    assert options.report_dir == "reports/chalisha-reporter/"
    assert options.report_file_name == "report.json"
    assert options.result_file_name == "result.json"
    assert options.uploaders.azure_blob_storage is None


def test_accepts_camel_case_keys() -> None:
    """Parses the camelCase option names used by runner configurations."""
    options = ReporterOptions.model_validate(
        {
            "reportDir": "out/",
            "reportFileName": "full.json",
            "resultFileName": "summary.json",
            "uploaders": {
                "azureBlobStorage": {
                    "containerName": "test-reports",
                    "connectionString": "UseDevelopmentStorage=true",
                }
            },
        }
    )

    assert options.report_dir == "out/"
    assert options.report_file_name == "full.json"
    assert options.result_file_name == "summary.json"
    azure = options.uploaders.azure_blob_storage
    assert azure is not None
    assert azure.container_name == "test-reports"
    assert azure.connection_string is not None
    assert azure.connection_string.get_secret_value() == "UseDevelopmentStorage=true"


def test_azure_container_defaults_to_reports() -> None:
    """Defaults the container name when only a connection string is given."""
    options = ReporterOptions.model_validate(
        {"uploaders": {"azureBlobStorage": {"connectionString": "secret"}}}
    )

    azure = options.uploaders.azure_blob_storage
    assert azure is not None
    assert azure.container_name == "reports"


def test_connection_string_is_hidden() -> None:
    """Does not expose the connection string in the representation."""
    options = ReporterOptions.model_validate(
        {"uploaders": {"azureBlobStorage": {"connectionString": "AccountKey=s3cr3t"}}}
    )

    assert "s3cr3t" not in repr(options)


class TestLoadHostAppName:
    """Tests for load_host_app_name."""

    def test_reads_project_name(self, tmp_path: Path) -> None:
        """Reads the name from the project table."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "shop-e2e"\n')

        assert load_host_app_name(tmp_path) == "shop-e2e"

    def test_missing_file(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Returns empty name and logs an error when there is no pyproject.toml."""
        assert load_host_app_name(tmp_path) == ""
        assert "pyproject.toml" in caplog.text

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Returns empty name for an unparsable file."""
        (tmp_path / "pyproject.toml").write_text("[project\n")

        assert load_host_app_name(tmp_path) == ""

    def test_missing_name(self, tmp_path: Path) -> None:
        """Returns empty name when the project has no name."""
        (tmp_path / "pyproject.toml").write_text('[tool.other]\nkey = "value"\n')

        assert load_host_app_name(tmp_path) == ""


class TestEnabledSections:
    """Tests for UploaderOptions.enabled_sections."""

    def test_none_by_default(self) -> None:
        """Has no usable section without uploader options."""
        assert ReporterOptions().uploaders.enabled_sections() == {}

    @pytest.mark.parametrize("azure", [{}, {"connectionString": ""}])
    def test_azure_without_connection_string(self, azure: dict[str, str]) -> None:
        """Treats an Azure section without a connection string as disabled."""
        options = ReporterOptions.model_validate(
            {"uploaders": {"azureBlobStorage": azure}}
        )

        assert options.uploaders.enabled_sections() == {}

    def test_azure_with_connection_string(self) -> None:
        """Keys the usable Azure section by its field name."""
        options = ReporterOptions.model_validate(
            {"uploaders": {"azureBlobStorage": {"connectionString": "secret"}}}
        )

        sections = options.uploaders.enabled_sections()

        assert list(sections) == ["azure_blob_storage"]
        assert sections["azure_blob_storage"] is options.uploaders.azure_blob_storage
