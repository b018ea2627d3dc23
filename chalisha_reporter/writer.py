"""Persistence of run reports to the local report directory."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from chalisha_reporter.models.base import Model
from chalisha_reporter.models.report import Report, RunSummary

log = logging.getLogger(__name__)


def prepare_report_dir(report_dir: Path) -> None:
    """Create the report directory, or empty it if it already exists.

    The directory itself is kept so that handles held on it stay valid.
    """
    if not report_dir.exists():
        report_dir.mkdir(parents=True)
        return

    for entry in report_dir.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
    log.info("Cleaned output directory: %s", report_dir)


def dump_json(model: Model) -> str:
    """Serialize a report model the way it is persisted."""
    return model.model_dump_json(indent=2, by_alias=True, exclude_none=True)


def read_summary(path: Path) -> RunSummary:
    """Load a persisted result document."""
    return RunSummary.model_validate_json(path.read_text())


def read_report(path: Path) -> Report:
    """Load a persisted report document."""
    return Report.model_validate_json(path.read_text())


@dataclass(frozen=True, kw_only=True)
class ReportWriter:
    """Writes the result and report documents of a run."""

    report_dir: Path
    report_file_name: str = "report.json"
    result_file_name: str = "result.json"

    @classmethod
    def create(
        cls,
        report_dir: Path,
        report_file_name: str = "report.json",
        result_file_name: str = "result.json",
    ) -> "ReportWriter":
        """Create a writer and prepare an empty report directory for the run."""
        report_dir = report_dir.resolve()
        prepare_report_dir(report_dir)
        return cls(
            report_dir=report_dir,
            report_file_name=report_file_name,
            result_file_name=result_file_name,
        )

    @property
    def result_path(self) -> Path:
        """Path of the summary document."""
        return self.report_dir / self.result_file_name

    @property
    def report_path(self) -> Path:
        """Path of the full report document."""
        return self.report_dir / self.report_file_name

    def write(self, report: Report) -> None:
        """Write both documents, overwriting previous content."""
        self.result_path.write_text(dump_json(report.summary()))
        self.report_path.write_text(dump_json(report))
        log.info("Report saved at: %s", self.report_dir)
