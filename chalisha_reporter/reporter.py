"""Reporter receiving lifecycle events from the host test runner."""

import logging
from pathlib import Path

from pydantic import ValidationError

from chalisha_reporter.aggregator import RunAggregator
from chalisha_reporter.config import ReporterOptions, load_host_app_name
from chalisha_reporter.models.runner import (
    FullResult,
    RunnerConfig,
    Suite,
    TestCase,
    TestResult,
)
from chalisha_reporter.uploaders.loading import (
    UploaderNotFoundError,
    resolve_configured_uploaders,
)
from chalisha_reporter.uploaders.publisher import publish_directory, remote_root
from chalisha_reporter.writer import ReportWriter

log = logging.getLogger(__name__)


class ChalishaReporter:
    """Collects the results of one test run into a JSON report.

    The host runner calls on_begin once, on_test_end for every finished test,
    on_end when the run is over and finally awaits on_exit. The report
    directory is emptied as soon as the reporter is created.
    """

    def __init__(
        self,
        options: ReporterOptions | None = None,
        project_root: Path | None = None,
    ) -> None:
        self.options = options or ReporterOptions()
        self.project_root = (project_root or Path.cwd()).resolve()
        self.app_name = load_host_app_name(self.project_root)
        self.writer = ReportWriter.create(
            self.project_root / self.options.report_dir,
            report_file_name=self.options.report_file_name,
            result_file_name=self.options.result_file_name,
        )
        self.aggregator = RunAggregator(
            project_root=self.project_root,
            report_dir=self.writer.report_dir,
        )

    @property
    def run_id(self) -> str:
        """Unique identifier of the run."""
        return self.aggregator.run.run_id

    def on_begin(self, config: RunnerConfig, suite: Suite) -> None:
        """Record the size of the run and the browser of each project."""
        self.aggregator.begin(len(suite.all_tests()), config.projects)

    def on_test_end(self, test: TestCase, result: TestResult) -> None:
        """Record a finished test."""
        self.aggregator.test_end(test, result)

    def on_end(self, result: FullResult) -> None:
        """Finalize the run and write the report documents."""
        run = self.aggregator.end(result.status)
        log.info("Finished the run with ID: %s and status: %s", run.run_id, run.status)
        log.info("Total duration of test run: %s ms", result.duration)
        if result.start_time is not None:
            log.info("Test run started at: %s", result.start_time.isoformat())

        self.writer.write(run.report())

    async def on_exit(self) -> bool:
        """Publish the report directory to every configured uploader.

        Returns:
            True if at least one uploader is configured and all of them
            uploaded the report

        """
        try:
            uploaders = resolve_configured_uploaders(self.options.uploaders)
        except (UploaderNotFoundError, ImportError, ValidationError) as e:
            log.error("Error loading uploaders: %s", e)
            return False

        if not uploaders:
            log.debug("No uploader configured, skipping upload")
            return False

        remote_prefix = remote_root(self.app_name, self.run_id)
        results: list[bool] = []
        for uploader in uploaders:
            log.info("Starting upload to %s ...", uploader.key)
            results.append(
                await publish_directory(
                    uploader.manifest,
                    uploader.config,
                    self.writer.report_dir,
                    remote_prefix,
                )
            )
        return all(results)
