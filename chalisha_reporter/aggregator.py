"""Aggregation of lifecycle events into run-wide report state."""

import logging
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from chalisha_reporter.attachments import relocate_attachments
from chalisha_reporter.models.report import (
    BrowserContext,
    Report,
    RunSummary,
    TestInfo,
    TestReportEntry,
)
from chalisha_reporter.models.runner import Project, TestCase, TestResult, Viewport
from chalisha_reporter.steps import capture_steps, format_location

log = logging.getLogger(__name__)

DATA_DIR_NAME = "data"
DEFAULT_VIEWPORT = Viewport(width=1280, height=720)


@dataclass(kw_only=True)
class OutcomeCounts:
    """Number of tests per terminal status."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    timed_out: int = 0
    interrupted: int = 0

    def record(self, status: str) -> bool:
        """Increment the counter matching a runner status.

        Returns:
            False if the status is not recognized and nothing was counted

        """
        match status:
            case "passed":
                self.passed += 1
            case "failed":
                self.failed += 1
            case "skipped":
                self.skipped += 1
            case "timedOut":
                self.timed_out += 1
            case "interrupted":
                self.interrupted += 1
            case _:
                return False
        return True

    @property
    def total(self) -> int:
        """Total number of counted tests."""
        return (
            self.passed + self.failed + self.skipped + self.timed_out + self.interrupted
        )


@dataclass(kw_only=True)
class Run:
    """Mutable state of one test run."""

    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    duration: int = 0
    status: str = ""
    total_tests: int = 0
    counts: OutcomeCounts = field(default_factory=OutcomeCounts)
    entries: list[TestReportEntry] = field(default_factory=list)
    completed: bool = False

    def summary(self) -> RunSummary:
        """Build the summary document of the run."""
        return RunSummary(
            run_id=self.run_id,
            start_time=self.start_time,
            duration=self.duration,
            status=self.status,
            total_tests=self.total_tests,
            passed_tests=self.counts.passed,
            failed_tests=self.counts.failed,
            skipped_tests=self.counts.skipped,
            timed_out_tests=self.counts.timed_out,
            interrupted_tests=self.counts.interrupted,
        )

    def report(self) -> Report:
        """Build the full report document of the run."""
        return Report(
            **self.summary().model_dump(),
            tests=list(self.entries),
        )


def resolve_browser_context(project: Project) -> BrowserContext:
    """Resolve the browser context of a project, filling in defaults."""
    use = project.use
    return BrowserContext(
        name=project.name or "unknown",
        headless=use.headless or False,
        viewport=use.viewport or DEFAULT_VIEWPORT,
        is_mobile=use.is_mobile or False,
        has_touch=use.has_touch or False,
    )


@dataclass(kw_only=True)
class RunAggregator:
    """Accumulates per-test outcomes of a run.

    One aggregator corresponds to exactly one run: the run id and start time
    are fixed when it is created.
    """

    project_root: Path
    report_dir: Path
    run: Run = field(default_factory=Run)
    browsers: Mapping[str, BrowserContext] = field(default_factory=dict)

    @property
    def data_dir(self) -> Path:
        """Directory receiving relocated attachments."""
        return self.report_dir / DATA_DIR_NAME

    def begin(self, total_tests: int, projects: Sequence[Project]) -> None:
        """Record the declared test count and resolve project browser contexts."""
        self.run.total_tests = total_tests
        self.browsers = {
            project.name: resolve_browser_context(project) for project in projects
        }
        log.debug(
            "Run %s began with %d test(s) across %d project(s)",
            self.run.run_id,
            total_tests,
            len(self.browsers),
        )

    def test_end(self, test: TestCase, result: TestResult) -> TestReportEntry | None:
        """Record the outcome of one test.

        Returns:
            The appended entry, or None if the run has already ended

        Raises:
            OSError: If an attachment cannot be copied into the report

        """
        if self.run.completed:
            log.warning(
                "Ignoring result of %r received after run %s ended",
                test.title,
                self.run.run_id,
            )
            return None

        entry = TestReportEntry(
            test=self._test_info(test),
            steps=capture_steps(result.steps, self.project_root),
            attachments=relocate_attachments(
                result.attachments, self.data_dir, self.report_dir
            ),
            status=result.status,
            duration=result.duration,
            errors=result.errors,
            retry=result.retry,
            parallel_index=result.parallel_index,
            start_time=result.start_time,
            worker_index=result.worker_index,
            error=result.error,
            browser=self.browser_for(test),
        )
        if not self.run.counts.record(result.status):
            log.debug("Not counting unrecognized status %r", result.status)
        self.run.entries.append(entry)
        return entry

    def end(self, status: str) -> Run:
        """Finalize the run with its terminal status."""
        if not self.run.completed:
            elapsed = datetime.now(UTC) - self.run.start_time
            self.run.duration = int(elapsed.total_seconds() * 1000)
            self.run.status = status
            self.run.completed = True
        return self.run

    def browser_for(self, test: TestCase) -> BrowserContext:
        """Look up the browser context of the project a test belongs to.

        The project is the grand-parent suite of the test (project > file >
        test). Unknown projects yield an empty context.
        """
        project_suite = test.parent.parent if test.parent else None
        project_name = project_suite.title if project_suite else "unknown"
        return self.browsers.get(project_name or "unknown", BrowserContext())

    def _test_info(self, test: TestCase) -> TestInfo:
        return TestInfo(
            title=test.title,
            location=format_location(test.location, self.project_root),
            tags=[annotation.type for annotation in test.annotations],
            retries=test.retries,
            expected_status=test.expected_status,
            file_name=test.location.file if test.location else None,
            suite_title=test.parent.title if test.parent else None,
            test_id=test.id,
        )
