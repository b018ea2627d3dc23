"""Models for the persisted report documents."""

from collections.abc import Sequence
from datetime import datetime

from pydantic import Field

from chalisha_reporter.models.base import Model
from chalisha_reporter.models.runner import TestError, Viewport


class StepSummary(Model):
    """Captured step, with children truncated at the maximum depth."""

    name: str
    duration: int | float
    location: str = ""
    steps: Sequence["StepSummary"] = Field(default_factory=list)
    error: bool = False


class ReportAttachment(Model):
    """Attachment as recorded in the report.

    Relocated attachments carry the generated file name along with the new
    path and URL; pass-through attachments keep their original fields.
    """

    name: str
    type: str
    path: str | None = None
    url: str | None = None
    file_name: str | None = None


class BrowserContext(Model):
    """Browser settings of the project a test ran in.

    All fields are optional so that an unresolved project is recorded as an
    empty object.
    """

    name: str | None = None
    headless: bool | None = None
    viewport: Viewport | None = None
    is_mobile: bool | None = None
    has_touch: bool | None = None


class TestInfo(Model):
    """Identity and location metadata of a test."""

    __test__ = False

    title: str
    location: str = ""
    tags: Sequence[str] = Field(default_factory=list)
    retries: int = 0
    expected_status: str = ""
    file_name: str | None = None
    suite_title: str | None = None
    test_id: str = ""


class TestReportEntry(Model):
    """Full record of one executed test."""

    __test__ = False

    test: TestInfo
    steps: Sequence[StepSummary] = Field(default_factory=list)
    attachments: Sequence[ReportAttachment] = Field(default_factory=list)
    status: str
    duration: int | float = 0
    errors: Sequence[TestError] = Field(default_factory=list)
    retry: int = 0
    parallel_index: int = 0
    start_time: datetime | None = None
    worker_index: int = 0
    error: TestError | None = None
    browser: BrowserContext = Field(default_factory=BrowserContext)


class RunSummary(Model):
    """Run-wide outcome, persisted as the result document."""

    run_id: str
    start_time: datetime
    duration: int = Field(..., description="Run duration in milliseconds")
    status: str
    total_tests: int
    passed_tests: int
    failed_tests: int
    skipped_tests: int
    timed_out_tests: int
    interrupted_tests: int


class Report(RunSummary):
    """Run summary together with every test entry, in execution order."""

    tests: Sequence[TestReportEntry] = Field(default_factory=list)

    def summary(self) -> RunSummary:
        """Return the summary part of the report."""
        return RunSummary.model_validate(
            self.model_dump(exclude={"tests"}, by_alias=True)
        )
