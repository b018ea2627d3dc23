"""Models for lifecycle payloads delivered by the host test runner.

Every optional field carries a default so that incomplete payloads never
abort report generation.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from pydantic import ConfigDict, Field

from chalisha_reporter.models.base import Model


class Location(Model):
    """Source location of a test or step."""

    file: str = ""
    line: int = 0
    column: int = 0


class Annotation(Model):
    """Annotation attached to a test (tags, skip reasons, ...)."""

    type: str = ""
    description: str | None = None


class SuiteRef(Model):
    """Parent suite of a test, linked up to the project suite."""

    title: str = ""
    parent: "SuiteRef | None" = None


class TestError(Model):
    """Error raised while running a test or step."""

    __test__ = False

    model_config = ConfigDict(extra="allow")

    message: str | None = None
    stack: str | None = None
    value: str | None = None


class Attachment(Model):
    """Artifact produced by a test, either a file on disk or an inline URL."""

    name: str = ""
    type: str = Field(default="", description="MIME type of the attachment")
    path: str | None = None
    url: str | None = None


class TestStep(Model):
    """A (possibly nested) step executed inside a test."""

    __test__ = False

    title: str = ""
    duration: int | float = 0
    location: Location | None = None
    steps: Sequence["TestStep"] = Field(default_factory=list)
    error: TestError | None = None


class TestCase(Model):
    """Static description of a test as seen by the runner."""

    __test__ = False

    title: str = ""
    location: Location | None = None
    annotations: Sequence[Annotation] = Field(default_factory=list)
    retries: int = 0
    expected_status: str = "passed"
    id: str = ""
    parent: "SuiteRef | None" = None


class TestResult(Model):
    """Outcome of a single test attempt."""

    __test__ = False

    status: str = ""
    duration: int | float = 0
    errors: Sequence[TestError] = Field(default_factory=list)
    retry: int = 0
    parallel_index: int = 0
    start_time: datetime | None = None
    worker_index: int = 0
    error: TestError | None = None
    attachments: Sequence[Attachment] = Field(default_factory=list)
    steps: Sequence[TestStep] = Field(default_factory=list)


class FullResult(Model):
    """Outcome of the whole run as reported by the runner."""

    status: str = ""
    duration: int | float = 0
    start_time: datetime | None = None


class Viewport(Model):
    """Browser viewport dimensions."""

    width: int
    height: int


class ProjectUse(Model):
    """Browser options of a runner project."""

    headless: bool | None = None
    viewport: Viewport | None = None
    is_mobile: bool | None = None
    has_touch: bool | None = None


class Project(Model):
    """A runner project, typically one per browser."""

    name: str = ""
    use: ProjectUse = Field(default_factory=ProjectUse)


class RunnerConfig(Model):
    """Resolved runner configuration passed at run begin."""

    projects: Sequence[Project] = Field(default_factory=list)


class Suite(Protocol):
    """Root suite passed at run begin."""

    def all_tests(self) -> Sequence[TestCase]:
        """Return every test of the run as a flat list."""
