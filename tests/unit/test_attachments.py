"""Tests for attachment relocation."""

from pathlib import Path

import pytest

from chalisha_reporter.attachments import relocate_attachments
from chalisha_reporter.models.report import ReportAttachment
from chalisha_reporter.models.runner import Attachment


@pytest.fixture
def report_dir(tmp_path: Path) -> Path:
    """Create the report directory."""
    path = tmp_path / "report"
    path.mkdir()
    return path


@pytest.fixture
def screenshot(tmp_path: Path) -> Path:
    """Create an attachment file outside the report directory."""
    path = tmp_path / "results" / "screenshot.png"
    path.parent.mkdir()
    path.write_bytes(b"\x89PNG")
    return path


def test_copies_attachment_under_fresh_name(
    report_dir: Path, screenshot: Path
) -> None:
    """Copies the file to the data directory, keeping the extension."""
    data_dir = report_dir / "data"
    attachment = Attachment(name="screenshot", type="image/png", path=str(screenshot))

    (relocated,) = relocate_attachments([attachment], data_dir, report_dir)

    assert relocated.file_name is not None
    assert relocated.file_name.endswith(".png")
    assert relocated.file_name != "screenshot.png"
    assert relocated.path == str(data_dir / relocated.file_name)
    assert relocated.url == f"./data/{relocated.file_name}"
    assert relocated.name == "screenshot"
    assert relocated.type == "image/png"
    assert (data_dir / relocated.file_name).read_bytes() == b"\x89PNG"


def test_keeps_original_file(report_dir: Path, screenshot: Path) -> None:
    """Leaves the original attachment in place."""
    attachment = Attachment(name="screenshot", type="image/png", path=str(screenshot))

    relocate_attachments([attachment], report_dir / "data", report_dir)

    assert screenshot.exists()


def test_identical_names_get_distinct_destinations(
    report_dir: Path, screenshot: Path
) -> None:
    """Generates a distinct file name for every attachment."""
    attachments = [
        Attachment(name="screenshot", type="image/png", path=str(screenshot)),
        Attachment(name="screenshot", type="image/png", path=str(screenshot)),
    ]

    first, second = relocate_attachments(attachments, report_dir / "data", report_dir)

    assert first.file_name != second.file_name
    assert len(list((report_dir / "data").iterdir())) == 2


def test_passes_through_attachments_without_path(report_dir: Path) -> None:
    """Keeps URL-only attachments unchanged and copies nothing."""
    attachment = Attachment(
        name="trace", type="text/html", url="https://example.com/trace"
    )

    (relocated,) = relocate_attachments([attachment], report_dir / "data", report_dir)

    assert relocated == ReportAttachment(
        name="trace", type="text/html", url="https://example.com/trace"
    )
    assert not (report_dir / "data").exists()


def test_preserves_order(report_dir: Path, screenshot: Path) -> None:
    """Returns attachments in input order."""
    attachments = [
        Attachment(name="first", type="text/plain", url="https://example.com/1"),
        Attachment(name="second", type="image/png", path=str(screenshot)),
        Attachment(name="third", type="text/plain", url="https://example.com/3"),
    ]

    relocated = relocate_attachments(attachments, report_dir / "data", report_dir)

    assert [a.name for a in relocated] == ["first", "second", "third"]


def test_propagates_copy_failure(report_dir: Path, tmp_path: Path) -> None:
    """Raises when the attachment file cannot be copied."""
    attachment = Attachment(
        name="missing", type="image/png", path=str(tmp_path / "missing.png")
    )

    with pytest.raises(FileNotFoundError):
        relocate_attachments([attachment], report_dir / "data", report_dir)


def test_copy_failure_removes_earlier_copies(
    report_dir: Path, screenshot: Path, tmp_path: Path
) -> None:
    """Leaves no orphan copies behind when a later attachment fails."""
    data_dir = report_dir / "data"
    attachments = [
        Attachment(name="screenshot", type="image/png", path=str(screenshot)),
        Attachment(name="missing", type="image/png", path=str(tmp_path / "gone.png")),
    ]

    with pytest.raises(FileNotFoundError):
        relocate_attachments(attachments, data_dir, report_dir)

    assert list(data_dir.iterdir()) == []
    assert screenshot.exists()
