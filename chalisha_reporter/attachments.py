"""Relocation of test attachments into report-local storage."""

import logging
import shutil
import uuid
from collections.abc import Sequence
from pathlib import Path

from chalisha_reporter.models.report import ReportAttachment
from chalisha_reporter.models.runner import Attachment

log = logging.getLogger(__name__)


def relocate_attachments(
    attachments: Sequence[Attachment],
    destination_dir: Path,
    report_dir: Path,
) -> Sequence[ReportAttachment]:
    """Copy file attachments under fresh unique names and rewrite their references.

    Each attachment with a local path is copied to
    ``destination_dir/<uuid4><original extension>``. The original file is left
    in place. Attachments without a path are passed through unchanged.

    If any copy fails, the copies already made by this call are removed before
    the error is raised, so the destination holds no unreferenced files.

    Args:
        attachments: Attachments reported by the runner
        destination_dir: Directory receiving the copies, created if missing
        report_dir: Report root the recorded URLs are relative to

    Returns:
        Attachments in the same order, pointing to the copies

    Raises:
        OSError: If an attachment cannot be copied

    """
    relocated: list[ReportAttachment] = []
    copies: list[Path] = []
    try:
        for attachment in attachments:
            if not attachment.path:
                relocated.append(
                    ReportAttachment(
                        name=attachment.name,
                        type=attachment.type,
                        url=attachment.url,
                    )
                )
                continue

            file_name = f"{uuid.uuid4()}{Path(attachment.path).suffix}"
            destination = destination_dir / file_name
            destination_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(attachment.path, destination)
            copies.append(destination)
            log.debug("Copied attachment %s to %s", attachment.path, destination)

            relocated.append(
                ReportAttachment(
                    name=attachment.name,
                    type=attachment.type,
                    path=str(destination),
                    url=f"./{destination.relative_to(report_dir).as_posix()}",
                    file_name=file_name,
                )
            )
    except OSError:
        for copy in copies:
            copy.unlink(missing_ok=True)
        log.debug("Removed %d attachment copies after a failed copy", len(copies))
        raise

    return relocated
