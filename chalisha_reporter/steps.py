"""Capture of nested test steps into a depth-bounded tree."""

import os
from collections.abc import Sequence
from pathlib import Path

from chalisha_reporter.models.report import StepSummary
from chalisha_reporter.models.runner import Location, TestStep

MAX_STEP_DEPTH = 4


def format_location(location: Location | None, project_root: Path) -> str:
    """Format a source location as ``relative/path:line``, or empty if unknown."""
    if location is None or not location.file:
        return ""
    return f"{os.path.relpath(location.file, project_root)}:{location.line}"


def capture_steps(
    steps: Sequence[TestStep] | None,
    project_root: Path,
    level: int = 0,
) -> Sequence[StepSummary]:
    """Recursively capture steps, dropping everything at MAX_STEP_DEPTH and below.

    Args:
        steps: Steps reported by the runner
        project_root: Directory source locations are made relative to
        level: Depth of ``steps`` in the tree, the root steps being level 0

    Returns:
        Summaries of the steps, in runner order

    """
    if not steps or level >= MAX_STEP_DEPTH:
        return []

    return [
        StepSummary(
            name=step.title,
            duration=step.duration,
            location=format_location(step.location, project_root),
            steps=capture_steps(step.steps, project_root, level + 1),
            error=step.error is not None,
        )
        for step in steps
    ]
