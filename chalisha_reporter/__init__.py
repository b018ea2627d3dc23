"""Test run reporter producing JSON reports with optional blob storage upload."""

from chalisha_reporter.config import ReporterOptions
from chalisha_reporter.reporter import ChalishaReporter

__all__ = ["ChalishaReporter", "ReporterOptions"]
