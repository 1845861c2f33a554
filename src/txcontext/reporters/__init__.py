"""Exposes the reporters for use by other modules."""

from .dry_run_reporter import DryRunReporter
from .summary_reporter import SummaryReporter

__all__ = ["DryRunReporter", "SummaryReporter"]
