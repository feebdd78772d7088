"""
Reporters for comparison progress and summaries.

The comparator never writes output itself. It notifies a
ComparisonReporter, which decides where the lines go:
- ConsoleReporter writes plain text to a stream
- LoggingReporter routes the same events through `logging`
- NullReporter drops everything
- CompositeReporter fans events out to several reporters
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from syncscope.core.models import CompareProgress, ComparisonSummary


def format_summary(summary: ComparisonSummary) -> list[str]:
    """Build the seven summary lines of a comparison."""
    return [
        f"{summary.source_count} source files.",
        f"{summary.target_count} target files.",
        f"{summary.identical_count} identical files.",
        f"{summary.different_count} different files.",
        f"{summary.missing_count} missing files.",
        f"{summary.extra_count} extra files.",
        f"{summary.similar_count} similar files.",
    ]


class ComparisonReporter:
    """
    Receives notifications from a comparison run.

    Subclass and override the hooks of interest; the defaults do nothing.
    """

    def comparison_started(self) -> None:
        pass

    def progress(self, progress: CompareProgress) -> None:
        pass

    def comparison_finished(self, elapsed: float) -> None:
        pass

    def summary(self, summary: ComparisonSummary) -> None:
        pass


class NullReporter(ComparisonReporter):
    """Reporter that discards every notification."""


class ConsoleReporter(ComparisonReporter):
    """Line-oriented text reporter."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def _write(self, line: str = "") -> None:
        self.stream.write(line + "\n")

    def comparison_started(self) -> None:
        self._write("Starting comparison...")

    def progress(self, progress: CompareProgress) -> None:
        self._write(f"\t{progress.processed}")

    def comparison_finished(self, elapsed: float) -> None:
        self._write(f"Comparison run in {int(elapsed * 1000)} ms.")

    def summary(self, summary: ComparisonSummary) -> None:
        self._write("Process summary:")
        for line in format_summary(summary):
            self._write(f"\t- {line}")
        self._write()
        self.stream.flush()


class LoggingReporter(ComparisonReporter):
    """Reporter that emits every event as a log record."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger()

    def comparison_started(self) -> None:
        self.logger.info("Starting comparison...")

    def progress(self, progress: CompareProgress) -> None:
        self.logger.debug(f"Processed {progress.processed} source files ({progress.current_path})")

    def comparison_finished(self, elapsed: float) -> None:
        self.logger.info(f"Comparison run in {int(elapsed * 1000)} ms.")

    def summary(self, summary: ComparisonSummary) -> None:
        self.logger.info("Process summary: " + " ".join(format_summary(summary)))


class CompositeReporter(ComparisonReporter):
    """Reporter that forwards every event to several reporters in order."""

    def __init__(self, *reporters: ComparisonReporter):
        self.reporters = reporters

    def comparison_started(self) -> None:
        for reporter in self.reporters:
            reporter.comparison_started()

    def progress(self, progress: CompareProgress) -> None:
        for reporter in self.reporters:
            reporter.progress(progress)

    def comparison_finished(self, elapsed: float) -> None:
        for reporter in self.reporters:
            reporter.comparison_finished(elapsed)

    def summary(self, summary: ComparisonSummary) -> None:
        for reporter in self.reporters:
            reporter.summary(summary)
