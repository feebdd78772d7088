"""
Workers for folder comparison operations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject

from syncscope.core.folder.comparator import Comparator, CompareOptions
from syncscope.core.folder.scanner import FolderScanner
from syncscope.core.models import CompareProgress, ComparisonResult, ComparisonSummary
from syncscope.core.report import ComparisonReporter, format_summary
from syncscope.workers.base_worker import BaseWorker, WorkerSignals


class SignalReporter(ComparisonReporter):
    """Reporter that forwards comparison events as worker signals."""

    def __init__(self, signals: WorkerSignals):
        self.signals = signals

    def comparison_started(self) -> None:
        self.signals.status.emit("Starting comparison...")

    def progress(self, progress: CompareProgress) -> None:
        self.signals.progress.emit(progress.processed, progress.current_path)
        self.signals.progress_detail.emit(progress)

    def comparison_finished(self, elapsed: float) -> None:
        self.signals.status.emit(f"Comparison run in {int(elapsed * 1000)} ms.")

    def summary(self, summary: ComparisonSummary) -> None:
        self.signals.status.emit("Process summary: " + " ".join(format_summary(summary)))


class ComparisonWorker(BaseWorker):
    """
    Worker for comparing folders.

    Handles large directory trees without blocking the caller's
    event loop. Events reach both the comparator's own reporter and
    this worker's signals. Several workers may share one comparator;
    its lock runs them one after another.
    """

    def __init__(
        self,
        comparator: Comparator,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.comparator = comparator
        self.reporter = SignalReporter(self.signals)

    @classmethod
    def for_paths(
        cls,
        source_path: str | Path,
        target_path: str | Path,
        options: Optional[CompareOptions] = None,
        scanner: Optional[FolderScanner] = None,
        parent: Optional[QObject] = None
    ) -> 'ComparisonWorker':
        """Create a worker around a new comparator for two roots."""
        comparator = Comparator(source_path, target_path, options=options, scanner=scanner)
        return cls(comparator, parent=parent)

    def do_work(self) -> ComparisonResult:
        self.report_status(
            f"Comparing {self.comparator.source_path} with {self.comparator.target_path}..."
        )
        result = self.comparator.run(reporter=self.reporter)
        self.report_status("Complete")
        return result
