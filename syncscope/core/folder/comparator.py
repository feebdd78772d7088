"""
Folder comparison engine.

Compares two directory trees and classifies every file as:
- Identical (same relative path, and same length when checked)
- Different (same relative path, different length)
- Missing (only in the source)
- Extra (only in the target)
- Similar (a missing/extra pair sharing name and length, likely a move)

Files are matched by relative path only; contents are never read.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Optional

from syncscope.core.models import (
    CompareProgress,
    ComparisonResult,
    FileCategory,
    FileRecord,
)
from syncscope.core.folder.scanner import FolderScanner
from syncscope.core.report import ComparisonReporter, CompositeReporter, NullReporter


class DuplicateKeyError(ValueError):
    """Raised when two records of the same tree share a relative path."""

    def __init__(self, relative_path: str, tree: str):
        self.relative_path = relative_path
        self.tree = tree
        super().__init__(f"Duplicate relative path in {tree} tree: {relative_path}")


class ComparisonNotRunError(RuntimeError):
    """Raised when results are requested before a comparison has completed."""


@dataclass
class CompareOptions:
    """Options for folder comparison."""
    check_length: bool = False
    progress_interval: int = 1000


def _index_records(records: Iterable[FileRecord], tree: str) -> dict[str, FileRecord]:
    """Key records by relative path, refusing duplicates."""
    index: dict[str, FileRecord] = {}
    for record in records:
        if record.relative_path in index:
            raise DuplicateKeyError(record.relative_path, tree)
        index[record.relative_path] = record
    return index


def classify(
    source_records: Iterable[FileRecord],
    target_records: Iterable[FileRecord],
    check_length: bool = False,
    reporter: Optional[ComparisonReporter] = None,
    progress_interval: int = 1000,
) -> ComparisonResult:
    """
    Classify source records against target records.

    Args:
        source_records: Records of the source tree, consumed once
        target_records: Records of the target tree, consumed once
        check_length: Treat same-path files with different lengths as different
        reporter: Receives progress and summary notifications
        progress_interval: Report progress every this many source records

    Returns:
        A new ComparisonResult

    Raises:
        DuplicateKeyError: If a relative path repeats within one tree
    """
    reporter = reporter or NullReporter()
    reporter.comparison_started()

    start_time = time.perf_counter()

    target_index = _index_records(target_records, 'target')
    source_index: dict[str, FileRecord] = {}

    # Every target record is extra until a source record claims its path
    extra: dict[str, FileRecord] = dict(target_index)
    identical: list[FileRecord] = []
    different: list[FileRecord] = []
    missing: list[FileRecord] = []

    for source_file in source_records:
        if source_file.relative_path in source_index:
            raise DuplicateKeyError(source_file.relative_path, 'source')
        source_index[source_file.relative_path] = source_file

        target_file = target_index.get(source_file.relative_path)
        if target_file is None:
            missing.append(source_file)
        else:
            extra.pop(source_file.relative_path, None)
            if not check_length or source_file.length == target_file.length:
                identical.append(source_file)
            else:
                different.append(source_file)

        processed = len(identical) + len(different) + len(missing)
        if progress_interval > 0 and processed % progress_interval == 0:
            reporter.progress(CompareProgress(processed, source_file.relative_path))

    extra_files = tuple(extra.values())
    similar = tuple(
        (missing_file, extra_file)
        for missing_file in missing
        for extra_file in extra_files
        if missing_file.name == extra_file.name
        and (not check_length or missing_file.length == extra_file.length)
    )

    elapsed = time.perf_counter() - start_time
    reporter.comparison_finished(elapsed)

    result = ComparisonResult(
        source_index=source_index,
        target_index=target_index,
        identical=tuple(identical),
        different=tuple(different),
        missing=tuple(missing),
        extra=extra_files,
        similar=similar,
        elapsed=elapsed,
        check_length=check_length,
    )
    reporter.summary(result.summary)
    return result


class Comparator:
    """
    Compares a source tree against a target tree.

    The roots are fixed at construction. Each call to `run` enumerates
    both trees, classifies them, and replaces the current result. Only
    one run executes at a time; accessors share the same lock so they
    never observe a half-built result.

    Usage:
        comparator = Comparator("/data/source", "/backup/target")
        comparator.run()
        print(comparator.missing_files)
    """

    def __init__(
        self,
        source_path: Path | str,
        target_path: Path | str,
        options: Optional[CompareOptions] = None,
        reporter: Optional[ComparisonReporter] = None,
        scanner: Optional[FolderScanner] = None
    ):
        self.source_path = Path(source_path)
        self.target_path = Path(target_path)
        self.options = options or CompareOptions()
        self.reporter = reporter or NullReporter()
        self.scanner = scanner or FolderScanner()
        self._lock = threading.Lock()
        self._result: Optional[ComparisonResult] = None

    def run(self, reporter: Optional[ComparisonReporter] = None) -> ComparisonResult:
        """
        Enumerate both trees and classify their files.

        Args:
            reporter: Notified for this run only, after the comparator's own reporter

        Enumeration errors propagate unchanged. On any error the previous
        result, if any, is kept.
        """
        with self._lock:
            logging.info(f"Comparator - Comparing {self.source_path} with {self.target_path}")
            return self._run_locked(
                self.scanner.iter_files(self.source_path),
                self.scanner.iter_files(self.target_path),
                reporter,
            )

    def run_records(
        self,
        source_records: Iterable[FileRecord],
        target_records: Iterable[FileRecord],
        reporter: Optional[ComparisonReporter] = None
    ) -> ComparisonResult:
        """Classify caller-supplied records instead of scanning the roots."""
        with self._lock:
            return self._run_locked(source_records, target_records, reporter)

    def _run_locked(
        self,
        source_records: Iterable[FileRecord],
        target_records: Iterable[FileRecord],
        reporter: Optional[ComparisonReporter]
    ) -> ComparisonResult:
        reporter = self.reporter if reporter is None else CompositeReporter(self.reporter, reporter)

        try:
            result = classify(
                source_records,
                target_records,
                check_length=self.options.check_length,
                reporter=reporter,
                progress_interval=self.options.progress_interval,
            )
        except DuplicateKeyError as e:
            logging.error(f"Comparator - {e}")
            raise
        except OSError as e:
            logging.error(f"Comparator - Enumeration failed: {e}")
            raise

        result = replace(
            result,
            source_path=str(self.source_path),
            target_path=str(self.target_path),
        )
        self._result = result
        return result

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def has_result(self) -> bool:
        with self._lock:
            return self._result is not None

    @property
    def result(self) -> ComparisonResult:
        """Result of the last successful run."""
        with self._lock:
            if self._result is None:
                raise ComparisonNotRunError("No comparison has completed yet")
            return self._result

    @property
    def source_files(self) -> list[str]:
        return list(self.result.source_index)

    @property
    def target_files(self) -> list[str]:
        return list(self.result.target_index)

    @property
    def identical_files(self) -> list[str]:
        return self.result.paths(FileCategory.IDENTICAL)

    @property
    def different_files(self) -> list[str]:
        return self.result.paths(FileCategory.DIFFERENT)

    @property
    def missing_files(self) -> list[str]:
        return self.result.paths(FileCategory.MISSING)

    @property
    def extra_files(self) -> list[str]:
        return self.result.paths(FileCategory.EXTRA)

    @property
    def similar_files(self) -> list[tuple[str, str]]:
        return self.result.similar_paths
