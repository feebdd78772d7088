"""
Core data models for the folder comparison application.

This module defines the data structures shared by the scanner,
the comparator, the reporters and the export services:
- File records discovered under a root directory
- Comparison results and their summaries
- Progress information

All models are designed to be:
- UI-agnostic (can be used with any frontend)
- Immutable where practical
- Type-hinted for IDE support
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional


# =============================================================================
# Enumerations
# =============================================================================

class FileCategory(Enum):
    """Classification of a file in a folder comparison."""
    IDENTICAL = auto()  # Same relative path on both sides (and same length when checked)
    DIFFERENT = auto()  # Same relative path, length differs
    MISSING = auto()    # Only in the source tree
    EXTRA = auto()      # Only in the target tree


# =============================================================================
# File Models
# =============================================================================

@dataclass(frozen=True)
class FileRecord:
    """
    One file discovered under a root directory.

    Records are compared by relative path, name and length. The absolute
    path is carried along for display only.
    """
    relative_path: str
    name: str
    length: int
    path: Optional[Path] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_path(cls, path: Path | str, root: Path | str) -> 'FileRecord':
        """Build a record for a file on disk, relative to `root`."""
        path = Path(path)
        relative = path.relative_to(root).as_posix()
        return cls(
            relative_path=relative,
            name=path.name,
            length=path.stat().st_size,
            path=path,
        )

    @property
    def size_formatted(self) -> str:
        """Get human-readable file size."""
        size = float(self.length)
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size < 1024:
                return f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} PB"


# =============================================================================
# Comparison Models
# =============================================================================

@dataclass(frozen=True)
class CompareProgress:
    """Progress of the classification pass."""
    processed: int      # identical + different + missing so far
    current_path: str = ""


@dataclass(frozen=True)
class ComparisonSummary:
    """Counts of every category of a comparison."""
    source_count: int = 0
    target_count: int = 0
    identical_count: int = 0
    different_count: int = 0
    missing_count: int = 0
    extra_count: int = 0
    similar_count: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            'source': self.source_count,
            'target': self.target_count,
            'identical': self.identical_count,
            'different': self.different_count,
            'missing': self.missing_count,
            'extra': self.extra_count,
            'similar': self.similar_count,
        }


SimilarPair = tuple[FileRecord, FileRecord]


@dataclass(frozen=True)
class ComparisonResult:
    """
    Complete result of one comparison run.

    A new result is built on every run and never updated afterwards.
    Category tuples keep enumeration order: `identical`, `different` and
    `missing` follow the source, `extra` follows the target, and `similar`
    is ordered by missing record first, then extra record.
    """
    source_index: Mapping[str, FileRecord]
    target_index: Mapping[str, FileRecord]
    identical: tuple[FileRecord, ...] = ()
    different: tuple[FileRecord, ...] = ()
    missing: tuple[FileRecord, ...] = ()
    extra: tuple[FileRecord, ...] = ()
    similar: tuple[SimilarPair, ...] = ()
    elapsed: float = 0.0          # Seconds taken by the classification pass
    check_length: bool = False
    source_path: Optional[str] = None
    target_path: Optional[str] = None

    def __post_init__(self) -> None:
        # Freeze the indexes so callers only ever see read-only snapshots
        if not isinstance(self.source_index, MappingProxyType):
            object.__setattr__(self, 'source_index', MappingProxyType(dict(self.source_index)))
        if not isinstance(self.target_index, MappingProxyType):
            object.__setattr__(self, 'target_index', MappingProxyType(dict(self.target_index)))

    @property
    def summary(self) -> ComparisonSummary:
        return ComparisonSummary(
            source_count=len(self.source_index),
            target_count=len(self.target_index),
            identical_count=len(self.identical),
            different_count=len(self.different),
            missing_count=len(self.missing),
            extra_count=len(self.extra),
            similar_count=len(self.similar),
        )

    @property
    def is_identical(self) -> bool:
        """Check if both trees hold the same files."""
        return not (self.different or self.missing or self.extra)

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed * 1000)

    def records(self, category: FileCategory) -> tuple[FileRecord, ...]:
        """Get the records classified under `category`."""
        if category is FileCategory.IDENTICAL:
            return self.identical
        if category is FileCategory.DIFFERENT:
            return self.different
        if category is FileCategory.MISSING:
            return self.missing
        return self.extra

    def paths(self, category: FileCategory) -> list[str]:
        """Get the relative paths classified under `category`."""
        return [record.relative_path for record in self.records(category)]

    @property
    def similar_paths(self) -> list[tuple[str, str]]:
        return [(m.relative_path, e.relative_path) for m, e in self.similar]

