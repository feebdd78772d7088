"""
Core comparison logic.

UI-agnostic models, the directory scanner, the comparator and the
reporters it notifies.
"""

from syncscope.core.models import (
    CompareProgress,
    ComparisonResult,
    ComparisonSummary,
    FileCategory,
    FileRecord,
)
from syncscope.core.report import (
    ComparisonReporter,
    CompositeReporter,
    ConsoleReporter,
    LoggingReporter,
    NullReporter,
    format_summary,
)

__all__ = [
    # Models
    'CompareProgress',
    'ComparisonResult',
    'ComparisonSummary',
    'FileCategory',
    'FileRecord',
    # Reporting
    'ComparisonReporter',
    'CompositeReporter',
    'ConsoleReporter',
    'LoggingReporter',
    'NullReporter',
    'format_summary',
]
