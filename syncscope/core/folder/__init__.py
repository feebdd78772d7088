"""
Folder comparison module.

Provides functionality for:
- Recursive directory scanning
- Classification of a source tree against a target tree
"""

from syncscope.core.folder.scanner import (
    FolderScanner,
    ScanOptions,
)
from syncscope.core.folder.comparator import (
    Comparator,
    CompareOptions,
    ComparisonNotRunError,
    DuplicateKeyError,
    classify,
)

__all__ = [
    # Scanner
    'FolderScanner',
    'ScanOptions',
    # Comparator
    'Comparator',
    'CompareOptions',
    'ComparisonNotRunError',
    'DuplicateKeyError',
    'classify',
]
