"""
Directory scanner for folder comparison.

Provides lazy, recursive directory traversal with:
- Relative path computation
- Pattern-based filtering
- Symlink handling

Errors raised while walking propagate to the caller.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from syncscope.core.models import FileRecord


@dataclass
class ScanOptions:
    """Options for directory scanning."""
    follow_symlinks: bool = False
    include_hidden: bool = True

    # File filters
    include_patterns: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)

    def is_excluded(self, name: str, relative_path: str) -> bool:
        """Check if an entry matches one of the exclude patterns."""
        if not self.include_hidden and name.startswith('.'):
            return True

        for pattern in self.exclude_patterns:
            if fnmatch.fnmatch(name, pattern):
                return True
            if fnmatch.fnmatch(relative_path, pattern):
                return True

        return False

    def should_include(self, name: str, relative_path: str) -> bool:
        """Check if a file should be listed (directories are always walked)."""
        if self.is_excluded(name, relative_path):
            return False

        if self.include_patterns:
            return any(
                fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(relative_path, pattern)
                for pattern in self.include_patterns
            )

        return True


class FolderScanner:
    """
    Enumerates the regular files under a root directory.

    Directory and file names are visited in sorted order so that two
    scans of an unchanged tree yield the same sequence.
    """

    def __init__(self, options: Optional[ScanOptions] = None):
        self.options = options or ScanOptions()

    def iter_files(self, root_path: Path | str) -> Iterator[FileRecord]:
        """
        Lazily yield a FileRecord for every regular file under `root_path`.

        Raises:
            FileNotFoundError: If the root does not exist
            NotADirectoryError: If the root is not a directory
            OSError: Any error met while walking or reading metadata
        """
        root_path = Path(root_path).resolve()

        if not root_path.exists():
            logging.error(f"FolderScanner - Root path not found: {root_path}")
            raise FileNotFoundError(f"Directory not found: {root_path}")

        if not root_path.is_dir():
            logging.error(f"FolderScanner - Root path is not a directory: {root_path}")
            raise NotADirectoryError(f"Not a directory: {root_path}")

        def on_walk_error(error: OSError) -> None:
            logging.error(f"FolderScanner - Walk error at {error.filename}: {error}")
            raise error

        for dirpath, dirnames, filenames in os.walk(
            root_path,
            topdown=True,
            followlinks=self.options.follow_symlinks,
            onerror=on_walk_error
        ):
            current_path = Path(dirpath)
            rel_dir = current_path.relative_to(root_path)

            # Filter directories in-place to control recursion
            dirnames[:] = sorted(
                d for d in dirnames
                if not self.options.is_excluded(d, (rel_dir / d).as_posix())
            )

            for filename in sorted(filenames):
                rel_path = (rel_dir / filename).as_posix()

                if not self.options.should_include(filename, rel_path):
                    continue

                file_path = current_path / filename
                if not self._is_regular_file(file_path):
                    continue

                yield FileRecord.from_path(file_path, root_path)

    def scan(self, root_path: Path | str) -> list[FileRecord]:
        """Eagerly list every regular file under `root_path`."""
        files = list(self.iter_files(root_path))
        logging.debug(f"FolderScanner - Found {len(files)} files under {root_path}")
        return files

    def _is_regular_file(self, path: Path) -> bool:
        """Check whether `path` is a regular file under the symlink policy."""
        # Use lstat to not follow symlinks initially
        stat_result = path.lstat()

        if stat.S_ISLNK(stat_result.st_mode):
            if not self.options.follow_symlinks:
                return False
            try:
                stat_result = path.stat()
            except FileNotFoundError:
                logging.debug(f"FolderScanner - Skipping broken symlink {path}")
                return False

        return stat.S_ISREG(stat_result.st_mode)
