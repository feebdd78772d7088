from __future__ import annotations

from pathlib import Path

import pytest

from syncscope.core.models import FileRecord


def record(relative_path: str, length: int = 0) -> FileRecord:
    return FileRecord(
        relative_path=relative_path,
        name=relative_path.rsplit("/", 1)[-1],
        length=length,
    )


def write_tree(root: Path, files: dict[str, int]) -> Path:
    """Create `files` (relative path -> byte length) under `root`."""
    root.mkdir(parents=True, exist_ok=True)
    for relative_path, length in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * length)
    return root


@pytest.fixture
def trees(tmp_path: Path):
    def build(source: dict[str, int], target: dict[str, int]) -> tuple[Path, Path]:
        return (
            write_tree(tmp_path / "source", source),
            write_tree(tmp_path / "target", target),
        )

    return build
