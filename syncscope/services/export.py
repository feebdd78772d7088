"""
Export of comparison results.

Handles:
- JSON documents for other tools
- Plain-text listings for the console
- Atomic writes
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from syncscope.core.models import ComparisonResult, FileCategory


CATEGORY_TITLES = {
    FileCategory.IDENTICAL: "Identical files",
    FileCategory.DIFFERENT: "Different files",
    FileCategory.MISSING: "Missing files (only in source)",
    FileCategory.EXTRA: "Extra files (only in target)",
}


def result_to_dict(result: ComparisonResult) -> dict[str, Any]:
    """Convert a result to a JSON-serialisable dictionary."""
    return {
        'source_path': result.source_path,
        'target_path': result.target_path,
        'check_length': result.check_length,
        'elapsed_ms': result.elapsed_ms,
        'summary': result.summary.as_dict(),
        'identical': result.paths(FileCategory.IDENTICAL),
        'different': result.paths(FileCategory.DIFFERENT),
        'missing': result.paths(FileCategory.MISSING),
        'extra': result.paths(FileCategory.EXTRA),
        'similar': [
            {'missing': missing, 'extra': extra}
            for missing, extra in result.similar_paths
        ],
    }


def write_json(result: ComparisonResult, path: Path | str) -> Path:
    """
    Write a result as JSON.

    The document is written to a temporary file next to `path` and then
    moved into place, so readers never see a partial file.
    """
    path = Path(path)
    content = json.dumps(result_to_dict(result), indent=2)

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.write('\n')
        os.replace(temp_path, path)
    except OSError:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise

    logging.info(f"Export - Wrote comparison result to {path}")
    return path


def format_listing(result: ComparisonResult, include_identical: bool = False) -> str:
    """Build a human-readable listing of every classified file."""
    lines: list[str] = []

    for category, title in CATEGORY_TITLES.items():
        if category is FileCategory.IDENTICAL and not include_identical:
            continue

        records = result.records(category)
        if not records:
            continue

        lines.append(f"{title} ({len(records)}):")
        for record in records:
            lines.append(f"\t{record.relative_path} ({record.size_formatted})")
        lines.append("")

    if result.similar:
        lines.append(f"Similar files ({len(result.similar)}):")
        for missing, extra in result.similar:
            lines.append(f"\t{missing.relative_path} -> {extra.relative_path}")
        lines.append("")

    return "\n".join(lines)
