from __future__ import annotations

import pytest

from syncscope.core.folder import DuplicateKeyError, classify
from syncscope.core.models import CompareProgress, ComparisonSummary, FileCategory
from syncscope.core.report import ComparisonReporter

from conftest import record


class RecordingReporter(ComparisonReporter):
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def comparison_started(self) -> None:
        self.events.append(("started", None))

    def progress(self, progress: CompareProgress) -> None:
        self.events.append(("progress", progress))

    def comparison_finished(self, elapsed: float) -> None:
        self.events.append(("finished", elapsed))

    def summary(self, summary: ComparisonSummary) -> None:
        self.events.append(("summary", summary))


def test_same_path_different_length_is_different_when_length_checked() -> None:
    source = [record("a.txt", 10), record("b.txt", 20)]
    target = [record("a.txt", 10), record("b.txt", 99)]

    result = classify(source, target, check_length=True)

    assert result.paths(FileCategory.IDENTICAL) == ["a.txt"]
    assert result.paths(FileCategory.DIFFERENT) == ["b.txt"]
    assert result.missing == ()
    assert result.extra == ()
    assert result.similar == ()


def test_moved_file_is_reported_as_similar_pair() -> None:
    source = [record("dir1/x.txt", 5)]
    target = [record("dir2/x.txt", 5)]

    result = classify(source, target, check_length=True)

    assert result.paths(FileCategory.MISSING) == ["dir1/x.txt"]
    assert result.paths(FileCategory.EXTRA) == ["dir2/x.txt"]
    assert result.similar_paths == [("dir1/x.txt", "dir2/x.txt")]


def test_empty_source_makes_every_target_file_extra() -> None:
    result = classify([], [record("c.txt", 1)], check_length=True)

    assert result.identical == ()
    assert result.different == ()
    assert result.missing == ()
    assert result.similar == ()
    assert result.paths(FileCategory.EXTRA) == ["c.txt"]
    assert result.summary == ComparisonSummary(target_count=1, extra_count=1)


def test_length_is_ignored_by_default() -> None:
    source = [record("a.txt", 1), record("b.txt", 2)]
    target = [record("a.txt", 100), record("b.txt", 2)]

    result = classify(source, target)

    assert result.different == ()
    assert result.paths(FileCategory.IDENTICAL) == ["a.txt", "b.txt"]


def test_similar_ignores_length_unless_checked() -> None:
    source = [record("old/report.pdf", 10)]
    target = [record("new/report.pdf", 11)]

    assert classify(source, target).similar_paths == [("old/report.pdf", "new/report.pdf")]
    assert classify(source, target, check_length=True).similar == ()


def test_similar_is_a_cross_join_of_missing_and_extra() -> None:
    source = [record("a/photo.jpg", 3), record("b/photo.jpg", 3), record("a/keep.txt", 1)]
    target = [record("c/photo.jpg", 3), record("d/photo.jpg", 3), record("a/keep.txt", 1)]

    result = classify(source, target, check_length=True)

    assert result.similar_paths == [
        ("a/photo.jpg", "c/photo.jpg"),
        ("a/photo.jpg", "d/photo.jpg"),
        ("b/photo.jpg", "c/photo.jpg"),
        ("b/photo.jpg", "d/photo.jpg"),
    ]
    missing = set(result.missing)
    extra = set(result.extra)
    assert all(m in missing and e in extra for m, e in result.similar)


def test_source_is_partitioned_and_extra_is_target_minus_source() -> None:
    source = [
        record("same.txt", 1),
        record("grown.txt", 2),
        record("gone.txt", 3),
        record("sub/moved.bin", 4),
    ]
    target = [
        record("same.txt", 1),
        record("grown.txt", 20),
        record("new.txt", 5),
        record("other/moved.bin", 4),
    ]

    result = classify(source, target, check_length=True)

    categories = [set(result.identical), set(result.different), set(result.missing)]
    assert set().union(*categories) == set(source)
    assert sum(len(c) for c in categories) == len(source)
    source_paths = {r.relative_path for r in source}
    assert set(result.extra) == {r for r in target if r.relative_path not in source_paths}


def test_categories_keep_enumeration_order() -> None:
    source = [record("z.txt"), record("a.txt"), record("m.txt")]
    target = [record("y.txt"), record("b.txt")]

    result = classify(source, target)

    assert result.paths(FileCategory.MISSING) == ["z.txt", "a.txt", "m.txt"]
    assert result.paths(FileCategory.EXTRA) == ["y.txt", "b.txt"]


def test_indexes_are_read_only() -> None:
    result = classify([record("a.txt")], [record("b.txt")])

    assert list(result.source_index) == ["a.txt"]
    assert list(result.target_index) == ["b.txt"]
    with pytest.raises(TypeError):
        result.source_index["c.txt"] = record("c.txt")  # type: ignore[index]


@pytest.mark.parametrize("tree", ["source", "target"])
def test_duplicate_relative_path_fails(tree: str) -> None:
    records = {
        "source": [record("a/b.txt"), record("c.txt")],
        "target": [record("c.txt")],
    }
    records[tree] = [record("a/b.txt", 1), record("a/b.txt", 2)]

    with pytest.raises(DuplicateKeyError) as excinfo:
        classify(records["source"], records["target"])

    assert excinfo.value.relative_path == "a/b.txt"
    assert excinfo.value.tree == tree


def test_source_records_are_consumed_lazily_once() -> None:
    consumed: list[str] = []

    def source():
        for path in ("a.txt", "b.txt"):
            consumed.append(path)
            yield record(path)

    result = classify(source(), iter([record("a.txt")]))

    assert consumed == ["a.txt", "b.txt"]
    assert result.paths(FileCategory.MISSING) == ["b.txt"]


def test_reporter_receives_progress_every_interval_then_summary() -> None:
    reporter = RecordingReporter()
    source = [record(f"f{i}.txt") for i in range(2500)]

    result = classify(source, [], reporter=reporter)

    kinds = [kind for kind, _ in reporter.events]
    assert kinds == ["started", "progress", "progress", "finished", "summary"]
    progress = [value for kind, value in reporter.events if kind == "progress"]
    assert [p.processed for p in progress] == [1000, 2000]
    assert progress[0].current_path == "f999.txt"
    assert reporter.events[-1][1] == result.summary


def test_progress_interval_zero_disables_progress() -> None:
    reporter = RecordingReporter()

    classify([record("a.txt")], [], reporter=reporter, progress_interval=0)

    assert "progress" not in [kind for kind, _ in reporter.events]


def test_elapsed_is_measured() -> None:
    result = classify([record("a.txt")], [record("a.txt")])

    assert result.elapsed >= 0.0
    assert result.elapsed_ms == int(result.elapsed * 1000)
    assert result.is_identical
