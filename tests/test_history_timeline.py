from __future__ import annotations

import threading
from typing import List

import pytest

from memento_editor.history import (
    CapacityTooSmallError,
    HistoryIndexError,
    HistoryTimeline,
    MIN_CAPACITY,
    Snapshot,
)


def snap(text: str) -> Snapshot:
    return Snapshot(text, created_at=0)


def contents(timeline: HistoryTimeline) -> List[str]:
    return [entry.content for entry in timeline.list_all()]


def make_seeded(
    capacity: int = 10, *, min_capacity: int = MIN_CAPACITY
) -> HistoryTimeline:
    return HistoryTimeline(capacity, seed=snap(""), min_capacity=min_capacity)


def test_empty_timeline_has_nothing_current() -> None:
    timeline = HistoryTimeline(10)

    assert timeline.cursor == -1
    assert len(timeline) == 0
    assert timeline.current() is None
    assert timeline.undo() is None
    assert timeline.redo() is None
    assert timeline.has_undo() is False
    assert timeline.has_redo() is False


def test_seed_becomes_current_entry() -> None:
    seed = snap("")
    timeline = HistoryTimeline(10, seed=seed)

    assert timeline.cursor == 0
    assert timeline.current() is seed
    assert timeline.has_undo() is False


def test_add_keeps_cursor_on_newest_entry() -> None:
    timeline = make_seeded()

    for count, text in enumerate("abcd", start=1):
        timeline.add(snap(text))
        assert len(timeline) == count + 1
        assert timeline.cursor == len(timeline) - 1


def test_add_beyond_capacity_evicts_oldest_first() -> None:
    timeline = HistoryTimeline(5)
    added = [snap(str(i)) for i in range(8)]

    results = [timeline.add(entry) for entry in added]

    assert timeline.list_all() == tuple(added[-5:])
    assert timeline.cursor == 4
    assert [result.evicted for result in results] == [0, 0, 0, 0, 0, 1, 1, 1]


def test_undo_then_redo_returns_to_same_snapshot() -> None:
    timeline = make_seeded()
    timeline.add(snap("a"))
    latest = snap("b")
    timeline.add(latest)
    before = timeline.cursor

    undone = timeline.undo()
    redone = timeline.redo()

    assert undone is not None and undone.content == "a"
    assert redone is latest
    assert timeline.cursor == before


def test_undo_at_oldest_is_a_no_op() -> None:
    timeline = make_seeded()
    before = (timeline.list_all(), timeline.cursor)

    assert timeline.undo() is None
    assert (timeline.list_all(), timeline.cursor) == before


def test_redo_at_newest_is_a_no_op() -> None:
    timeline = make_seeded()
    timeline.add(snap("a"))

    assert timeline.has_redo() is False
    assert timeline.redo() is None
    assert timeline.cursor == 1


def test_add_after_undo_discards_forward_entries() -> None:
    timeline = HistoryTimeline(10)
    a, b, c, d = snap("A"), snap("B"), snap("C"), snap("D")
    for entry in (a, b, c):
        timeline.add(entry)

    timeline.undo()
    timeline.undo()
    result = timeline.add(d)

    assert timeline.list_all() == (a, d)
    assert timeline.current() is d
    assert result.discarded == 2
    assert timeline.redo() is None


def test_has_undo_false_only_at_oldest_or_empty() -> None:
    timeline = make_seeded()
    assert timeline.has_undo() is False

    timeline.add(snap("a"))
    timeline.add(snap("b"))
    assert timeline.has_undo() is True

    timeline.undo()
    assert timeline.has_undo() is True
    timeline.undo()
    assert timeline.has_undo() is False
    assert timeline.has_redo() is True

    timeline.clear()
    assert timeline.has_undo() is False


def test_jump_to_is_non_destructive() -> None:
    timeline = make_seeded()
    for text in "abc":
        timeline.add(snap(text))

    target = timeline.jump_to(1)

    assert target.content == "a"
    assert timeline.cursor == 1
    assert contents(timeline) == ["", "a", "b", "c"]
    assert timeline.has_redo() is True


def test_add_after_jump_discards_entries_past_target() -> None:
    timeline = make_seeded()
    for text in "abc":
        timeline.add(snap(text))

    timeline.jump_to(1)
    timeline.add(snap("z"))

    assert contents(timeline) == ["", "a", "z"]


@pytest.mark.parametrize("index", [-1, 4, 100])
def test_jump_to_out_of_range_raises_and_preserves_state(index: int) -> None:
    timeline = make_seeded()
    for text in "abc":
        timeline.add(snap(text))
    timeline.undo()
    before = (timeline.list_all(), timeline.cursor)

    with pytest.raises(HistoryIndexError) as excinfo:
        timeline.jump_to(index)

    assert isinstance(excinfo.value, IndexError)
    assert excinfo.value.index == index
    assert excinfo.value.size == 4
    assert (timeline.list_all(), timeline.cursor) == before


def test_clear_empties_timeline() -> None:
    timeline = make_seeded()
    timeline.add(snap("a"))

    timeline.clear()

    assert timeline.list_all() == ()
    assert timeline.cursor == -1
    assert timeline.current() is None


def test_list_all_is_a_detached_copy() -> None:
    timeline = make_seeded()
    listed = timeline.list_all()

    assert isinstance(listed, tuple)
    timeline.add(snap("a"))
    assert len(listed) == 1
    assert len(timeline.list_all()) == 2


def test_capacity_below_floor_is_raised() -> None:
    timeline = HistoryTimeline(2)

    assert timeline.capacity == MIN_CAPACITY
    assert timeline.requested_capacity == 2
    assert timeline.capacity_adjusted is True
    assert HistoryTimeline(60).capacity_adjusted is False


def test_strict_timeline_rejects_small_capacity() -> None:
    with pytest.raises(CapacityTooSmallError) as excinfo:
        HistoryTimeline(3, strict=True)

    assert excinfo.value.requested == 3
    assert excinfo.value.minimum == MIN_CAPACITY


def test_non_integer_capacity_is_rejected() -> None:
    with pytest.raises(TypeError):
        HistoryTimeline("10")  # type: ignore[arg-type]


def test_small_capacity_scenario() -> None:
    timeline = make_seeded(3, min_capacity=1)
    assert timeline.cursor == 0

    timeline.add(snap("a"))
    assert contents(timeline) == ["", "a"]
    assert timeline.cursor == 1

    timeline.add(snap("b"))
    assert contents(timeline) == ["", "a", "b"]
    assert timeline.cursor == 2

    timeline.add(snap("c"))
    assert contents(timeline) == ["a", "b", "c"]
    assert timeline.cursor == 2

    undone = timeline.undo()
    assert undone is not None and undone.content == "b"
    assert timeline.cursor == 1

    # only entries after the cursor ("c") are dropped; "b" stays
    timeline.add(snap("x"))
    assert contents(timeline) == ["a", "b", "x"]
    assert timeline.cursor == 2


def test_view_pairs_entries_with_cursor() -> None:
    timeline = make_seeded()
    timeline.add(snap("a"))
    timeline.undo()

    entries, cursor = timeline.view()

    assert [entry.content for entry in entries] == ["", "a"]
    assert cursor == 0


def test_concurrent_adds_respect_capacity() -> None:
    timeline = make_seeded(capacity=20)

    def worker() -> None:
        for _ in range(50):
            timeline.add(snap("t"))
            timeline.undo()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(timeline) <= timeline.capacity
    assert -1 <= timeline.cursor < len(timeline)
