"""Tests for resolving spoken task references."""

from voicetasks.outcomes import TaskRef
from voicetasks.resolver import resolve


def test_misspelled_reference_matches():
    task = TaskRef(id=1, label="buy groceries")
    assert resolve("grocries", [task]) == task


def test_no_candidates():
    assert resolve("foo", []) is None


def test_weak_match_is_rejected():
    assert resolve("walk the dog", [TaskRef(id=1, label="buy groceries")]) is None


def test_best_candidate_wins():
    tasks = [TaskRef(id=1, label="buy silk"), TaskRef(id=2, label="buy milk")]
    assert resolve("buy mlk", tasks).id == 2


def test_first_candidate_wins_tie():
    tasks = [TaskRef(id=1, label="call mom"), TaskRef(id=2, label="call mom")]
    assert resolve("call mom", tasks).id == 1


def test_labels_are_normalized():
    task = TaskRef(id="a", label="Buy Groceries!")
    assert resolve("buy groceries", [task], threshold=1.0) == task
