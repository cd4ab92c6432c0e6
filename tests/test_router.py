"""Tests for the CommandRouter."""

import pytest
from voicetasks.outcomes import Intent
from voicetasks.router import CommandRouter, classify


def test_route_matches_intent():
    route = CommandRouter().route("Add task buy milk")
    assert route.intent is Intent.ADD_TASK
    assert route.trigger == "add task"
    assert route.score == 1.0
    assert route.remainder == "buy milk"


def test_route_tolerates_misheard_trigger():
    route = CommandRouter().route("delete tsk foo")
    assert route.intent is Intent.DELETE_TASK
    assert route.score == pytest.approx(10 / 11)
    assert route.remainder == "foo"


def test_route_absorbs_extra_word():
    route = CommandRouter().route("add the task buy milk")
    assert route.intent is Intent.ADD_TASK
    assert route.remainder == "buy milk"


def test_route_no_match_returns_unknown():
    route = CommandRouter().route("banana")
    assert route.intent is Intent.UNKNOWN
    assert route.suggestion is None
    assert route.remainder == ""


def test_route_suggests_close_trigger():
    route = CommandRouter().route("delete")
    assert route.intent is Intent.UNKNOWN
    assert route.suggestion == "delete task"
    assert 0.4 <= route.score < 0.6


def test_empty_utterance_is_unknown():
    assert classify("") is Intent.UNKNOWN


@pytest.mark.parametrize("utterance, intent", [
    ("complete task buy milk", Intent.COMPLETE_TASK),
    ("mark done buy milk", Intent.COMPLETE_TASK),
    ("remove task buy milk", Intent.DELETE_TASK),
    ("show pending tasks", Intent.SHOW_PENDING),
    ("what is overdue", Intent.SHOW_OVERDUE),
    ("mark all done", Intent.MARK_ALL_COMPLETE),
    ("complete all tasks", Intent.MARK_ALL_COMPLETE),
    ("show all tasks", Intent.SHOW_ALL),
    ("show completed tasks", Intent.SHOW_COMPLETED),
    ("how many tasks do i have", Intent.COUNT_TASKS),
])
def test_builtin_triggers(utterance, intent):
    assert classify(utterance) is intent


def test_earlier_intent_wins_tie():
    router = CommandRouter(table=(
        (Intent.SHOW_ALL, ("show",)),
        (Intent.SHOW_PENDING, ("show",)),
    ))
    assert router.classify("show") is Intent.SHOW_ALL


def test_register_extends_table():
    router = CommandRouter()
    router.register(Intent.ADD_TASK, "Jot down")
    route = router.route("jot down eggs")
    assert route.intent is Intent.ADD_TASK
    assert route.remainder == "eggs"


def test_register_unknown_rejected():
    with pytest.raises(ValueError):
        CommandRouter(table=()).register(Intent.UNKNOWN, "huh")


def test_custom_thresholds():
    router = CommandRouter(table=((Intent.ADD_TASK, ("add task",)),), threshold=0.9, suggest_threshold=0.5)
    route = router.route("ad tsk milk")
    assert route.intent is Intent.UNKNOWN
    assert route.suggestion == "add task"
