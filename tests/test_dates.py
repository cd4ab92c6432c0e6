"""Tests for date and time extraction."""

from datetime import datetime, timezone

import pytest
from voicetasks.dates import ParsedDate, extract

# A Monday morning.
NOW = datetime(2024, 1, 1, 9, 0)


def test_no_temporal_expression():
    assert extract("buy milk", NOW) is None
    assert extract("", NOW) is None


def test_bare_number_is_not_a_time():
    assert extract("buy 2 apples", NOW) is None


def test_tomorrow_with_time():
    parsed = extract("buy groceries tomorrow at 3pm", NOW)
    assert parsed.when == datetime(2024, 1, 2, 15, 0)
    assert parsed.text == "tomorrow at 3pm"
    assert parsed.has_time
    assert parsed.strip("buy groceries tomorrow at 3pm") == "buy groceries"


def test_date_only_defaults_to_midnight():
    parsed = extract("today", NOW)
    assert parsed.when == datetime(2024, 1, 1, 0, 0)
    assert not parsed.has_time


@pytest.mark.parametrize("text, expected", [
    ("tomorrow", datetime(2024, 1, 2)),
    ("next week", datetime(2024, 1, 8)),
    ("next month", datetime(2024, 2, 1)),
    ("on 3/15", datetime(2024, 3, 15)),
    ("friday", datetime(2024, 1, 5)),
    ("by next friday", datetime(2024, 1, 5)),
])
def test_date_keywords(text, expected):
    assert extract(text, NOW).when == expected


def test_next_month_clamps_to_month_end():
    assert extract("next month", datetime(2024, 1, 31, 10)).when == datetime(2024, 2, 29)


@pytest.mark.parametrize("text", ["monday", "next monday", "on monday"])
def test_same_weekday_rolls_a_week(text):
    assert extract(text, NOW).when == datetime(2024, 1, 8)


def test_keyword_precedence():
    # "today" outranks "tomorrow" regardless of position
    parsed = extract("tomorrow or today", NOW)
    assert parsed.when == datetime(2024, 1, 1)
    assert parsed.text == "today"


def test_invalid_month_day_is_skipped():
    assert extract("2/30", NOW) is None
    assert extract("2/30 friday", NOW).when == datetime(2024, 1, 5)


@pytest.mark.parametrize("text, hour, minute", [
    ("at 9", 9, 0),
    ("at 21", 21, 0),
    ("at 9pm", 21, 0),
    ("9 pm", 21, 0),
    ("7p", 19, 0),
    ("6a", 6, 0),
    ("12am", 0, 0),
    ("12pm", 12, 0),
    ("9:30", 9, 30),
    ("by 5", 5, 0),
])
def test_time_only_uses_today(text, hour, minute):
    parsed = extract(text, NOW)
    assert parsed.when == datetime(2024, 1, 1, hour, minute)
    assert parsed.has_time


@pytest.mark.parametrize("text", ["13pm", "0am", "at 25", "9:75"])
def test_invalid_times(text):
    assert extract(text, NOW) is None


def test_date_digits_not_read_as_time():
    parsed = extract("1/15 at 3", NOW)
    assert parsed.when == datetime(2024, 1, 15, 3, 0)
    assert parsed.text == "1/15 at 3"


def test_separated_fragments_strip_cleanly():
    text = "call mom tomorrow about dinner at 6pm"
    parsed = extract(text, NOW)
    assert parsed.when == datetime(2024, 1, 2, 18, 0)
    assert parsed.strip(text) == "call mom about dinner"


def test_timezone_preserved():
    now = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    assert extract("tomorrow", now).when == datetime(2024, 1, 2, tzinfo=timezone.utc)


def test_preposition_before_date_not_joined_to_time():
    text = "meet at friday 3pm"
    parsed = extract(text, NOW)
    assert parsed.when == datetime(2024, 1, 5, 15, 0)
    assert parsed.text == "friday 3pm"
    assert parsed.strip(text) == "meet at"


def test_strip_handles_overlapping_spans():
    parsed = ParsedDate(when=NOW, text="at friday 3pm", spans=((5, 18), (8, 14)))
    assert parsed.strip("meet at friday 3pm") == "meet"


@pytest.mark.parametrize("text", ["buy ps5pm", "room b12", "gate a1/15"])
def test_digits_inside_words_are_not_dates(text):
    assert extract(text, NOW) is None


def test_two_word_due_prefix():
    parsed = extract("pay rent due by friday", NOW)
    assert parsed.text == "due by friday"
    assert parsed.strip("pay rent due by friday") == "pay rent"
