"""Date and time extraction from normalized utterances.

Recognized date fragments, first match wins, in this order:

* ``today``, ``tomorrow``
* ``next week`` (seven days on), ``next month`` (one calendar month on)
* ``M/D`` in the current year
* a weekday name, resolved to its next occurrence; naming today's weekday
  means one week from now

Each may be led by ``on``, ``by``, ``due``, ``due on``, ``due by`` or
``this``. A time of day (``3pm``, ``3 pm``, ``3p``, ``9:30``, ``at 9``)
is found independently, as a standalone token. A bare hour without
minutes or an am/pm marker only counts after ``at``, ``by`` or
``around`` and is then read as a 24-hour value.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

log = logging.getLogger(__name__)

Span = Tuple[int, int]

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_PREFIX = r"\b(?:(?:due\s+(?:on|by)|on|by|due|this)\s+)?"


@dataclass(frozen=True)
class ParsedDate:
    """A resolved due date and the fragments of text it came from."""

    when: datetime
    text: str
    spans: Tuple[Span, ...]
    has_time: bool = False

    def strip(self, text: str) -> str:
        """Remove the consumed fragments from ``text`` (the string that was scanned)."""
        pieces = []
        cursor = 0
        for start, end in sorted(self.spans):
            if start > cursor:
                pieces.append(text[cursor:start])
            cursor = max(cursor, end)
        pieces.append(text[cursor:])
        return " ".join("".join(pieces).split())

    def to_dict(self) -> Dict[str, Any]:
        return {"when": self.when.isoformat(), "text": self.text, "has_time": self.has_time}


def _next_weekday(match: re.Match, today: date) -> date:
    target = WEEKDAYS.index(match.group("day"))
    ahead = (target - today.weekday()) % 7
    return today + timedelta(days=ahead or 7)


def _month_day(match: re.Match, today: date) -> Optional[date]:
    try:
        return date(today.year, int(match.group("month")), int(match.group("day")))
    except ValueError:
        return None


_DATE_RULES: Tuple[Tuple[re.Pattern, Callable[[re.Match, date], Optional[date]]], ...] = (
    (re.compile(_PREFIX + r"today\b"), lambda m, d: d),
    (re.compile(_PREFIX + r"tomorrow\b"), lambda m, d: d + timedelta(days=1)),
    (re.compile(_PREFIX + r"next week\b"), lambda m, d: d + timedelta(days=7)),
    (re.compile(_PREFIX + r"next month\b"), lambda m, d: d + relativedelta(months=1)),
    (
        re.compile(_PREFIX + r"(?<![\w/:])(?P<month>\d{1,2})/(?P<day>\d{1,2})(?![\d/:])"),
        _month_day,
    ),
    (
        re.compile(_PREFIX + r"(?:next\s+)?(?P<day>" + "|".join(WEEKDAYS) + r")\b"),
        _next_weekday,
    ),
)

_TIME_RE = re.compile(
    r"(?:\b(?P<prep>at|by|around)\s+)?"
    r"(?<![\w/:])(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?"
    r"(?:\s?(?P<marker>am|pm)\b|(?P<short>[ap])\b)?"
    r"(?![\d/:])"
)


def _find_date(text: str, today: date) -> Optional[Tuple[date, Span]]:
    for pattern, resolve in _DATE_RULES:
        for match in pattern.finditer(text):
            day = resolve(match, today)
            if day is not None:
                return day, match.span()
    return None


def _to_time(match: re.Match) -> Optional[time]:
    hour = int(match.group("hour"))
    minute = int(match.group("minute") or 0)
    marker = match.group("marker") or match.group("short")
    if marker is None and match.group("minute") is None and match.group("prep") is None:
        return None
    if minute > 59:
        return None
    if marker:
        if not 1 <= hour <= 12:
            return None
        if marker.startswith("p") and hour != 12:
            hour += 12
        elif marker.startswith("a") and hour == 12:
            hour = 0
    elif hour > 23:
        return None
    return time(hour, minute)


def _find_time(text: str) -> Optional[Tuple[time, Span]]:
    for match in _TIME_RE.finditer(text):
        found = _to_time(match)
        if found is not None:
            return found, match.span()
    return None


def extract(text: str, now: datetime) -> Optional[ParsedDate]:
    """Find a due date in normalized ``text``, anchored to ``now``.

    Returns ``None`` when there is neither a date nor a time fragment; the
    caller should treat that as "no due date", not "due now".
    """
    spans: List[Span] = []
    found_date = _find_date(text, now.date())
    if found_date is not None:
        start, end = found_date[1]
        spans.append(found_date[1])
        # blank the date with a non-space so neither its digits nor a preposition
        # before it can be read again as part of a time
        text_for_time = text[:start] + "\0" * (end - start) + text[end:]
    else:
        text_for_time = text
    found_time = _find_time(text_for_time)
    if found_time is not None:
        spans.append(found_time[1])

    if not spans:
        return None

    day = found_date[0] if found_date else now.date()
    at = found_time[0] if found_time else time(0, 0)
    spans.sort()
    fragment = " ".join(text[start:end] for start, end in spans)
    when = datetime.combine(day, at, tzinfo=now.tzinfo)
    log.debug("extracted %s from %r", when.isoformat(), fragment)
    return ParsedDate(when=when, text=fragment, spans=tuple(spans), has_time=found_time is not None)
