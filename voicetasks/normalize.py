"""Canonical form for transcribed text.

Every comparison in the interpreter runs on normalized text: lower case,
no punctuation, single spaces, no leading or trailing whitespace. A colon
or slash between two digits (``3:30``, ``1/15``) is part of a number and
is kept.
"""

import re

_PUNCT_RE = re.compile(r"[^\w\s:/]|_")
_LOOSE_SEPARATOR_RE = re.compile(r"(?<!\d)[:/]|[:/](?!\d)")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Return the normalized form of ``text``. Never fails; idempotent."""
    value = (text or "").lower()
    value = _PUNCT_RE.sub("", value)
    value = _LOOSE_SEPARATOR_RE.sub("", value)
    return _WHITESPACE_RE.sub(" ", value).strip()
