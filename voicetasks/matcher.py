"""Edit-distance matching between normalized strings."""

from typing import Hashable, Iterable, Optional, Tuple

from voicetasks.normalize import normalize


def distance(a: str, b: str) -> int:
    """Levenshtein distance; insertion, deletion and substitution cost 1."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            cur[j] = min(
                prev[j] + 1,  # delete
                cur[j - 1] + 1,  # insert
                prev[j - 1] + (ca != cb),  # substitute
            )
        prev = cur
    return prev[-1]


def similarity(a: str, b: str) -> float:
    """Score in [0, 1]; 1.0 for identical strings, including two empty ones."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - distance(a, b)) / longest


def best_of(
    candidates: Iterable[Tuple[Hashable, str]],
    query: str,
    threshold: float,
) -> Optional[Hashable]:
    """Return the key whose text scores highest against ``query``.

    Candidate texts must already be normalized; the query is normalized here.
    The first candidate wins a tie. ``None`` when the best score is below
    ``threshold`` or there are no candidates.
    """
    needle = normalize(query)
    best = None
    for key, text in candidates:
        score = similarity(needle, text)
        if best is None or score > best[1]:
            best = (key, score)
    if best is None or best[1] < threshold:
        return None
    return best[0]
