"""Resolve a spoken task reference to a task from the caller's snapshot."""

import logging
from typing import Optional, Sequence

from voicetasks import config
from voicetasks.matcher import best_of
from voicetasks.normalize import normalize
from voicetasks.outcomes import TaskRef

log = logging.getLogger(__name__)


def resolve(
    query: str,
    candidates: Sequence[TaskRef],
    threshold: float = config.RESOLVE_THRESHOLD,
) -> Optional[TaskRef]:
    """Return the candidate whose label best matches ``query``.

    Candidates are compared in the order given and the first wins a tie, so
    pass them in a stable order such as creation order. Returns ``None``
    rather than a weak match when nothing reaches ``threshold``.
    """
    index = best_of(
        ((i, normalize(task.label)) for i, task in enumerate(candidates)),
        query,
        threshold,
    )
    if index is None:
        log.debug("no task matches %r among %d candidates", query, len(candidates))
        return None
    return candidates[index]
