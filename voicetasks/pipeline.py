"""Voice command pipeline: one transcript in, one outcome out.

The pipeline keeps no state between calls. The task snapshot and the
current time are passed in on every call and never modified, so identical
inputs always give an identical outcome.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple, Union

from voicetasks import config
from voicetasks.dates import extract
from voicetasks.outcomes import (
    AddTask,
    CommandOutcome,
    CompleteTask,
    DeleteTask,
    Intent,
    MarkAllComplete,
    NotFound,
    QueryTasks,
    TaskRef,
    TaskView,
    Unknown,
    UnknownReason,
)
from voicetasks.resolver import resolve
from voicetasks.router import CommandRouter, Route, default_router

log = logging.getLogger(__name__)

STOP_WORDS = frozenset({"to", "for", "on", "at", "by"})

VIEWS = {
    Intent.SHOW_PENDING: TaskView.PENDING,
    Intent.SHOW_OVERDUE: TaskView.OVERDUE,
    Intent.SHOW_ALL: TaskView.ALL,
    Intent.SHOW_COMPLETED: TaskView.COMPLETED,
    Intent.COUNT_TASKS: TaskView.ALL,
}

Alternative = Union[str, Tuple[str, Optional[float]]]


def strip_stop_words(text: str) -> str:
    """Drop stop words from both ends of ``text``; inner words stay."""
    words = text.split()
    while words and words[0] in STOP_WORDS:
        words.pop(0)
    while words and words[-1] in STOP_WORDS:
        words.pop()
    return " ".join(words)


def pick_transcript(alternatives: Iterable[Alternative]) -> Optional[str]:
    """Choose the most confident transcript from a speech engine's alternatives.

    Each alternative is a string or a ``(text, confidence)`` pair; a missing
    confidence counts as 0 and the first wins a tie. Blank texts are skipped.
    """
    best: Optional[Tuple[float, str]] = None
    for alt in alternatives:
        text, confidence = (alt, None) if isinstance(alt, str) else alt
        if not text or not text.strip():
            continue
        score = confidence or 0.0
        if best is None or score > best[0]:
            best = (score, text)
    return best[1] if best else None


class CommandPipeline:
    def __init__(
        self,
        router: Optional[CommandRouter] = None,
        resolve_threshold: float = config.RESOLVE_THRESHOLD,
    ):
        self.router = router or default_router
        self.resolve_threshold = resolve_threshold

    def interpret(
        self,
        transcript: str,
        tasks: Sequence[TaskRef] = (),
        now: Optional[datetime] = None,
    ) -> CommandOutcome:
        now = now or datetime.now()
        tasks = tuple(tasks)
        route = self.router.route(transcript)
        intent = route.intent

        if intent is Intent.ADD_TASK:
            outcome = self._add(transcript, route, now)
        elif intent is Intent.COMPLETE_TASK:
            pending = [t for t in tasks if not t.completed]
            outcome = CompleteTask(target=self._target(route.remainder, pending))
        elif intent is Intent.DELETE_TASK:
            outcome = DeleteTask(target=self._target(route.remainder, tasks))
        elif intent is Intent.MARK_ALL_COMPLETE:
            outcome = MarkAllComplete(tasks=tuple(t for t in tasks if not t.completed))
        elif intent in VIEWS:
            outcome = QueryTasks(intent=intent, view=VIEWS[intent])
        else:
            outcome = Unknown(original_text=transcript, suggestion=route.suggestion)

        log.info("%r -> %s", transcript, outcome.intent.value)
        return outcome

    def _add(self, transcript: str, route: Route, now: datetime) -> CommandOutcome:
        text = route.remainder
        due = extract(text, now)
        if due is not None:
            text = due.strip(text)
        label = strip_stop_words(text)
        if not label:
            return Unknown(original_text=transcript, reason=UnknownReason.EMPTY_ADD_PAYLOAD)
        return AddTask(label=label, due=due)

    def _target(self, query: str, candidates: Sequence[TaskRef]):
        match = resolve(query, candidates, self.resolve_threshold)
        return match if match is not None else NotFound(query=query)


_default_pipeline = CommandPipeline()


def interpret(
    transcript: str,
    tasks: Sequence[TaskRef] = (),
    now: Optional[datetime] = None,
) -> CommandOutcome:
    """Interpret one transcript with the built-in trigger table."""
    return _default_pipeline.interpret(transcript, tasks, now)
