"""Command router for the voice task list.

Each intent owns a set of trigger phrases. An utterance is routed to the
intent whose best trigger scores highest against the start of the
utterance, provided the score clears the classify threshold. Below it the
utterance is unknown, and the best trigger overall is offered as a "did you
mean" suggestion when it clears the (lower) suggest threshold.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from voicetasks import config
from voicetasks.matcher import similarity
from voicetasks.normalize import normalize
from voicetasks.outcomes import Intent

log = logging.getLogger(__name__)

# Priority order: on equal scores the earlier intent wins.
TRIGGERS: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = (
    (Intent.ADD_TASK, ("add task", "add a task", "add new task", "new task", "create task", "remind me to")),
    (Intent.COMPLETE_TASK, ("complete task", "finish task", "mark done", "mark complete", "check off", "i finished")),
    (Intent.DELETE_TASK, ("delete task", "remove task", "cancel task", "get rid of")),
    (Intent.SHOW_PENDING, ("show pending tasks", "show pending", "what is pending", "show remaining tasks", "what do i need to do")),
    (Intent.SHOW_OVERDUE, ("show overdue tasks", "show overdue", "what is overdue", "whats overdue", "show late tasks")),
    (Intent.MARK_ALL_COMPLETE, ("mark all complete", "mark all tasks complete", "mark all done", "complete all tasks", "finish all tasks")),
    (Intent.SHOW_ALL, ("show all tasks", "show all", "show tasks", "show my tasks", "list tasks", "list all tasks")),
    (Intent.SHOW_COMPLETED, ("show completed tasks", "show completed", "show done tasks", "what have i finished")),
    (Intent.COUNT_TASKS, ("how many tasks", "count tasks", "task count", "how many tasks do i have")),
)


@dataclass(frozen=True)
class Route:
    """Result of routing one normalized utterance."""

    intent: Intent
    score: float
    trigger: Optional[str] = None
    remainder: str = ""
    suggestion: Optional[str] = None


def _window_sizes(trigger_len: int, available: int) -> List[int]:
    sizes = []
    for n in (trigger_len, trigger_len - 1, trigger_len + 1):
        n = min(n, available)
        if n >= 1 and n not in sizes:
            sizes.append(n)
    return sizes or [0]


class CommandRouter:
    def __init__(
        self,
        table: Iterable[Tuple[Intent, Sequence[str]]] = TRIGGERS,
        threshold: float = config.CLASSIFY_THRESHOLD,
        suggest_threshold: float = config.SUGGEST_THRESHOLD,
    ):
        self.threshold = threshold
        self.suggest_threshold = suggest_threshold
        self.triggers: Dict[Intent, List[str]] = {}
        for intent, phrases in table:
            self.register(intent, *phrases)

    def register(self, intent: Intent, *phrases: str) -> None:
        """Add trigger phrases for ``intent``.

        A new intent is ranked after every intent already registered.
        """
        if intent is Intent.UNKNOWN:
            raise ValueError("Unknown cannot own trigger phrases")
        bucket = self.triggers.setdefault(intent, [])
        for phrase in phrases:
            phrase = normalize(phrase)
            if phrase and phrase not in bucket:
                bucket.append(phrase)

    @staticmethod
    def _score(words: List[str], trigger: str) -> Tuple[float, int]:
        """Best score of ``trigger`` against the leading words, and the words consumed.

        Windows one word shorter and longer than the trigger absorb a word
        dropped or added by speech recognition; the exact length wins ties.
        """
        best = (-1.0, 0)
        for n in _window_sizes(len(trigger.split()), len(words)):
            score = similarity(" ".join(words[:n]), trigger)
            if score > best[0]:
                best = (score, n)
        return best

    def route(self, utterance: str) -> Route:
        words = normalize(utterance).split()
        best: Optional[Tuple[float, Intent, str, int]] = None
        for intent, phrases in self.triggers.items():
            for phrase in phrases:
                score, consumed = self._score(words, phrase)
                if best is None or score > best[0]:
                    best = (score, intent, phrase, consumed)

        if best is None:
            return Route(intent=Intent.UNKNOWN, score=0.0)
        score, intent, phrase, consumed = best
        if score >= self.threshold:
            log.debug("routed %r to %s via %r (%.2f)", utterance, intent.value, phrase, score)
            return Route(
                intent=intent,
                score=score,
                trigger=phrase,
                remainder=" ".join(words[consumed:]),
            )
        suggestion = phrase if score >= self.suggest_threshold else None
        log.debug("no intent for %r; closest %r (%.2f)", utterance, phrase, score)
        return Route(intent=Intent.UNKNOWN, score=score, suggestion=suggestion)

    def classify(self, utterance: str) -> Intent:
        return self.route(utterance).intent


default_router = CommandRouter()


def classify(utterance: str) -> Intent:
    """Classify with the built-in trigger table."""
    return default_router.classify(utterance)
