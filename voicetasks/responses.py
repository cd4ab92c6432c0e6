"""Spoken acknowledgments for command outcomes.

The returned string is what the text-to-speech responder reads back; the
same text doubles as the on-screen feedback line.
"""

from datetime import datetime
from typing import Optional, Sequence

from voicetasks.dates import ParsedDate
from voicetasks.outcomes import (
    AddTask,
    CommandOutcome,
    CompleteTask,
    DeleteTask,
    MarkAllComplete,
    NotFound,
    QueryTasks,
    TaskRef,
    TaskView,
    Unknown,
    UnknownReason,
)
from voicetasks.reminders import progress

NOT_UNDERSTOOD = "Sorry, I didn't understand."


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def describe_due(due: ParsedDate) -> str:
    """``Tuesday, January 2 at 3:00 PM``; the time is left out for date-only dues."""
    when = due.when
    text = f"{when:%A, %B} {when.day}"
    if due.has_time:
        hour = when.hour % 12 or 12
        text += f" at {hour}:{when.minute:02d} {'PM' if when.hour >= 12 else 'AM'}"
    return text


def _not_found(verb: str, target: NotFound) -> str:
    if not target.query:
        return f"Which task should I {verb}?"
    return f"I couldn't find a task matching {target.query}."


def respond(
    outcome: CommandOutcome,
    tasks: Sequence[TaskRef] = (),
    now: Optional[datetime] = None,
) -> str:
    if isinstance(outcome, AddTask):
        if outcome.due is None:
            return f"Task added: {outcome.label}"
        return f"Task added: {outcome.label}, due {describe_due(outcome.due)}"

    if isinstance(outcome, CompleteTask):
        if isinstance(outcome.target, NotFound):
            return _not_found("complete", outcome.target)
        return f"Marked as completed: {outcome.target.label}"

    if isinstance(outcome, DeleteTask):
        if isinstance(outcome.target, NotFound):
            return _not_found("delete", outcome.target)
        return f"Deleted task: {outcome.target.label}"

    if isinstance(outcome, MarkAllComplete):
        if not outcome.count:
            return "There are no pending tasks."
        return f"Marked {_plural(outcome.count, 'task')} as completed."

    if isinstance(outcome, QueryTasks):
        if outcome.count_only:
            summary = progress(tasks)
            if not summary.total:
                return "You have no tasks."
            return (
                f"You have {_plural(summary.total, 'task')}, {summary.pending} pending, "
                f"{summary.percent} percent complete."
            )
        selected = outcome.select(tasks, now or datetime.now())
        kind = "" if outcome.view is TaskView.ALL else f"{outcome.view.value} "
        if not selected:
            return f"You have no {kind}tasks."
        labels = ", ".join(t.label for t in selected)
        return f"{_plural(len(selected), kind + 'task')}: {labels}."

    if isinstance(outcome, Unknown):
        if outcome.reason is UnknownReason.EMPTY_ADD_PAYLOAD:
            return "What task should I add?"
        if outcome.suggestion:
            return f"{NOT_UNDERSTOOD} Did you mean {outcome.suggestion}?"
        return NOT_UNDERSTOOD

    raise TypeError(f"not a command outcome: {outcome!r}")
