"""Intents, task references and the outcome values the pipeline returns.

An outcome is the whole answer to one utterance. The caller applies it to
the task store and turns it into a spoken acknowledgment; nothing here
touches a store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, Union

from voicetasks.dates import ParsedDate


class Intent(str, Enum):
    ADD_TASK = "add_task"
    COMPLETE_TASK = "complete_task"
    DELETE_TASK = "delete_task"
    SHOW_PENDING = "show_pending"
    SHOW_OVERDUE = "show_overdue"
    SHOW_ALL = "show_all"
    SHOW_COMPLETED = "show_completed"
    MARK_ALL_COMPLETE = "mark_all_complete"
    COUNT_TASKS = "count_tasks"
    UNKNOWN = "unknown"


class TaskView(str, Enum):
    PENDING = "pending"
    OVERDUE = "overdue"
    ALL = "all"
    COMPLETED = "completed"


class UnknownReason(str, Enum):
    NO_INTENT_MATCHED = "no_intent_matched"
    EMPTY_ADD_PAYLOAD = "empty_add_payload"


@dataclass(frozen=True)
class TaskRef:
    """One task from the caller's snapshot. ``id`` is opaque to the interpreter."""

    id: Hashable
    label: str
    completed: bool = False
    due: Optional[datetime] = None


@dataclass(frozen=True)
class NotFound:
    query: str


Target = Union[TaskRef, NotFound]


@dataclass(frozen=True)
class AddTask:
    label: str
    due: Optional[ParsedDate] = None
    intent: Intent = field(default=Intent.ADD_TASK, init=False)


@dataclass(frozen=True)
class CompleteTask:
    target: Target
    intent: Intent = field(default=Intent.COMPLETE_TASK, init=False)

    @property
    def resolved(self) -> bool:
        return isinstance(self.target, TaskRef)


@dataclass(frozen=True)
class DeleteTask:
    target: Target
    intent: Intent = field(default=Intent.DELETE_TASK, init=False)

    @property
    def resolved(self) -> bool:
        return isinstance(self.target, TaskRef)


@dataclass(frozen=True)
class QueryTasks:
    """Read-only query for the Show* intents and CountTasks."""

    intent: Intent
    view: TaskView

    @property
    def count_only(self) -> bool:
        return self.intent is Intent.COUNT_TASKS

    def select(self, tasks: Iterable[TaskRef], now: datetime) -> List[TaskRef]:
        """Apply the view to a snapshot, keeping snapshot order."""
        if self.view is TaskView.PENDING:
            return [t for t in tasks if not t.completed]
        if self.view is TaskView.COMPLETED:
            return [t for t in tasks if t.completed]
        if self.view is TaskView.OVERDUE:
            return [t for t in tasks if not t.completed and t.due is not None and t.due < now]
        return list(tasks)


@dataclass(frozen=True)
class MarkAllComplete:
    tasks: Tuple[TaskRef, ...] = ()
    intent: Intent = field(default=Intent.MARK_ALL_COMPLETE, init=False)

    @property
    def count(self) -> int:
        return len(self.tasks)


@dataclass(frozen=True)
class Unknown:
    original_text: str
    suggestion: Optional[str] = None
    reason: UnknownReason = UnknownReason.NO_INTENT_MATCHED
    intent: Intent = field(default=Intent.UNKNOWN, init=False)


CommandOutcome = Union[AddTask, CompleteTask, DeleteTask, QueryTasks, MarkAllComplete, Unknown]


def task_to_dict(task: TaskRef) -> Dict[str, Any]:
    return {
        "id": task.id,
        "label": task.label,
        "completed": task.completed,
        "due": task.due.isoformat() if task.due else None,
    }


def _target_to_dict(target: Target) -> Dict[str, Any]:
    if isinstance(target, NotFound):
        return {"found": False, "query": target.query}
    return {"found": True, "task": task_to_dict(target)}


def outcome_to_dict(outcome: CommandOutcome) -> Dict[str, Any]:
    """JSON-friendly rendering of an outcome."""
    data: Dict[str, Any] = {"intent": outcome.intent.value}
    if isinstance(outcome, AddTask):
        data["label"] = outcome.label
        data["due"] = outcome.due.to_dict() if outcome.due else None
    elif isinstance(outcome, (CompleteTask, DeleteTask)):
        data["target"] = _target_to_dict(outcome.target)
    elif isinstance(outcome, QueryTasks):
        data["view"] = outcome.view.value
        data["count_only"] = outcome.count_only
    elif isinstance(outcome, MarkAllComplete):
        data["count"] = outcome.count
        data["task_ids"] = [t.id for t in outcome.tasks]
    elif isinstance(outcome, Unknown):
        data["original_text"] = outcome.original_text
        data["suggestion"] = outcome.suggestion
        data["reason"] = outcome.reason.value
    return data
