"""Due-soon reminders and progress over a task snapshot."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from voicetasks import config
from voicetasks.outcomes import TaskRef


def due_soon(
    tasks: Iterable[TaskRef],
    now: datetime,
    window: Optional[timedelta] = None,
) -> List[TaskRef]:
    """Pending tasks falling due after ``now`` and before ``now + window``."""
    if window is None:
        window = timedelta(seconds=config.REMINDER_SECONDS)
    return [
        t for t in tasks
        if not t.completed and t.due is not None and timedelta(0) < t.due - now < window
    ]


def reminder_message(task: TaskRef) -> str:
    return f"Reminder: {task.label} is due soon"


@dataclass(frozen=True)
class Progress:
    completed: int
    total: int

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        # half up, not banker's rounding
        return int(self.completed * 100 / self.total + 0.5)


def progress(tasks: Iterable[TaskRef]) -> Progress:
    tasks = list(tasks)
    return Progress(completed=sum(1 for t in tasks if t.completed), total=len(tasks))
