"""HTTP API for interpreting voice commands from remote devices.

A device posts the recognized transcript (or the speech engine's
alternatives) together with its current task list. The reply carries the
structured outcome, which the device applies to its store, and the
sentence to speak back.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Any, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from voicetasks import config
from voicetasks.outcomes import TaskRef, outcome_to_dict, task_to_dict
from voicetasks.pipeline import CommandPipeline, pick_transcript
from voicetasks.reminders import due_soon, reminder_message
from voicetasks.responses import respond

log = logging.getLogger(__name__)


class TaskIn(BaseModel):
    id: Union[int, str]
    label: str
    completed: bool = False
    due: Optional[datetime] = None


class AlternativeIn(BaseModel):
    text: str
    confidence: Optional[float] = None


class CommandRequest(BaseModel):
    transcript: Optional[str] = None
    alternatives: List[AlternativeIn] = []
    tasks: List[TaskIn] = []
    now: Optional[datetime] = None


class RemindersRequest(BaseModel):
    tasks: List[TaskIn] = []
    now: Optional[datetime] = None
    window_seconds: Optional[int] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=config.LOG_LEVEL)
    app.state.last_transcript = ""
    yield


app = FastAPI(title="Voice Tasks API", lifespan=lifespan)

pipeline = CommandPipeline()


def _snapshot(tasks: List[TaskIn]) -> List[TaskRef]:
    return [TaskRef(id=t.id, label=t.label, completed=t.completed, due=t.due) for t in tasks]


def _clock(now: Optional[datetime], tasks: List[TaskRef]) -> datetime:
    """Resolve the request's clock and make sure it compares with every due date."""
    now = now or datetime.now()
    aware = now.tzinfo is not None
    for task in tasks:
        if task.due is not None and (task.due.tzinfo is not None) != aware:
            log.warning("task %r due date does not match the request clock", task.id)
            raise HTTPException(
                status_code=400,
                detail="Timezone-aware and naive datetimes cannot be mixed",
            )
    return now


@app.post("/command")
async def receive_command(request: CommandRequest) -> Any:
    """Interpret one utterance against the supplied task list."""
    transcript = request.transcript
    if transcript is None:
        transcript = pick_transcript((a.text, a.confidence) for a in request.alternatives)
    if transcript is None:
        raise HTTPException(status_code=400, detail="No transcript supplied")
    if len(transcript) > config.MAX_TRANSCRIPT_CHARS:
        raise HTTPException(status_code=400, detail="Transcript too long")

    tasks = _snapshot(request.tasks)
    now = _clock(request.now, tasks)
    outcome = pipeline.interpret(transcript, tasks, now)
    app.state.last_transcript = transcript
    return JSONResponse(content={
        "transcript": transcript,
        "outcome": outcome_to_dict(outcome),
        "response": respond(outcome, tasks, now),
    })


@app.post("/reminders")
async def list_reminders(request: RemindersRequest) -> Any:
    tasks = _snapshot(request.tasks)
    now = _clock(request.now, tasks)
    window = timedelta(seconds=request.window_seconds) if request.window_seconds is not None else None
    reminders = [
        {"task": task_to_dict(task), "message": reminder_message(task)}
        for task in due_soon(tasks, now, window)
    ]
    return JSONResponse(content={"reminders": reminders})


@app.get("/last_transcript")
async def get_last_transcript():
    return JSONResponse(content={"last_transcript": getattr(app.state, "last_transcript", "")})


# If running directly, start the server (use uvicorn)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
