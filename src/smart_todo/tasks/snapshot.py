"""JSON snapshot codec.

The wire shape is the one the task backend returns from `GET /tasks`:
a list of objects with `id, title, description?, state, blockers, dependents`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from .dependency import DuplicateTaskIdError, effective_states, index_tasks
from .models import Task, TaskState


class SnapshotError(ValueError):
    pass


class TaskRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str = Field(min_length=1)
    description: str | None = None
    state: TaskState = TaskState.BACKLOG
    blockers: list[int] = Field(default_factory=list)
    dependents: list[int] = Field(default_factory=list)

    @field_validator("blockers", "dependents", mode="before")
    @classmethod
    def _none_as_empty(cls, v: object) -> object:
        return [] if v is None else v

    def to_task(self) -> Task:
        return Task.create(
            self.id,
            self.title,
            state=self.state,
            blockers=self.blockers,
            dependents=self.dependents,
            description=self.description,
        )


_RECORDS = TypeAdapter(list[TaskRecord])


def parse_snapshot(raw: Any) -> list[Task]:
    """Validate decoded JSON into tasks, keeping input order."""

    try:
        records = _RECORDS.validate_python(raw)
        return list(index_tasks(r.to_task() for r in records).values())
    except ValidationError as e:
        raise SnapshotError(f"Invalid task snapshot: {e}") from e
    except DuplicateTaskIdError as e:
        raise SnapshotError(str(e)) from e


def load_snapshot(path: Path) -> list[Task]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Cannot read snapshot: {path}: {e}") from e

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {path}: {e}") from e
    return parse_snapshot(raw)


def dump_snapshot(tasks: Iterable[Task], *, effective: bool = False) -> list[dict[str, object]]:
    """Encode tasks back into the wire shape.

    With `effective=True` each object also carries its derived `effective_state`.
    """

    tasks = list(tasks)
    states = effective_states(tasks) if effective else {}
    out: list[dict[str, object]] = []
    for task in tasks:
        obj: dict[str, object] = {
            "id": task.id,
            "title": task.title,
            "state": task.state.value,
            "blockers": sorted(task.blockers),
            "dependents": sorted(task.dependents),
        }
        if task.description is not None:
            obj["description"] = task.description
        if effective:
            obj["effective_state"] = states[task.id].value
        out.append(obj)
    return out
