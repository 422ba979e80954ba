from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class TaskState(str, Enum):
    """Stored state of a task, as persisted by the backend."""

    BACKLOG = "BACKLOG"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class EffectiveState(str, Enum):
    """State shown to and acted upon by users.

    `BLOCKED` is derived from the blocker graph and is never stored.
    """

    BACKLOG = "BACKLOG"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    BLOCKED = "BLOCKED"

    @classmethod
    def from_stored(cls, state: TaskState) -> EffectiveState:
        return cls(state.value)


@dataclass(frozen=True, slots=True)
class Task:
    """A single unit of work.

    `dependents` mirrors whatever the backend reported and may be stale; the
    dependency engine always recomputes the reverse relation from `blockers`.
    """

    id: int
    title: str
    state: TaskState = TaskState.BACKLOG
    blockers: frozenset[int] = field(default_factory=frozenset)
    dependents: frozenset[int] = field(default_factory=frozenset)
    description: str | None = None

    @staticmethod
    def create(
        id: int,  # noqa: A002 (backend field name)
        title: str,
        state: TaskState = TaskState.BACKLOG,
        blockers: Iterable[int] = (),
        dependents: Iterable[int] = (),
        description: str | None = None,
    ) -> Task:
        return Task(
            id=id,
            title=title,
            state=state,
            blockers=frozenset(blockers),
            dependents=frozenset(dependents),
            description=description,
        )
