"""In-memory task board.

`TaskBoard` owns one snapshot and keeps it reconciled. Every mutation is
followed by a reconciliation pass whose result is adopted only when it differs
from the current snapshot, so repeated refreshes settle instead of looping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from .actions import (
    TaskAction,
    UnknownTaskError,
    add_task,
    apply_action,
    available_actions,
    new_task,
    set_state,
)
from .dependency import effective_states, index_tasks, reconcile
from .models import EffectiveState, Task, TaskState

logger = logging.getLogger(__name__)


class TaskFilter(str, Enum):
    ALL = "ALL"
    BACKLOG = "BACKLOG"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@dataclass(frozen=True, slots=True)
class StateChange:
    task_id: int
    before: TaskState
    after: TaskState


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    """Filter on stored state; `ALL` keeps everything."""

    if task_filter is TaskFilter.ALL:
        return list(tasks)
    wanted = TaskState(task_filter.value)
    return [t for t in tasks if t.state is wanted]


def state_changes(before: Iterable[Task], after: Iterable[Task]) -> list[StateChange]:
    """Stored-state differences for tasks present in both snapshots, in `after` order."""

    previous = {t.id: t.state for t in before}
    return [
        StateChange(task_id=t.id, before=previous[t.id], after=t.state)
        for t in after
        if t.id in previous and previous[t.id] is not t.state
    ]


def snapshot_changed(before: Sequence[Task], after: Sequence[Task]) -> bool:
    return tuple(before) != tuple(after)


class TaskBoard:
    """A reconciled, in-memory view over one task snapshot.

    Not thread-safe: callers serialise mutations.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(index_tasks(tasks).values())
        self.refresh()

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise UnknownTaskError(task_id)

    def refresh(self) -> list[StateChange]:
        """Reconcile the snapshot and adopt the result if anything changed."""

        reconciled = reconcile(self._tasks)
        if not snapshot_changed(self._tasks, reconciled):
            return []

        changes = state_changes(self._tasks, reconciled)
        self._tasks = reconciled
        logger.info(
            "Board reconciled",
            extra={"changed": [c.task_id for c in changes], "task_count": len(reconciled)},
        )
        return changes

    def replace_all(self, tasks: Iterable[Task]) -> list[StateChange]:
        """Adopt a freshly fetched snapshot."""

        self._tasks = list(index_tasks(tasks).values())
        return self.refresh()

    def add(
        self,
        task_id: int,
        title: str,
        *,
        blockers: Iterable[int] = (),
        description: str | None = None,
    ) -> Task:
        task = new_task(task_id, title, blockers=blockers, description=description)
        self._tasks = add_task(self._tasks, task)
        self.refresh()
        return self.get(task_id)

    def perform(self, task_id: int, action: TaskAction) -> list[StateChange]:
        self._tasks = apply_action(self._tasks, task_id, action)
        logger.info("Task action applied", extra={"task_id": task_id, "action": action.value})
        return self.refresh()

    def start(self, task_id: int) -> list[StateChange]:
        return self.perform(task_id, TaskAction.START)

    def complete(self, task_id: int) -> list[StateChange]:
        return self.perform(task_id, TaskAction.COMPLETE)

    def delete(self, task_id: int) -> list[StateChange]:
        return self.perform(task_id, TaskAction.DELETE)

    def set_state(self, task_id: int, state: TaskState) -> list[StateChange]:
        """Record a state the backend accepted, bypassing action checks."""

        self._tasks = set_state(self._tasks, task_id, state)
        return self.refresh()

    def actions_for(self, task_id: int) -> list[TaskAction]:
        return available_actions(self.get(task_id), self._tasks)

    def view(self, task_filter: TaskFilter = TaskFilter.ALL) -> list[tuple[Task, EffectiveState]]:
        states = effective_states(self._tasks)
        return [(t, states[t.id]) for t in filter_tasks(self._tasks, task_filter)]
