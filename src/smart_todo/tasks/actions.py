"""User-driven task transitions.

These are the explicit requests a user makes (start, complete, delete, create).
They are applied to a local snapshot only; sending them to a backend is the
caller's job. Results are not reconciled here.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace
from enum import Enum

from .dependency import index_tasks, is_blocked
from .models import Task, TaskState


class TaskAction(str, Enum):
    START = "start"
    COMPLETE = "complete"
    DELETE = "delete"


ACTION_TARGETS: dict[TaskAction, TaskState] = {
    TaskAction.START: TaskState.IN_PROGRESS,
    TaskAction.COMPLETE: TaskState.DONE,
}


class IllegalActionError(ValueError):
    pass


class UnknownTaskError(KeyError):
    def __init__(self, task_id: int) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Unknown task: {self.task_id}"


def available_actions(task: Task, tasks: Iterable[Task]) -> list[TaskAction]:
    """Actions a user may take on `task` right now.

    - START: not blocked and still in BACKLOG
    - COMPLETE: not blocked and IN_PROGRESS
    - DELETE: anything not yet DONE
    """

    blocked = is_blocked(task, tasks)
    actions: list[TaskAction] = []
    if not blocked and task.state is TaskState.BACKLOG:
        actions.append(TaskAction.START)
    if not blocked and task.state is TaskState.IN_PROGRESS:
        actions.append(TaskAction.COMPLETE)
    if task.state is not TaskState.DONE:
        actions.append(TaskAction.DELETE)
    return actions


def _find(tasks: Sequence[Task], task_id: int) -> Task:
    for task in tasks:
        if task.id == task_id:
            return task
    raise UnknownTaskError(task_id)


def set_state(tasks: Sequence[Task], task_id: int, state: TaskState) -> list[Task]:
    """Replace one task's stored state without checking any rule."""

    _find(tasks, task_id)
    return [replace(t, state=state) if t.id == task_id else t for t in tasks]


def apply_action(tasks: Sequence[Task], task_id: int, action: TaskAction) -> list[Task]:
    """Apply a user action and return the new snapshot.

    Raises:
        UnknownTaskError: `task_id` is not in `tasks`.
        IllegalActionError: the action is not available for the task.
    """

    task = _find(tasks, task_id)
    if action not in available_actions(task, tasks):
        raise IllegalActionError(
            f"Cannot {action.value} task {task_id} in state {task.state.value}"
        )

    if action is TaskAction.DELETE:
        return [t for t in tasks if t.id != task_id]
    return set_state(tasks, task_id, ACTION_TARGETS[action])


def new_task(
    task_id: int,
    title: str,
    *,
    blockers: Iterable[int] = (),
    description: str | None = None,
) -> Task:
    """Build a freshly created task. New tasks always start in BACKLOG."""

    cleaned = title.strip()
    if not cleaned:
        raise ValueError("Task title must not be empty")
    return Task.create(task_id, cleaned, blockers=blockers, description=description)


def add_task(tasks: Sequence[Task], task: Task) -> list[Task]:
    """Append `task` to the snapshot, keeping ids unique."""

    return list(index_tasks([*tasks, task]).values())
