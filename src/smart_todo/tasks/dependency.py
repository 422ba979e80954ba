"""Dependency rules for tasks.

Pure functions only: nothing here performs I/O or mutates the snapshot it is
given. Callers hand in the full task collection and get values or a fresh
snapshot back.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace

from .models import EffectiveState, Task, TaskState

logger = logging.getLogger(__name__)


class DuplicateTaskIdError(ValueError):
    pass


def index_tasks(tasks: Iterable[Task]) -> dict[int, Task]:
    """Map task ids to tasks, rejecting snapshots with repeated ids."""

    by_id: dict[int, Task] = {}
    for task in tasks:
        if task.id in by_id:
            raise DuplicateTaskIdError(f"Duplicate task id in snapshot: {task.id}")
        by_id[task.id] = task
    return by_id


def _blocked_in(task: Task, by_id: Mapping[int, Task]) -> bool:
    # Ids missing from the snapshot (deleted tasks) never block.
    for blocker_id in task.blockers:
        blocker = by_id.get(blocker_id)
        if blocker is not None and blocker.state is not TaskState.DONE:
            return True
    return False


def is_blocked(task: Task, tasks: Iterable[Task]) -> bool:
    """Return True if any blocker present in `tasks` is not DONE."""

    if not task.blockers:
        return False
    return _blocked_in(task, {t.id: t for t in tasks})


def effective_state(task: Task, tasks: Iterable[Task]) -> EffectiveState:
    """Return the state to display for `task`: BLOCKED or its stored state."""

    if is_blocked(task, tasks):
        return EffectiveState.BLOCKED
    return EffectiveState.from_stored(task.state)


def effective_states(tasks: Iterable[Task]) -> dict[int, EffectiveState]:
    """Effective state of every task, keyed by id, from a single id index."""

    by_id = index_tasks(tasks)
    return {
        task_id: EffectiveState.BLOCKED
        if task.blockers and _blocked_in(task, by_id)
        else EffectiveState.from_stored(task.state)
        for task_id, task in by_id.items()
    }


def direct_dependents(task_id: int, tasks: Iterable[Task]) -> list[Task]:
    """Return every task that lists `task_id` as a blocker."""

    return [t for t in tasks if task_id in t.blockers]


def build_dependents_index(tasks: Iterable[Task]) -> dict[int, list[int]]:
    """Reverse adjacency: blocker id -> ids of tasks it blocks.

    Dangling blocker ids are kept as keys; they simply never get visited.
    """

    index: dict[int, list[int]] = {}
    for task in tasks:
        for blocker_id in task.blockers:
            index.setdefault(blocker_id, []).append(task.id)
    return index


def _corrected_state(task: Task, by_id: Mapping[int, Task]) -> TaskState:
    blocked = bool(task.blockers) and _blocked_in(task, by_id)

    # A blocked task always falls back to BACKLOG, DONE included.
    if blocked and task.state is not TaskState.BACKLOG:
        return TaskState.BACKLOG

    # Only tasks that were gated advance on their own; a BACKLOG task without
    # blockers waits for an explicit start.
    if not blocked and task.state is TaskState.BACKLOG and task.blockers:
        return TaskState.TODO

    return task.state


def reconcile(tasks: Sequence[Task]) -> list[Task]:
    """Bring every stored state in line with the blocker graph.

    Rules, applied to each task against the already-corrected snapshot:

    - a blocked task that is not in BACKLOG is moved to BACKLOG;
    - an unblocked BACKLOG task that has blockers is moved to TODO.

    Corrections propagate to direct dependents through a worklist. A task is
    queued at most once at a time, and its dependents are queued again only
    when its state actually changes. Blocking only ever tightens during a pass
    (nothing becomes DONE here), so every task settles after a bounded number
    of visits even on cyclic graphs, and the result does not depend on the
    order of `tasks`.

    Returns a new list in input order. Only `state` may differ from the input;
    tasks that need no correction are returned as the same instances.
    """

    working = index_tasks(tasks)
    dependents = build_dependents_index(working.values())

    pending: deque[int] = deque(working)
    queued: set[int] = set(working)

    while pending:
        task_id = pending.popleft()
        queued.discard(task_id)

        task = working[task_id]
        target = _corrected_state(task, working)
        if target is task.state:
            continue

        logger.debug(
            "Task state corrected",
            extra={"task_id": task_id, "from_state": task.state.value, "to_state": target.value},
        )
        working[task_id] = replace(task, state=target)

        for dependent_id in dependents.get(task_id, ()):
            if dependent_id not in queued:
                queued.add(dependent_id)
                pending.append(dependent_id)

    return [working[t.id] for t in tasks]
