"""Unit tests for user-driven task transitions."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from smart_todo.tasks.actions import (
    IllegalActionError,
    TaskAction,
    UnknownTaskError,
    add_task,
    apply_action,
    available_actions,
    new_task,
    set_state,
)
from smart_todo.tasks.dependency import DuplicateTaskIdError
from smart_todo.tasks.models import Task, TaskState

MakeTask = Callable[..., Task]


def test_available_actions_follow_state_and_blocking(make_task: MakeTask) -> None:
    blocker = make_task(9, TaskState.TODO)

    assert available_actions(make_task(1, TaskState.BACKLOG), [blocker]) == [
        TaskAction.START,
        TaskAction.DELETE,
    ]
    assert available_actions(make_task(1, TaskState.IN_PROGRESS), [blocker]) == [
        TaskAction.COMPLETE,
        TaskAction.DELETE,
    ]
    assert available_actions(make_task(1, TaskState.TODO), [blocker]) == [TaskAction.DELETE]
    assert available_actions(make_task(1, TaskState.DONE), [blocker]) == []

    gated = make_task(1, TaskState.BACKLOG, blockers=[9])
    assert available_actions(gated, [gated, blocker]) == [TaskAction.DELETE]


def test_apply_action_start_and_complete(make_task: MakeTask) -> None:
    tasks = [make_task(1), make_task(2)]

    started = apply_action(tasks, 1, TaskAction.START)
    assert started[0].state is TaskState.IN_PROGRESS
    assert tasks[0].state is TaskState.BACKLOG
    assert started[1] is tasks[1]

    done = apply_action(started, 1, TaskAction.COMPLETE)
    assert done[0].state is TaskState.DONE


def test_apply_action_delete_leaves_dangling_references(make_task: MakeTask) -> None:
    tasks = [make_task(1, TaskState.TODO), make_task(2, blockers=[1])]
    result = apply_action(tasks, 1, TaskAction.DELETE)
    assert [t.id for t in result] == [2]
    assert result[0].blockers == frozenset({1})


def test_apply_action_rejects_unavailable_action(make_task: MakeTask) -> None:
    tasks = [make_task(1, TaskState.TODO), make_task(2, blockers=[1])]

    with pytest.raises(IllegalActionError):
        apply_action(tasks, 2, TaskAction.START)
    with pytest.raises(IllegalActionError):
        apply_action([make_task(3, TaskState.DONE)], 3, TaskAction.DELETE)


def test_unknown_task(make_task: MakeTask) -> None:
    with pytest.raises(UnknownTaskError) as exc:
        apply_action([make_task(1)], 7, TaskAction.START)
    assert exc.value.task_id == 7
    assert str(exc.value) == "Unknown task: 7"

    with pytest.raises(UnknownTaskError):
        set_state([], 7, TaskState.DONE)


def test_set_state_bypasses_rules(make_task: MakeTask) -> None:
    tasks = [make_task(1, TaskState.TODO), make_task(2, blockers=[1])]
    result = set_state(tasks, 2, TaskState.DONE)
    assert result[1].state is TaskState.DONE


def test_new_task_starts_in_backlog_with_trimmed_title() -> None:
    task = new_task(5, "  Write docs ", blockers=[1, 2], description="d")
    assert task.state is TaskState.BACKLOG
    assert task.title == "Write docs"
    assert task.blockers == frozenset({1, 2})
    assert task.description == "d"

    with pytest.raises(ValueError):
        new_task(6, "   ")


def test_add_task_keeps_ids_unique(make_task: MakeTask) -> None:
    tasks = [make_task(1)]
    assert [t.id for t in add_task(tasks, make_task(2))] == [1, 2]
    with pytest.raises(DuplicateTaskIdError):
        add_task(tasks, make_task(1))
