"""Test configuration and fixtures."""

import json
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from smart_todo.tasks.models import Task, TaskState

MakeTask = Callable[..., Task]


@pytest.fixture
def make_task() -> MakeTask:
    """Build a task with a default title derived from its id."""

    def _make(
        task_id: int,
        state: TaskState = TaskState.BACKLOG,
        blockers: Iterable[int] = (),
        title: str | None = None,
    ) -> Task:
        return Task.create(task_id, title or f"Task {task_id}", state=state, blockers=blockers)

    return _make


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run in an empty directory with no smart-todo settings in the environment."""
    for name in ("LOG_LEVEL", "SMART_TODO_LOG_FORMAT", "SMART_TODO_SNAPSHOT_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    """A small snapshot: #1 done, #2 waiting on #1, #3 in progress blocked by #4."""
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "title": "Design", "state": "DONE", "blockers": [], "dependents": [2]},
                {"id": 2, "title": "Build", "state": "BACKLOG", "blockers": [1], "dependents": []},
                {"id": 3, "title": "Ship", "state": "IN_PROGRESS", "blockers": [4], "dependents": []},
                {"id": 4, "title": "Review", "state": "TODO", "blockers": [], "dependents": [3]},
            ]
        ),
        encoding="utf-8",
    )
    return path
