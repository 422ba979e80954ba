#!/usr/bin/env python3
"""Programmatic board example.

This demonstrates using the task components directly:

* load settings from `.env`
* load a task snapshot from JSON
* drive a `TaskBoard` through start / complete and watch dependents unblock

The snapshot path is passed as an argument (falls back to `.env`).
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from smart_todo.config import SmartTodoSettings
from smart_todo.logging import configure_logging
from smart_todo.tasks.board import TaskBoard
from smart_todo.tasks.snapshot import load_snapshot


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Walk a task board (programmatic example).")
    parser.add_argument("--snapshot", default=None, help="Path to a JSON task snapshot")
    parser.add_argument("--task-id", type=int, required=True, help="Task to start and complete")
    return parser.parse_args(argv)


def _show(board: TaskBoard) -> None:
    for task, state in board.view():
        print(f"  #{task.id} [{state.value}] {task.title}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = SmartTodoSettings()
    configure_logging(settings.log_level, "text")

    path = Path(args.snapshot) if args.snapshot else settings.snapshot_path
    board = TaskBoard(load_snapshot(path))
    print("Loaded:")
    _show(board)

    board.start(args.task_id)
    changes = board.complete(args.task_id)
    print(f"Completed #{args.task_id}; {len(changes)} dependent state(s) corrected:")
    _show(board)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
