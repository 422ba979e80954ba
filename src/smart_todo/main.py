"""CLI entrypoint for smart-todo.

Reads a task snapshot (the JSON list served by the task backend), runs the
dependency engine over it and prints the result. Nothing is sent back to the
backend.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from smart_todo import __version__
from smart_todo.config import SmartTodoSettings
from smart_todo.logging import configure_logging
from smart_todo.tasks.actions import UnknownTaskError, available_actions
from smart_todo.tasks.board import TaskFilter, filter_tasks, state_changes
from smart_todo.tasks.dependency import effective_states, reconcile
from smart_todo.tasks.snapshot import SnapshotError, dump_snapshot, load_snapshot

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smart-todo",
        description="Dependency-aware task state reconciliation",
    )
    parser.add_argument("--version", action="version", version=f"smart-todo {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile_cmd = subparsers.add_parser(
        "reconcile",
        help="Print the snapshot with every stored state corrected for its blockers",
    )
    reconcile_cmd.add_argument(
        "snapshot",
        nargs="?",
        default=None,
        help="Path to a JSON task snapshot (defaults to SMART_TODO_SNAPSHOT_PATH)",
    )
    reconcile_cmd.add_argument(
        "--output",
        default=None,
        help="Write the reconciled snapshot here instead of stdout",
    )
    reconcile_cmd.add_argument(
        "--effective",
        action="store_true",
        help="Include each task's effective state in the output",
    )

    status = subparsers.add_parser("status", help="List tasks with their effective state")
    status.add_argument("snapshot", nargs="?", default=None, help="Path to a JSON task snapshot")
    status.add_argument(
        "--filter",
        dest="task_filter",
        type=TaskFilter,
        choices=list(TaskFilter),
        metavar="{" + ",".join(f.value for f in TaskFilter) + "}",
        default=TaskFilter.ALL,
        help="Only list tasks whose stored state matches",
    )
    status.add_argument(
        "--reconcile",
        action="store_true",
        help="Reconcile the snapshot before listing",
    )

    actions = subparsers.add_parser("actions", help="List actions available for one task")
    actions.add_argument("snapshot", nargs="?", default=None, help="Path to a JSON task snapshot")
    actions.add_argument("--task-id", type=int, required=True, help="Task to inspect")

    return parser


def _snapshot_path(arg: str | None, settings: SmartTodoSettings) -> Path:
    return Path(arg) if arg else settings.snapshot_path


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = SmartTodoSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_format)

    try:
        path = _snapshot_path(args.snapshot, settings)
        tasks = load_snapshot(path)
        logger.debug("Snapshot loaded", extra={"path": str(path), "task_count": len(tasks)})

        if args.command == "reconcile":
            reconciled = reconcile(tasks)
            changes = state_changes(tasks, reconciled)
            for change in changes:
                logger.info(
                    "State corrected",
                    extra={
                        "task_id": change.task_id,
                        "from_state": change.before.value,
                        "to_state": change.after.value,
                    },
                )

            text = json.dumps(
                dump_snapshot(reconciled, effective=args.effective), indent=2, ensure_ascii=False
            )
            if args.output:
                out = Path(args.output)
                out.parent.mkdir(parents=True, exist_ok=True)
                out.write_text(text + "\n", encoding="utf-8")
                print(f"Wrote {len(reconciled)} tasks to {out} ({len(changes)} corrected)")
            else:
                print(text)
            return 0

        if args.command == "status":
            if args.reconcile:
                tasks = reconcile(tasks)
            shown = filter_tasks(tasks, args.task_filter)
            if not shown:
                if args.task_filter is TaskFilter.ALL:
                    print("No tasks found")
                else:
                    print(f'No tasks in "{args.task_filter.value}" status')
                return 0
            states = effective_states(tasks)
            for task in shown:
                print(f"#{task.id} [{states[task.id].value}] {task.title}")
            return 0

        # actions
        task = next((t for t in tasks if t.id == args.task_id), None)
        if task is None:
            raise UnknownTaskError(args.task_id)
        names = [a.value for a in available_actions(task, tasks)]
        print(f"#{task.id}: {', '.join(names) or 'none'}")
        return 0

    except (SnapshotError, FileNotFoundError) as e:
        logger.error("Cannot read snapshot", extra={"error": str(e)})
        print(str(e), file=sys.stderr)
        return 2

    except UnknownTaskError as e:
        logger.warning(str(e), extra={"task_id": e.task_id})
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
