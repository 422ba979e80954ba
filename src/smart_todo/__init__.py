"""smart-todo.

Tasks with blocker dependencies, and the engine that keeps their stored
states consistent with those dependencies:
- blocking evaluation and effective (displayed) state
- transitive reconciliation over the blocker graph
- a small CLI over JSON task snapshots
"""

__version__ = "0.1.0"

from smart_todo.tasks import (
    EffectiveState,
    Task,
    TaskState,
    direct_dependents,
    effective_state,
    is_blocked,
    reconcile,
)

__all__ = [
    "__version__",
    "EffectiveState",
    "Task",
    "TaskState",
    "direct_dependents",
    "effective_state",
    "is_blocked",
    "reconcile",
]
