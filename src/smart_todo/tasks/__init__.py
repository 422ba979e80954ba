"""Task domain: the dependency engine and the caller-side helpers around it.

- `models`: stored and effective states, the `Task` value
- `dependency`: blocking, effective state, dependent lookup, reconciliation
- `actions`: user-driven transitions on a local snapshot
- `board`: a reconciled in-memory board, filters and snapshot diffs
- `snapshot`: JSON wire codec
"""

from .dependency import (
    DuplicateTaskIdError,
    build_dependents_index,
    direct_dependents,
    effective_state,
    is_blocked,
    reconcile,
)
from .models import EffectiveState, Task, TaskState

__all__ = [
    "DuplicateTaskIdError",
    "EffectiveState",
    "Task",
    "TaskState",
    "build_dependents_index",
    "direct_dependents",
    "effective_state",
    "is_blocked",
    "reconcile",
]
