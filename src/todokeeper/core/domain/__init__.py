"""
Domain Models and Business Logic

This package contains the core of todokeeper:
- Task, TodoView, EditState and PersistedState models
- TodoStore, the single writer of the task list and filter
- EditSession, the single-task text editing state machine
"""

from todokeeper.core.domain.enums import ErrorKind, FilterMode
from todokeeper.core.domain.models import EditState, PersistedState, Task, TodoView
from todokeeper.core.domain.results import OperationResult
from todokeeper.core.domain.store import TodoStore
from todokeeper.core.domain.edit_session import EditSession

__all__ = [
    "EditSession",
    "EditState",
    "ErrorKind",
    "FilterMode",
    "OperationResult",
    "PersistedState",
    "Task",
    "TodoStore",
    "TodoView",
]
