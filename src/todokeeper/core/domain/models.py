"""
Core Domain - Todo Models

Defines the data structures shared by the store, the edit session and the
persistence boundary:

- Task: one todo item
- TodoView: filtered projection handed to the presentation layer
- EditState: snapshot of the edit session (Idle or Editing)
- PersistedState: the part of the store that survives restarts

This module has NO persistence concerns. Serialization to the key-value
medium lives in the infrastructure layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from todokeeper.core.domain.enums import FilterMode


@dataclass(frozen=True)
class Task:
    """
    A single todo item.

    Tasks are immutable values. The store replaces a task with an updated
    copy when it is toggled or edited, keeping its id and position.

    Attributes:
        id: Opaque unique identifier, never reused within a list
        text: Trimmed, non-empty task text
        completed: Whether the task is done
    """

    id: str
    text: str
    completed: bool = False

    def toggled(self) -> Task:
        """Return a copy with the completion flag flipped."""
        return replace(self, completed=not self.completed)

    def with_text(self, text: str) -> Task:
        return replace(self, text=text)

    def with_completed(self, completed: bool) -> Task:
        return replace(self, completed=completed)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the Task to a serializable dict.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {"id": self.id, "text": self.text, "completed": self.completed}


@dataclass(frozen=True)
class TodoView:
    """
    Projection of the task list through the active filter.

    Attributes:
        visible: Tasks matching the filter, in list order
        remaining_count: Incomplete tasks in the whole (unfiltered) list
        total_count: Number of tasks in the whole list
        completed_count: Completed tasks in the whole list
        filter: Filter mode used for the projection
    """

    visible: tuple[Task, ...]
    remaining_count: int
    total_count: int
    completed_count: int
    filter: FilterMode

    @property
    def has_completed(self) -> bool:
        """True when "clear completed" would remove something."""
        return self.completed_count > 0

    @property
    def all_completed(self) -> bool:
        """True when the list is non-empty and every task is done."""
        return self.total_count > 0 and self.remaining_count == 0


@dataclass(frozen=True)
class EditState:
    """
    Snapshot of the edit session.

    ``task_id is None`` means Idle; otherwise the session is Editing that
    task with ``draft`` as the in-progress text.
    """

    task_id: str | None = None
    draft: str = ""

    @property
    def is_editing(self) -> bool:
        return self.task_id is not None


IDLE = EditState()


@dataclass(frozen=True)
class PersistedState:
    """Durable part of the store: the task list and the active filter."""

    tasks: tuple[Task, ...] = field(default_factory=tuple)
    filter: FilterMode = FilterMode.ALL
