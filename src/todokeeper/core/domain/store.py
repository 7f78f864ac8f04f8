"""
Core Domain - Todo Store

Single source of truth for the task list and the active filter.

Key Responsibilities:
- Enforce the list invariants on every write (unique ids, non-empty text)
- Apply create/toggle/edit/delete/bulk mutations in place, preserving order
- Project the list through the active filter
- Write the full durable state through the persistence adapter after
  every mutation that changed something

All operations are synchronous and return ``OperationResult`` values.
Nothing here raises for a domain refusal, and a failing persistence write
never undoes or fails the in-memory mutation.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import structlog

from todokeeper.core.domain.enums import FilterMode
from todokeeper.core.domain.models import PersistedState, Task, TodoView
from todokeeper.core.domain.results import OperationResult

if TYPE_CHECKING:
    from todokeeper.core.interfaces.logging import LoggerProtocol
    from todokeeper.core.interfaces.persistence import PersistenceAdapterProtocol

RemovalListener = Callable[[frozenset[str]], None]


def _new_id() -> str:
    return uuid.uuid4().hex


def normalize_text(raw_text: str) -> str:
    """Trim leading and trailing whitespace from user input."""
    return (raw_text or "").strip()


class TodoStore:
    """
    In-memory task list with write-through persistence.

    Tasks are kept newest first. Positions only change when tasks are
    removed; toggling and editing replace a task in place.

    Example:
        >>> store = TodoStore(adapter)
        >>> result = store.create("  Buy milk ")
        >>> store.get(result.task_id).text
        'Buy milk'
        >>> store.view().remaining_count
        1
    """

    def __init__(
        self,
        adapter: PersistenceAdapterProtocol,
        *,
        tasks: Iterable[Task] = (),
        filter_mode: FilterMode = FilterMode.ALL,
        id_factory: Callable[[], str] | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            adapter: Persistence boundary used for write-through
            tasks: Initial task list, newest first
            filter_mode: Initial filter
            id_factory: Generator for new task ids (defaults to uuid4 hex)
            logger: Optional logger, defaults to a bound structlog logger
        """
        self._adapter = adapter
        self._tasks: list[Task] = list(tasks)
        self._filter = filter_mode
        self._id_factory = id_factory or _new_id
        self._seen_ids: set[str] = {task.id for task in self._tasks}
        self._removal_listeners: list[RemovalListener] = []
        self._logger = logger or structlog.get_logger(__name__).bind(
            component="todo_store"
        )

    @classmethod
    def load(
        cls,
        adapter: PersistenceAdapterProtocol,
        *,
        id_factory: Callable[[], str] | None = None,
        logger: LoggerProtocol | None = None,
    ) -> TodoStore:
        """Hydrate a store from the adapter's persisted state."""
        state = adapter.load()
        store = cls(
            adapter,
            tasks=state.tasks,
            filter_mode=state.filter,
            id_factory=id_factory,
            logger=logger,
        )
        store._logger.debug(
            "store_hydrated", task_count=len(state.tasks), filter=state.filter.value
        )
        return store

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def filter(self) -> FilterMode:
        return self._filter

    def get(self, task_id: str) -> Task | None:
        index = self._index_of(task_id)
        return None if index is None else self._tasks[index]

    def contains(self, task_id: str) -> bool:
        return self._index_of(task_id) is not None

    def __len__(self) -> int:
        return len(self._tasks)

    def view(self) -> TodoView:
        """
        Project the task list through the active filter.

        ``remaining_count`` is always computed over the unfiltered list.
        """
        if self._filter is FilterMode.ACTIVE:
            visible = tuple(task for task in self._tasks if not task.completed)
        elif self._filter is FilterMode.COMPLETED:
            visible = tuple(task for task in self._tasks if task.completed)
        else:
            visible = tuple(self._tasks)

        remaining = sum(1 for task in self._tasks if not task.completed)
        return TodoView(
            visible=visible,
            remaining_count=remaining,
            total_count=len(self._tasks),
            completed_count=len(self._tasks) - remaining,
            filter=self._filter,
        )

    def snapshot(self) -> PersistedState:
        return PersistedState(tasks=tuple(self._tasks), filter=self._filter)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, raw_text: str) -> OperationResult:
        """
        Prepend a new, incomplete task.

        Args:
            raw_text: User input; surrounding whitespace is trimmed

        Returns:
            ``ok(task_id)`` with the new id, or ``empty_text`` when the
            trimmed input is empty (the list is left untouched)
        """
        text = normalize_text(raw_text)
        if not text:
            self._logger.debug("task_create_rejected", reason="empty_text")
            return OperationResult.empty_text()

        task = Task(id=self._allocate_id(), text=text)
        self._tasks.insert(0, task)
        self._logger.info("task_created", task_id=task.id)
        self._write_through()
        return OperationResult.ok(task.id)

    def toggle(self, task_id: str) -> OperationResult:
        index = self._index_of(task_id)
        if index is None:
            return self._missing("toggle", task_id)

        task = self._tasks[index].toggled()
        self._tasks[index] = task
        self._logger.info("task_toggled", task_id=task_id, completed=task.completed)
        self._write_through()
        return OperationResult.ok(task_id)

    def edit_text(self, task_id: str, raw_text: str) -> OperationResult:
        """
        Replace a task's text in place.

        Text that trims to empty deletes the task, exactly like ``delete``.
        """
        text = normalize_text(raw_text)
        if not text:
            return self.delete(task_id)

        index = self._index_of(task_id)
        if index is None:
            return self._missing("edit_text", task_id)

        current = self._tasks[index]
        if current.text == text:
            return OperationResult.ok(task_id)

        self._tasks[index] = current.with_text(text)
        self._logger.info("task_edited", task_id=task_id)
        self._write_through()
        return OperationResult.ok(task_id)

    def delete(self, task_id: str) -> OperationResult:
        index = self._index_of(task_id)
        if index is None:
            return self._missing("delete", task_id)

        del self._tasks[index]
        self._logger.info("task_deleted", task_id=task_id)
        self._write_through()
        self._notify_removed(frozenset({task_id}))
        return OperationResult.ok(task_id)

    def clear_completed(self) -> OperationResult:
        """Remove every completed task. Always succeeds, even with nothing to clear."""
        removed = frozenset(task.id for task in self._tasks if task.completed)
        if not removed:
            return OperationResult.ok()

        self._tasks = [task for task in self._tasks if not task.completed]
        self._logger.info("completed_tasks_cleared", removed_count=len(removed))
        self._write_through()
        self._notify_removed(removed)
        return OperationResult.ok()

    def toggle_all(self) -> OperationResult:
        """
        Mark every task complete, or every task incomplete.

        If any task is incomplete all become complete; only when every task
        is already complete do they all become incomplete. No-op on an
        empty list.
        """
        if not self._tasks:
            return OperationResult.ok()

        all_completed = all(task.completed for task in self._tasks)
        target = not all_completed
        self._tasks = [task.with_completed(target) for task in self._tasks]
        self._logger.info("all_tasks_toggled", completed=target, task_count=len(self._tasks))
        self._write_through()
        return OperationResult.ok()

    def set_filter(self, mode: FilterMode | str) -> OperationResult:
        """
        Change the active filter. Does not touch the task list.

        Raises:
            ValueError: If ``mode`` is not a known filter token
        """
        mode = FilterMode(mode)
        if mode is self._filter:
            return OperationResult.ok()

        self._filter = mode
        self._logger.info("filter_changed", filter=mode.value)
        self._write_through()
        return OperationResult.ok()

    # ------------------------------------------------------------------
    # Removal notification
    # ------------------------------------------------------------------

    def add_removal_listener(self, listener: RemovalListener) -> None:
        """Register a callback invoked with the ids removed by a mutation."""
        self._removal_listeners.append(listener)

    def _notify_removed(self, task_ids: frozenset[str]) -> None:
        for listener in self._removal_listeners:
            listener(task_ids)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _index_of(self, task_id: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _allocate_id(self) -> str:
        # Ids stay unique even if the factory repeats itself or
        # collides with an id loaded from storage.
        task_id = self._id_factory()
        while task_id in self._seen_ids:
            task_id = self._id_factory()
        self._seen_ids.add(task_id)
        return task_id

    def _missing(self, operation: str, task_id: str) -> OperationResult:
        self._logger.debug("task_not_found", operation=operation, task_id=task_id)
        return OperationResult.missing(task_id)

    def _write_through(self) -> None:
        self._adapter.save(self.snapshot())
