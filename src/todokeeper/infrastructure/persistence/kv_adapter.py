"""
Key-Value Persistence Adapter

Implements PersistenceAdapterProtocol on top of any KeyValueStoreProtocol.

Persisted layout (two independent entries):
- ``tasks``: JSON array of ``{"id": str, "text": str, "completed": bool}``
- ``filter``: one of ``"all"``, ``"active"``, ``"completed"``

Persistence is best-effort. Write failures are logged and swallowed, and
reads fall back to defaults: an unreadable task list becomes empty and an
unknown filter becomes ``all``. Inside an otherwise readable list, records
that fail validation (or repeat an earlier id) are dropped one by one and
the rest are kept.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from todokeeper.core.domain.enums import FilterMode
from todokeeper.core.domain.models import PersistedState, Task
from todokeeper.core.interfaces.key_value import KeyValueStoreProtocol
from todokeeper.core.interfaces.persistence import PersistenceAdapterProtocol

DEFAULT_TASKS_KEY = "tasks"
DEFAULT_FILTER_KEY = "filter"


class TaskRecord(BaseModel):
    """Schema for one persisted task record."""

    model_config = ConfigDict(extra="ignore", strict=True, frozen=True)

    id: str = Field(..., min_length=1)
    text: str
    completed: bool = False

    @field_validator("text")
    @classmethod
    def validate_text(cls, value: str) -> str:
        """Stored text must survive trimming."""
        text = value.strip()
        if not text:
            raise ValueError("text must not be empty or whitespace")
        return text

    def to_task(self) -> Task:
        return Task(id=self.id, text=self.text, completed=self.completed)


class KeyValuePersistenceAdapter(PersistenceAdapterProtocol):
    """
    Round-trips the task list and filter through a string-keyed store.

    Example:
        >>> adapter = KeyValuePersistenceAdapter(InMemoryKeyValueStore())
        >>> adapter.save(PersistedState(tasks=(Task("a", "Buy milk"),)))
        True
        >>> adapter.load().tasks[0].text
        'Buy milk'
    """

    def __init__(
        self,
        kv_store: KeyValueStoreProtocol,
        *,
        tasks_key: str = DEFAULT_TASKS_KEY,
        filter_key: str = DEFAULT_FILTER_KEY,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            kv_store: External persistence medium
            tasks_key: Key holding the serialized task list
            filter_key: Key holding the filter token
        """
        self.kv_store = kv_store
        self.tasks_key = tasks_key
        self.filter_key = filter_key
        self.logger = structlog.get_logger(__name__).bind(component="kv_persistence_adapter")

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, state: PersistedState) -> bool:
        """
        Write both keys. Each write is guarded on its own.

        Returns:
            True if both writes succeeded, False otherwise. Never raises.
        """
        tasks_saved = self._write(self.tasks_key, lambda: serialize_tasks(state.tasks))
        filter_saved = self._write(self.filter_key, lambda: state.filter.value)
        if tasks_saved and filter_saved:
            self.logger.debug(
                "state_persisted", task_count=len(state.tasks), filter=state.filter.value
            )
        return tasks_saved and filter_saved

    def _write(self, key: str, render: Callable[[], str]) -> bool:
        try:
            self.kv_store.set(key, render())
            return True
        except Exception as e:
            self.logger.warning(
                "persist_write_failed",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self) -> PersistedState:
        """
        Read both keys independently.

        Returns:
            PersistedState with fail-safe defaults for any unreadable part.
            Never raises.
        """
        state = PersistedState(tasks=self._load_tasks(), filter=self._load_filter())
        self.logger.debug(
            "state_restored", task_count=len(state.tasks), filter=state.filter.value
        )
        return state

    def _read(self, key: str) -> str | None:
        try:
            return self.kv_store.get(key)
        except Exception as e:
            self.logger.warning(
                "persist_read_failed",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def _load_tasks(self) -> tuple[Task, ...]:
        raw = self._read(self.tasks_key)
        if raw is None:
            return ()

        try:
            data = json.loads(raw)
        except ValueError as e:
            self.logger.warning("persisted_tasks_unparseable", key=self.tasks_key, error=str(e))
            return ()

        if not isinstance(data, list):
            self.logger.warning(
                "persisted_tasks_invalid_shape",
                key=self.tasks_key,
                found=type(data).__name__,
            )
            return ()

        return parse_task_records(data, logger=self.logger)

    def _load_filter(self) -> FilterMode:
        raw = self._read(self.filter_key)
        if raw is None:
            return FilterMode.ALL

        mode = FilterMode.parse(raw)
        if mode is None:
            self.logger.warning("persisted_filter_unknown", key=self.filter_key, value=raw)
            return FilterMode.ALL
        return mode


def serialize_tasks(tasks: tuple[Task, ...] | list[Task]) -> str:
    """Render the task list as the persisted JSON array."""
    return json.dumps([task.to_dict() for task in tasks], ensure_ascii=False)


def parse_task_records(items: list[Any], *, logger: Any = None) -> tuple[Task, ...]:
    """
    Validate raw records, dropping malformed ones and repeated ids.

    Args:
        items: Decoded JSON array from storage
        logger: Optional logger for dropped-record warnings

    Returns:
        Tasks in stored order
    """
    log = logger or structlog.get_logger(__name__)
    tasks: list[Task] = []
    seen: set[str] = set()

    for index, item in enumerate(items):
        try:
            record = TaskRecord.model_validate(item)
        except PydanticValidationError as e:
            log.warning(
                "persisted_record_dropped",
                index=index,
                reason="invalid",
                errors=e.error_count(),
            )
            continue

        if record.id in seen:
            log.warning(
                "persisted_record_dropped", index=index, reason="duplicate_id", task_id=record.id
            )
            continue

        seen.add(record.id)
        tasks.append(record.to_task())

    return tuple(tasks)
