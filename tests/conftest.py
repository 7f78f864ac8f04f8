"""Test configuration and shared fixtures."""

from __future__ import annotations

import itertools
from collections.abc import Callable

import pytest
import structlog

from todokeeper.core.domain.errors import StorageError
from todokeeper.core.domain.models import PersistedState
from todokeeper.core.domain.store import TodoStore
from todokeeper.infrastructure.persistence.in_memory_kv import InMemoryKeyValueStore
from todokeeper.infrastructure.persistence.kv_adapter import KeyValuePersistenceAdapter


class RecordingAdapter(KeyValuePersistenceAdapter):
    """Adapter that keeps every saved snapshot for assertions."""

    def __init__(self, kv_store=None, **kwargs) -> None:
        super().__init__(kv_store or InMemoryKeyValueStore(), **kwargs)
        self.saved: list[PersistedState] = []

    def save(self, state: PersistedState) -> bool:
        self.saved.append(state)
        return super().save(state)


class FailingKeyValueStore(InMemoryKeyValueStore):
    """Key-value store whose reads and/or writes fail on selected keys."""

    def __init__(
        self,
        initial: dict[str, str] | None = None,
        *,
        fail_reads: set[str] | None = None,
        fail_writes: set[str] | None = None,
    ) -> None:
        super().__init__(initial)
        self.fail_reads = fail_reads or set()
        self.fail_writes = fail_writes or set()

    def get(self, key: str) -> str | None:
        if key in self.fail_reads:
            raise StorageError("store unavailable", key=key)
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        if key in self.fail_writes:
            raise StorageError("quota exceeded", key=key)
        super().set(key, value)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo structlog configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def adapter(kv_store) -> RecordingAdapter:
    return RecordingAdapter(kv_store)


@pytest.fixture
def store(adapter, id_factory) -> TodoStore:
    return TodoStore(adapter, id_factory=id_factory)


@pytest.fixture
def failing_kv_store_cls() -> type[FailingKeyValueStore]:
    return FailingKeyValueStore


@pytest.fixture
def recording_adapter_cls() -> type[RecordingAdapter]:
    return RecordingAdapter
