"""Application Layer - Factory.

Dependency injection factory wiring the key-value medium, the persistence
adapter, the store and the edit session from Settings.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from todokeeper.application.settings import PersistenceType, Settings
from todokeeper.application.todo_app import TodoApplication
from todokeeper.core.domain.edit_session import EditSession
from todokeeper.core.domain.store import TodoStore
from todokeeper.core.interfaces.key_value import KeyValueStoreProtocol
from todokeeper.infrastructure.persistence.file_kv import JsonFileKeyValueStore
from todokeeper.infrastructure.persistence.in_memory_kv import InMemoryKeyValueStore
from todokeeper.infrastructure.persistence.kv_adapter import KeyValuePersistenceAdapter

logger = structlog.get_logger(__name__)


def create_kv_store(settings: Settings) -> KeyValueStoreProtocol:
    persistence = settings.persistence
    if persistence.type is PersistenceType.MEMORY:
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(persistence.path)


def build_application(
    settings: Settings | None = None,
    *,
    kv_store: KeyValueStoreProtocol | None = None,
    id_factory: Callable[[], str] | None = None,
) -> TodoApplication:
    """
    Build a TodoApplication hydrated from persisted state.

    Args:
        settings: Settings to wire from (defaults when None)
        kv_store: Override for the key-value medium, e.g. a test fake
        id_factory: Override for task id generation

    Returns:
        TodoApplication with an Idle edit session
    """
    settings = settings or Settings()
    kv_store = kv_store if kv_store is not None else create_kv_store(settings)
    adapter = KeyValuePersistenceAdapter(
        kv_store,
        tasks_key=settings.persistence.tasks_key,
        filter_key=settings.persistence.filter_key,
    )
    store = TodoStore.load(adapter, id_factory=id_factory)
    logger.debug(
        "application_built",
        persistence=settings.persistence.type.value,
        task_count=len(store),
    )
    return TodoApplication(store, EditSession(store))
