"""Key-value stores and the todo persistence adapter."""

from todokeeper.infrastructure.persistence.file_kv import JsonFileKeyValueStore
from todokeeper.infrastructure.persistence.in_memory_kv import InMemoryKeyValueStore
from todokeeper.infrastructure.persistence.kv_adapter import (
    KeyValuePersistenceAdapter,
    TaskRecord,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValuePersistenceAdapter",
    "TaskRecord",
]
