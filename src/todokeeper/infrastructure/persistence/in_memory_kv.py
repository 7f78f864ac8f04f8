"""In-memory key-value store for tests and ephemeral sessions."""

from __future__ import annotations

from todokeeper.core.interfaces.key_value import KeyValueStoreProtocol


class InMemoryKeyValueStore(KeyValueStoreProtocol):
    """Dict-backed string store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
