"""
Key-Value Store Protocol

This module defines the protocol for the external persistence medium: an
opaque store mapping string keys to string values (the role browser local
storage plays for a web client).

Error Handling:
    Implementations raise ``StorageError`` for any read or write failure
    (medium unavailable, quota exceeded, corrupt backing file). Callers at
    the persistence boundary decide whether to absorb these.
"""

from typing import Protocol


class KeyValueStoreProtocol(Protocol):
    """
    Protocol defining the contract for a string-keyed string store.

    Example:
        >>> store.set("tasks", "[]")
        >>> store.get("tasks")
        '[]'
        >>> store.get("missing") is None
        True
    """

    def get(self, key: str) -> str | None:
        """
        Read the value stored under ``key``.

        Returns:
            The stored string, or None if the key is absent.

        Raises:
            StorageError: If the medium cannot be read.
        """
        ...

    def set(self, key: str, value: str) -> None:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageError: If the medium cannot be written.
        """
        ...

    def delete(self, key: str) -> None:
        """
        Remove ``key``. Idempotent: absent keys are ignored.

        Raises:
            StorageError: If the medium cannot be written.
        """
        ...
