"""
Persistence Adapter Protocol

This module defines the boundary between the todo store and durable
storage. Adapters translate ``PersistedState`` to and from an external
medium and isolate the store from every storage failure.

Error Handling:
    - save: never raises; failures are logged and absorbed. The return
      value reports whether every write succeeded and may be ignored.
    - load: never raises; unreadable or corrupt data yields the fail-safe
      default (empty task list, ``FilterMode.ALL``).
"""

from typing import Protocol

from todokeeper.core.domain.models import PersistedState


class PersistenceAdapterProtocol(Protocol):
    """Protocol defining the contract for todo state persistence."""

    def save(self, state: PersistedState) -> bool:
        """
        Persist the full task list and filter.

        Args:
            state: Snapshot of the store's durable state.

        Returns:
            True if both the task list and the filter were written.
        """
        ...

    def load(self) -> PersistedState:
        """
        Restore the last persisted state.

        Returns:
            The persisted state, or defaults for any part that is missing
            or unreadable.
        """
        ...
