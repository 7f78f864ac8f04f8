"""
Core Protocol Interfaces

Protocols for the external collaborators of the todo core. They let the
store depend on contracts rather than on concrete storage classes, so tests
can substitute in-memory fakes.

Available Protocols:
    - KeyValueStoreProtocol: Opaque string-keyed persistence medium
    - PersistenceAdapterProtocol: Todo state save/load boundary
    - LoggerProtocol: structlog-compatible logger
"""

from todokeeper.core.interfaces.key_value import KeyValueStoreProtocol
from todokeeper.core.interfaces.logging import LoggerProtocol
from todokeeper.core.interfaces.persistence import PersistenceAdapterProtocol

__all__ = [
    "KeyValueStoreProtocol",
    "LoggerProtocol",
    "PersistenceAdapterProtocol",
]
