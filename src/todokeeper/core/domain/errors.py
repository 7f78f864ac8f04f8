"""Domain-specific exception types for todokeeper.

Domain operations report refusals as ``OperationResult`` values. These
exceptions are reserved for infrastructure and configuration failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class TodoKeeperError(Exception):
    """Base exception for todokeeper errors."""

    message: str
    code: str = "todokeeper_error"
    details: Dict[str, Any] | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.details is None:
            self.details = {}


class StorageError(TodoKeeperError):
    """Error raised when the key-value medium cannot be read or written."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if key:
            details.setdefault("key", key)
        self.key = key
        super().__init__(message=message, code="storage_error", details=details)


class ConfigError(TodoKeeperError):
    """Error raised for configuration failures."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code="config_error", details=details)

