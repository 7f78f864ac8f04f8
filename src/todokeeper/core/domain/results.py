"""
Operation Result Data Types

Typed outcome of store and edit-session operations. Refusals such as empty
input or an unknown task id are returned as values instead of being raised,
so callers can treat them as ordinary control flow.
"""

from dataclasses import dataclass

from todokeeper.core.domain.enums import ErrorKind


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a single store or edit-session operation.

    Attributes:
        success: Whether the operation was applied.
        task_id: Id of the affected task (the new id for ``create``).
        error: Why the operation was refused, when ``success`` is False.
    """

    success: bool
    task_id: str | None = None
    error: ErrorKind | None = None

    @property
    def rejected(self) -> bool:
        """True when the input normalized to empty text."""
        return self.error is ErrorKind.EMPTY_TEXT

    @property
    def not_found(self) -> bool:
        return self.error is ErrorKind.NOT_FOUND

    @classmethod
    def ok(cls, task_id: str | None = None) -> "OperationResult":
        return cls(success=True, task_id=task_id)

    @classmethod
    def empty_text(cls, task_id: str | None = None) -> "OperationResult":
        return cls(success=False, task_id=task_id, error=ErrorKind.EMPTY_TEXT)

    @classmethod
    def missing(cls, task_id: str | None) -> "OperationResult":
        return cls(success=False, task_id=task_id, error=ErrorKind.NOT_FOUND)

    @classmethod
    def not_editing(cls) -> "OperationResult":
        return cls(success=False, error=ErrorKind.NOT_EDITING)

    def __bool__(self) -> bool:
        return self.success
