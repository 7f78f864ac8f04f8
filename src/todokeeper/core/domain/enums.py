"""
Core Domain Enums

Defines filter modes and result error kinds to eliminate magic strings
throughout the codebase.
"""

from enum import Enum


class FilterMode(str, Enum):
    """Active view projection over the task list.

    The values double as the persisted filter tokens.
    """

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: object) -> "FilterMode | None":
        """Return the matching mode for a persisted token, or None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class ErrorKind(str, Enum):
    """Why a store or edit-session operation was refused."""

    EMPTY_TEXT = "empty_text"
    NOT_FOUND = "not_found"
    NOT_EDITING = "not_editing"
