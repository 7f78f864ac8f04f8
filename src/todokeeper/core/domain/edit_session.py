"""
Core Domain - Edit Session

Two-state machine for in-place text editing of a single task:

    Idle --begin--> Editing(task_id, draft)
    Editing --update_draft--> Editing(task_id, new draft)
    Editing --commit | cancel | target removed--> Idle

The session never mutates the task list directly. A commit goes through
``TodoStore.edit_text``, which deletes the task when the draft trims to
empty. The session is transient and always starts Idle.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from todokeeper.core.domain.models import IDLE, EditState
from todokeeper.core.domain.results import OperationResult

if TYPE_CHECKING:
    from todokeeper.core.domain.store import TodoStore
    from todokeeper.core.interfaces.logging import LoggerProtocol


class EditSession:
    """
    Tracks which task, if any, is being edited and its draft text.

    With ``watch=True`` (the default) the session registers itself as a
    removal listener on the store, so deleting the edit target from
    anywhere resets it to Idle.

    Example:
        >>> session = EditSession(store)
        >>> session.begin(task_id)
        >>> session.update_draft("Buy oat milk")
        >>> session.commit().success
        True
        >>> session.state.is_editing
        False
    """

    def __init__(
        self,
        store: TodoStore,
        *,
        watch: bool = True,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self._store = store
        self._state: EditState = IDLE
        self._logger = logger or structlog.get_logger(__name__).bind(
            component="edit_session"
        )
        if watch:
            store.add_removal_listener(self.handle_removed)

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._state.is_editing

    def begin(self, task_id: str, current_text: str | None = None) -> OperationResult:
        """
        Start editing ``task_id``.

        A session that is already editing commits its in-progress edit
        first, since only one edit can be open at a time.

        Args:
            task_id: Task to edit
            current_text: Initial draft; defaults to the task's stored text

        Returns:
            ``ok(task_id)`` when editing started, ``missing`` when the task
            does not exist (the session is then Idle)
        """
        if self._state.is_editing:
            self._logger.debug(
                "edit_implicit_commit",
                previous_task_id=self._state.task_id,
                next_task_id=task_id,
            )
            self.commit()

        task = self._store.get(task_id)
        if task is None:
            self._logger.debug("edit_begin_task_missing", task_id=task_id)
            return OperationResult.missing(task_id)

        draft = task.text if current_text is None else current_text
        self._state = EditState(task_id=task_id, draft=draft)
        self._logger.debug("edit_started", task_id=task_id)
        return OperationResult.ok(task_id)

    def update_draft(self, text: str) -> OperationResult:
        """Replace the draft buffer. Has no effect on the store."""
        if not self._state.is_editing:
            return OperationResult.not_editing()

        task_id = self._state.task_id
        if not self._store.contains(task_id):
            self._reset("target_missing")
            return OperationResult.missing(task_id)

        self._state = EditState(task_id=task_id, draft=text)
        return OperationResult.ok(task_id)

    def commit(self) -> OperationResult:
        """
        Apply the draft through ``TodoStore.edit_text`` and return to Idle.

        The session is Idle afterwards whatever the outcome. A task that
        vanished mid-edit yields the store's ``missing`` result and is not
        treated as an error.
        """
        if not self._state.is_editing:
            return OperationResult.not_editing()

        task_id, draft = self._state.task_id, self._state.draft
        # Reset first: an empty draft deletes the task, and the removal
        # listener must find the session already Idle.
        self._state = IDLE
        result = self._store.edit_text(task_id, draft)
        if result.not_found:
            self._logger.debug("edit_commit_reconciled", task_id=task_id)
        else:
            self._logger.debug("edit_committed", task_id=task_id)
        return result

    def cancel(self) -> OperationResult:
        """Discard the draft and return to Idle."""
        if not self._state.is_editing:
            return OperationResult.not_editing()

        task_id = self._state.task_id
        self._reset("cancelled")
        return OperationResult.ok(task_id)

    def handle_removed(self, task_ids: Iterable[str]) -> None:
        """Force the session to Idle when its target was removed."""
        if self._state.is_editing and self._state.task_id in set(task_ids):
            self._reset("target_removed")

    def _reset(self, reason: str) -> None:
        self._logger.debug("edit_session_reset", task_id=self._state.task_id, reason=reason)
        self._state = IDLE
