"""
Application Layer - Todo Application

Facade exposing the inbound event surface of the view layer. Every method
maps 1:1 onto a TodoStore or EditSession operation, so a view (terminal,
GUI, RPC handler or test) never needs to know which component owns which
piece of state.
"""

from __future__ import annotations

from todokeeper.core.domain.edit_session import EditSession
from todokeeper.core.domain.enums import FilterMode
from todokeeper.core.domain.models import EditState, TodoView
from todokeeper.core.domain.results import OperationResult
from todokeeper.core.domain.store import TodoStore


class TodoApplication:
    """
    Todo list state: store, edit session and the events that drive them.

    Example:
        >>> app = build_application(settings)
        >>> task_id = app.create("Buy milk").task_id
        >>> app.begin_edit(task_id)
        >>> app.update_draft("Buy oat milk")
        >>> app.commit_edit()
        >>> [task.text for task in app.view().visible]
        ['Buy oat milk']
    """

    def __init__(self, store: TodoStore, edit_session: EditSession | None = None) -> None:
        self.store = store
        self.edit_session = edit_session or EditSession(store)

    # Store events

    def create(self, raw_text: str) -> OperationResult:
        return self.store.create(raw_text)

    def toggle(self, task_id: str) -> OperationResult:
        return self.store.toggle(task_id)

    def edit_text(self, task_id: str, raw_text: str) -> OperationResult:
        return self.store.edit_text(task_id, raw_text)

    def delete(self, task_id: str) -> OperationResult:
        return self.store.delete(task_id)

    def clear_completed(self) -> OperationResult:
        return self.store.clear_completed()

    def toggle_all(self) -> OperationResult:
        return self.store.toggle_all()

    def set_filter(self, mode: FilterMode | str) -> OperationResult:
        return self.store.set_filter(mode)

    def view(self) -> TodoView:
        return self.store.view()

    # Edit session events

    def begin_edit(self, task_id: str, current_text: str | None = None) -> OperationResult:
        return self.edit_session.begin(task_id, current_text)

    def update_draft(self, text: str) -> OperationResult:
        return self.edit_session.update_draft(text)

    def commit_edit(self) -> OperationResult:
        return self.edit_session.commit()

    def cancel_edit(self) -> OperationResult:
        return self.edit_session.cancel()

    @property
    def edit_state(self) -> EditState:
        return self.edit_session.state

    def resolve_task_id(self, prefix: str) -> str | None:
        """
        Find the id of the task whose id starts with ``prefix``.

        Returns None when no task or more than one task matches.
        """
        matches = [task.id for task in self.store.tasks if task.id.startswith(prefix)]
        if len(matches) != 1:
            return None
        return matches[0]
