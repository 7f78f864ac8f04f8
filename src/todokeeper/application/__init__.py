"""Application layer: settings, wiring and the todo event facade."""

from todokeeper.application.factory import build_application
from todokeeper.application.settings import Settings, load_settings
from todokeeper.application.todo_app import TodoApplication

__all__ = ["Settings", "TodoApplication", "build_application", "load_settings"]
