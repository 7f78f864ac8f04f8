"""todokeeper - a small todo list state manager with durable persistence."""

__version__ = "0.1.0"
