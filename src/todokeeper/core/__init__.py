"""Core layer: domain models, state machines and protocol interfaces."""
