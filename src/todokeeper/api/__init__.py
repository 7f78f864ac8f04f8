"""API layer: entry points that drive the application facade."""
