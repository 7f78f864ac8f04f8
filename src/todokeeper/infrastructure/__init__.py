"""Infrastructure layer: concrete storage behind the core protocols."""
