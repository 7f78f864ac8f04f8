"""Terminal view for todokeeper."""
