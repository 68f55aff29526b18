"""Product categories."""
