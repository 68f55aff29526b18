"""Per-user notification preferences, locale preferences and password changes."""
