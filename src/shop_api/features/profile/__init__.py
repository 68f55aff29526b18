"""Current-user profile endpoints."""
