"""Customer orders and checkout."""
