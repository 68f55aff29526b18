"""Per-user shopping cart."""
