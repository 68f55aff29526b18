"""Back-office order management."""
