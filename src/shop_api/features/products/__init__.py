"""Product catalog and stock rules."""
