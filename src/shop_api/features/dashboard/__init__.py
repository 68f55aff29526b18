"""Admin dashboard metrics."""
