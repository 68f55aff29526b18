"""Owner-scoped shipping and billing addresses."""
