"""Admin-managed application settings."""
