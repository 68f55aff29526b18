"""Application startup helpers."""
