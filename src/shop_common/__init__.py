"""Shared helpers for shop backend packages."""
