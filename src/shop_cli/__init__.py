"""Command line entry points for shop services."""

from .main import app, run

__all__ = ["app", "run"]
