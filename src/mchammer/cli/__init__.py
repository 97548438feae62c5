"""Command-line helpers for inspecting model types."""

from .app import app

__all__ = ["app"]
