"""Command line entry point."""

from .app import app

__all__ = ["app"]
