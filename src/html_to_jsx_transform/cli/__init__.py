"""Command-line interface for HTML to JSX conversion."""

from .main import main

__all__ = ["main"]
