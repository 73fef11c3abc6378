"""Command-line interface for gh-private-release."""

from .runner import CLIRunner

__all__ = ["CLIRunner"]
