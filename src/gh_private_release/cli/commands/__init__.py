"""Command handlers for the CLI."""

from .base import BaseCommandHandler
from .fetch import FetchHandler
from .resolve import ResolveHandler
from .token import TokenHandler

__all__ = [
    "BaseCommandHandler",
    "FetchHandler",
    "ResolveHandler",
    "TokenHandler",
]
