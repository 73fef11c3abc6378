"""Logging utilities for gh-private-release.

This package provides structured logging with:
- Colored console output with ANSI color codes
- File rotation using standard RotatingFileHandler
- Async-safe logging via QueueHandler/QueueListener
- Redaction of registered secrets and credential patterns before any
  record is queued
- Hierarchical logger naming (e.g., gh_private_release.core.fetcher)

Architecture:
    Application → QueueHandler (+ SecretRedactionFilter) → Queue
                                              ↓
                                    QueueListener Thread
                                              ↓
                                    Console + File Handlers

Usage:
    >>> from gh_private_release.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Downloading %s", filename)  # Use %-style formatting

Environment Variables:
    GH_PRIVATE_RELEASE_LOG_DIR: Override the log directory (used by tests)

RULES FOR CONTRIBUTORS:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never use f-strings in log calls
    4. Register every credential with register_secret() before it can
       appear in a log argument
"""

from typing import TYPE_CHECKING

from gh_private_release.logger.config import (
    update_logger_from_config as _update_config,
)
from gh_private_release.logger.filters import SecretRedactionFilter
from gh_private_release.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from gh_private_release.logger.handlers import ConfigurationError
from gh_private_release.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    register_secret,
    setup_logging,
)
from gh_private_release.logger.state import get_state

if TYPE_CHECKING:
    from gh_private_release.config.settings import FetchSettings

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "SecretRedactionFilter",
    "SimpleConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "register_secret",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config(settings: "FetchSettings | None" = None) -> None:
    """Update logger handler levels from settings.

    Convenience wrapper around the internal updater using the global
    state singleton. Settings are read from disk when not given.
    """
    _update_config(get_state(), settings)
