"""Configuration loading and updating for the logging system.

Logger setup happens at import time, before settings are loaded, so it
starts from bootstrap defaults; ``update_logger_from_config`` applies the
levels from ``settings.conf`` once the caller has loaded them.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from gh_private_release.config.paths import Paths
from gh_private_release.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
)

if TYPE_CHECKING:
    from gh_private_release.config.settings import FetchSettings
    from gh_private_release.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Return bootstrap console level, file level and log file path.

    ``GH_PRIVATE_RELEASE_LOG_DIR`` redirects the log file; the test suite
    sets it so runs never write to the user's config directory.
    """
    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, Paths.log_file()


def apply_levels(
    state: "_LoggerState", console_level: str, file_level: str
) -> None:
    """Set handler levels on the running QueueListener."""
    if state.queue_listener is None:
        return

    for handler in state.queue_listener.handlers:
        if isinstance(handler, RotatingFileHandler):
            handler.setLevel(getattr(logging, file_level, logging.INFO))
        elif isinstance(handler, logging.StreamHandler):
            handler.setLevel(getattr(logging, console_level, logging.WARNING))


def update_logger_from_config(
    state: "_LoggerState", settings: "FetchSettings | None" = None
) -> None:
    """Update handler levels from settings.

    Args:
        state: Logger state object
        settings: Already loaded settings; loaded from disk when omitted

    Note:
        Errors reading the settings file keep the bootstrap levels so a
        broken config never prevents logging.

    """
    if settings is None:
        from gh_private_release.config.settings import (  # noqa: PLC0415
            SettingsManager,
        )

        try:
            settings = SettingsManager().load()
        except OSError:
            return

    apply_levels(state, settings.console_log_level, settings.log_level)
    state.config_applied = True
