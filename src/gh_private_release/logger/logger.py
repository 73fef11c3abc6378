"""Public logging API.

- setup_logging(): initialize the root package logger once
- get_logger(): module logger accessor
- register_secret(): add a value to the redaction registry
- flush_all_handlers(): drain the queue and flush handlers
- clear_logger_state(): reset everything (tests only)
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from gh_private_release.constants import LOGGER_ROOT_NAME
from gh_private_release.core.redaction import MIN_SECRET_LENGTH
from gh_private_release.logger.config import load_log_settings
from gh_private_release.logger.handlers import setup_root_logger
from gh_private_release.logger.state import get_state

FLUSH_TIMEOUT_SECONDS = 5.0


def flush_all_handlers() -> None:
    """Wait for the queue to drain, then flush every handler.

    QueueListener does not use ``task_done()``, so the queue is polled.
    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    start_time = time.monotonic()
    while not state.log_queue.empty():
        if time.monotonic() - start_time > FLUSH_TIMEOUT_SECONDS:
            break
        time.sleep(0.01)

    # Records may be dequeued but not yet written
    time.sleep(0.05)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = LOGGER_ROOT_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Initialize the root package logger once and return ``name``'s logger.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level; bootstrap default when None
        file_level: File log level; bootstrap default when None
        log_file: Log file path; bootstrap default when None
        enable_file_logging: Whether to attach the rotating file handler

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(name: str = LOGGER_ROOT_NAME) -> logging.Logger:
    """Get a logger, initializing the logging system on first use.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Resolved asset %s", asset_id)

    """
    return setup_logging(name=name)


def register_secret(
    secret: str | None, min_length: int = MIN_SECRET_LENGTH
) -> None:
    """Mask ``secret`` in every subsequent log record.

    Values shorter than ``min_length`` are ignored. Credentials such as
    the access token are registered with ``min_length=1`` so they are
    masked whatever their length.
    """
    if not secret or len(secret) < min_length:
        return
    state = get_state()
    with state.lock:
        state.secrets = state.secrets | {secret}


def clear_logger_state() -> None:
    """Reset global logger state for testing purposes.

    Stops the QueueListener, closes handlers, forgets registered secrets
    and removes package loggers from the logging manager.

    Warning:
        Intended for tests only.

    """
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()

    with state.lock:
        if state.queue_listener is not None:
            state.queue_listener.stop()
            for handler in state.queue_listener.handlers:
                handler.close()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False
        state.config_applied = False
        state.secrets = frozenset()

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(LOGGER_ROOT_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
