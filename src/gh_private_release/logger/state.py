"""Logger state management module.

Holds the global logger state singleton. The singleton guarantees a single
root logger, queue and secret registry across the application.
"""

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import queue
    from logging.handlers import QueueListener


class _LoggerState:
    """Container for logger state (avoids module-level mutable globals).

    Attributes:
        lock: Thread lock for singleton initialization
        root_initialized: Whether root logger has been set up
        config_applied: Whether settings file levels have been loaded
        queue_listener: Background thread processing log records
        log_queue: Queue for async-safe log record processing
        secrets: Values masked out of every log record

    """

    def __init__(self) -> None:
        """Initialize logger state."""
        self.lock = threading.Lock()
        self.root_initialized = False
        self.config_applied = False
        self.queue_listener: QueueListener | None = None
        self.log_queue: queue.Queue | None = None
        self.secrets: frozenset[str] = frozenset()


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Get the global logger state singleton."""
    return _state
