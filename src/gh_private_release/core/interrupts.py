"""Scoped deferral of interrupt signals.

``ignore_interrupts()`` guards short critical sections, such as moving a
finished download into the cache, that must not be torn by Ctrl-C or a
termination request. Signals arriving inside the block are recorded and
re-delivered to the previous handlers once the block exits: each signal
once, in arrival order, with SIGTERM last.
"""

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

from gh_private_release.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (
    signal.SIGINT,
    signal.SIGTERM,
)


def _redeliver(
    signum: int,
    handler: signal.Handlers | object | None,
) -> None:
    """Deliver a deferred signal to the handler that was replaced."""
    if handler is signal.SIG_IGN or handler is None:
        return
    if handler is signal.SIG_DFL:
        signal.raise_signal(signum)
        return
    if callable(handler):
        handler(signum, None)


def _redeliver_all(
    pending: list[int],
    previous: dict[signal.Signals, signal.Handlers | object | None],
) -> None:
    """Deliver every pending signal, even when a handler raises.

    When several handlers raise, the exception of the last one delivered
    propagates with the earlier ones chained as context.
    """
    for index, signum in enumerate(pending):
        try:
            _redeliver(signum, previous[signal.Signals(signum)])
        except BaseException:
            _redeliver_all(pending[index + 1 :], previous)
            raise


def _delivery_order(received: list[int]) -> list[int]:
    """Return each received signal once, SIGTERM last."""
    unique = list(dict.fromkeys(received))
    return sorted(unique, key=lambda signum: signum == signal.SIGTERM)


@contextmanager
def ignore_interrupts(
    signals: tuple[signal.Signals, ...] = DEFAULT_SIGNALS,
) -> Iterator[None]:
    """Defer ``signals`` until the ``with`` block completes.

    Only the main thread can install signal handlers; elsewhere the block
    runs unguarded, since signals are only delivered to the main thread.

    Example:
        >>> with ignore_interrupts():
        ...     temp_path.replace(final_path)

    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    received: list[int] = []

    def _defer(signum: int, _frame: FrameType | None) -> None:
        received.append(signum)
        logger.debug(
            "Deferring %s until the current step completes",
            signal.Signals(signum).name,
        )

    previous = {sig: signal.signal(sig, _defer) for sig in signals}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        _redeliver_all(_delivery_order(received), previous)
