"""Console formatters.

INFO records are user-facing progress lines and print as the bare message;
every other level prints with a timestamp, logger name and colored level.
"""

import logging

from gh_private_release.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that wraps the level name in ANSI color codes."""

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` with a colored level name.

        The level name is restored afterwards because the same record is
        also handed to the file handler.
        """
        color = LOG_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = f"{color}{original_levelname}{LOG_COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class SimpleConsoleFormatter(logging.Formatter):
    """Formatter that emits only the message."""

    def format(self, record: logging.LogRecord) -> str:
        """Return the rendered message without metadata."""
        return record.getMessage()


class HybridConsoleFormatter(logging.Formatter):
    """Simple output for INFO, colored structured output otherwise.

    Example Output:
        INFO:     "Downloading tool.tar.gz from private release v1.2.0"
        WARNING:  "12:30:45 - gh_private_release - WARNING - Invalid setting"
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
    ) -> None:
        """Initialize with the structured format used for non-INFO levels."""
        super().__init__(fmt, datefmt)
        self._simple_formatter = SimpleConsoleFormatter()
        self._colored_formatter = ColoredConsoleFormatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        """Pick the simple or structured format by level."""
        if record.levelno == logging.INFO:
            return self._simple_formatter.format(record)
        return self._colored_formatter.format(record)
