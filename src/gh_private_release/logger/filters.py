"""Log record filters."""

import logging
from collections.abc import Callable, Iterable

from gh_private_release.core.redaction import redact_secrets


class SecretRedactionFilter(logging.Filter):
    """Mask secrets in a record's message and exception text.

    The record is rendered once (``getMessage()``) and its arguments are
    dropped, so handlers further down the queue never see raw values.
    Records are always passed through.
    """

    def __init__(self, secrets: Callable[[], Iterable[str]]) -> None:
        """Initialize the filter.

        Args:
            secrets: Callable returning the current secret values; read
                on every record so secrets registered later still apply.

        """
        super().__init__()
        self._secrets = secrets

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact ``record`` in place and keep it."""
        # The registry already applied its length floor
        secrets = tuple(self._secrets())
        record.msg = redact_secrets(
            record.getMessage(), secrets, min_length=1
        )
        record.args = None

        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(
                record.exc_info
            )
        if record.exc_text:
            record.exc_text = redact_secrets(
                record.exc_text, secrets, min_length=1
            )
            # Formatters would re-render exc_info; keep only the text
            record.exc_info = None
        return True
