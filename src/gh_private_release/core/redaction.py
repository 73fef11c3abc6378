"""Secret redaction for error messages and log records.

Access tokens must never reach logs, exception text or printed command
lines. Two layers are applied: exact replacement of known secret values,
then pattern rules for credentials that were never registered (for example
a token echoed back inside an upstream error payload).
"""

import re
from collections.abc import Iterable

from gh_private_release.constants import REDACTED

# Shortest value treated as a secret; avoids scrubbing single characters
MIN_SECRET_LENGTH = 4

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"(authorization:\s*)(token|bearer)\s+\S+", re.IGNORECASE),
        rf"\1\2 {REDACTED}",
    ),
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9_]{20,}"), REDACTED),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}"), REDACTED),
    (
        re.compile(r"([?&](?:access_token|token)=)[^&\s\"']+", re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
]


def redact_secrets(
    text: str,
    secrets: Iterable[str | None] = (),
    min_length: int = MIN_SECRET_LENGTH,
) -> str:
    """Return ``text`` with known secrets and credential patterns masked.

    Args:
        text: Text that may contain sensitive values.
        secrets: Exact secret values to mask. Empty values and values
            shorter than ``min_length`` are ignored.
        min_length: Shortest value treated as a secret. Pass 1 for
            values known to be credentials, such as the access token.

    Returns:
        The redacted text.

    """
    if not text:
        return text

    # Longest first so a secret containing another is masked whole
    for secret in sorted(
        (s for s in secrets if s and len(s) >= min_length),
        key=len,
        reverse=True,
    ):
        text = text.replace(secret, REDACTED)

    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)

    return text
