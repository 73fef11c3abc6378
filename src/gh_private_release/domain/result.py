"""Fetch workflow states and result type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from gh_private_release.exceptions import FetchErrorKind, ReleaseFetchError


class FetchState(Enum):
    """States of a single fetch attempt."""

    START = "start"
    RESOLVING_ASSET = "resolving_asset"
    DOWNLOADING = "downloading"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Outcome of a fetch attempt returned instead of raising.

    Attributes:
        path: Final cache path on success, None on failure
        error: The failure, None on success
        failed_in: State the workflow was in when it failed

    """

    path: Path | None = None
    error: ReleaseFetchError | None = None
    failed_in: FetchState | None = None

    @property
    def ok(self) -> bool:
        """Return whether the fetch succeeded."""
        return self.error is None

    @property
    def state(self) -> FetchState:
        """Return the terminal state of the attempt."""
        return FetchState.DONE if self.ok else FetchState.FAILED

    @property
    def kind(self) -> FetchErrorKind | None:
        """Return the error kind, or None on success."""
        return self.error.kind if self.error is not None else None
