"""Transfer and credential protocols for the fetch workflow.

The fetcher depends on these abstractions instead of a concrete HTTP
client, so tests substitute fakes without a network or a mocked session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from gh_private_release.domain import DownloadTarget, ReleaseAsset


@runtime_checkable
class TokenProvider(Protocol):
    """Source of a GitHub access token."""

    def resolve_token(self) -> str:
        """Return the token or raise MissingCredentialError."""
        ...


@runtime_checkable
class AuthenticatedTransfer(Protocol):
    """Authenticated access to private release assets."""

    async def resolve_asset(self, target: DownloadTarget) -> ReleaseAsset:
        """Look up the asset named ``target.filename`` in the release.

        Raises:
            ReleaseLookupError: If the release cannot be retrieved.
            AssetNotFoundError: If no asset has the requested name.

        """
        ...

    async def transfer_binary(
        self,
        target: DownloadTarget,
        asset: ReleaseAsset,
        dest: Path,
        timeout: float | None = None,
    ) -> int:
        """Stream the asset's bytes to ``dest`` and return the byte count.

        Transport failures propagate unchanged; the caller wraps them.
        """
        ...
