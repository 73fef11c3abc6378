"""Release location and download target value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gh_private_release.constants import DEFAULT_GITHUB_HOST

if TYPE_CHECKING:
    from gh_private_release.core.protocols import TokenProvider


@dataclass(slots=True, frozen=True)
class ReleaseLocation:
    """Coordinates of a release asset parsed from a download URL.

    Attributes:
        owner: Repository owner (user or organization login)
        repo: Repository name
        tag: Release tag, kept opaque
        filename: Exact asset filename to match
        url: The URL the location was parsed from

    """

    owner: str
    repo: str
    tag: str
    filename: str
    url: str = ""

    @property
    def repository(self) -> str:
        """Return the ``owner/repo`` slug."""
        return f"{self.owner}/{self.repo}"


@dataclass(slots=True, frozen=True)
class DownloadTarget:
    """Everything needed for one authenticated download attempt.

    The access token is excluded from ``repr`` so the target can be logged
    or shown in tracebacks without leaking the credential.
    """

    owner: str
    repo: str
    tag: str
    filename: str
    access_token: str = field(repr=False)

    @classmethod
    def from_location(
        cls, location: ReleaseLocation, access_token: str
    ) -> DownloadTarget:
        """Create a target from a parsed location and a resolved token."""
        return cls(
            owner=location.owner,
            repo=location.repo,
            tag=location.tag,
            filename=location.filename,
            access_token=access_token,
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        token_provider: TokenProvider,
        host: str | None = None,
    ) -> DownloadTarget:
        """Parse ``url`` and resolve the token through ``token_provider``.

        Args:
            url: GitHub release download URL
            token_provider: Source of the access token
            host: Expected web host (defaults to github.com)

        Raises:
            InvalidUrlPatternError: If the URL does not match.
            MissingCredentialError: If no token is available.

        """
        # Late import keeps the domain package free of core imports at load
        from gh_private_release.core.url import (  # noqa: PLC0415
            parse_release_url,
        )

        location = parse_release_url(url, host=host or DEFAULT_GITHUB_HOST)
        return cls.from_location(location, token_provider.resolve_token())

