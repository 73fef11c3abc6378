"""Exception classes for gh-private-release operations.

Every failure of a fetch attempt is raised as a subclass of
``ReleaseFetchError`` so the invoking harness can handle a single error
family. Each subclass carries a ``kind`` for callers that branch on the
failure category instead of the exception type.
"""

from collections.abc import Iterable
from enum import Enum

from gh_private_release.constants import DEFAULT_TOKEN_ENV_VAR
from gh_private_release.core.redaction import redact_secrets


class FetchErrorKind(Enum):
    """Categories of fetch failures."""

    INVALID_URL = "invalid_url"
    MISSING_CREDENTIAL = "missing_credential"
    RELEASE_LOOKUP = "release_lookup"
    ASSET_NOT_FOUND = "asset_not_found"
    DOWNLOAD_FAILED = "download_failed"


def _describe_cause(
    cause: BaseException | None, secrets: Iterable[str | None]
) -> str:
    if cause is None:
        return ""
    detail = str(cause) or type(cause).__name__
    # Callers pass only credentials here, so no length floor applies
    return redact_secrets(detail, secrets, min_length=1)


class ReleaseFetchError(Exception):
    """Base exception for release asset fetch operations."""

    error_prefix: str = "Release fetch failed"
    kind: FetchErrorKind

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the asset or URL that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class InvalidUrlPatternError(ReleaseFetchError):
    """Raised when a URL is not a GitHub release download URL."""

    error_prefix = "Invalid GitHub release URL"
    kind = FetchErrorKind.INVALID_URL

    def __init__(self, url: str, expected: str | None = None) -> None:
        """Initialize with the offending URL.

        Args:
            url: The URL that failed to parse.
            expected: Optional description of the expected shape.

        """
        expected = expected or (
            "https://github.com/OWNER/REPO/releases/download/TAG/FILENAME"
        )
        super().__init__(f"expected {expected}", target=url)
        self.url = url


class MissingCredentialError(ReleaseFetchError):
    """Raised when no GitHub access token is available."""

    error_prefix = "Missing GitHub credential"
    kind = FetchErrorKind.MISSING_CREDENTIAL

    def __init__(
        self,
        env_var: str = DEFAULT_TOKEN_ENV_VAR,
        hint: str | None = None,
    ) -> None:
        """Initialize with instructions for providing the token.

        Args:
            env_var: Environment variable expected to hold the token.
            hint: Replacement instructions, used by non-environment
                token sources.

        """
        message = hint or (
            f"{env_var} is required to install from a private repository. "
            f"Set it with: export {env_var}=<your-token>"
        )
        super().__init__(message)
        self.env_var = env_var


class ReleaseLookupError(ReleaseFetchError):
    """Raised when the release-by-tag API lookup fails."""

    error_prefix = "Release lookup failed"
    kind = FetchErrorKind.RELEASE_LOOKUP

    def __init__(
        self,
        owner: str,
        repo: str,
        tag: str,
        reason: str,
        cause: BaseException | None = None,
        secrets: Iterable[str | None] = (),
    ) -> None:
        """Initialize with the release coordinates and underlying cause.

        Args:
            owner: Repository owner.
            repo: Repository name.
            tag: Release tag that was looked up.
            reason: Short description of the failure.
            cause: Underlying exception, if any.
            secrets: Values to mask out of the cause text.

        """
        detail = _describe_cause(cause, secrets)
        message = f"{reason} ({detail})" if detail else reason
        super().__init__(message, target=f"{owner}/{repo}@{tag}")
        self.owner = owner
        self.repo = repo
        self.tag = tag
        self.cause = cause


class AssetNotFoundError(ReleaseFetchError):
    """Raised when a release has no asset with the requested filename."""

    error_prefix = "Asset not found"
    kind = FetchErrorKind.ASSET_NOT_FOUND

    def __init__(self, filename: str, tag: str) -> None:
        """Initialize with the missing asset name and release tag.

        Args:
            filename: Asset filename that was expected.
            tag: Release tag that was searched.

        """
        super().__init__(f"Asset {filename} not found in release {tag}")
        self.filename = filename
        self.tag = tag


class DownloadFailedError(ReleaseFetchError):
    """Raised when the binary transfer or its finalization fails."""

    error_prefix = "Download failed"
    kind = FetchErrorKind.DOWNLOAD_FAILED

    def __init__(
        self,
        filename: str,
        tag: str,
        cause: BaseException | None = None,
        transport: bool = True,  # noqa: FBT001, FBT002
        secrets: Iterable[str | None] = (),
    ) -> None:
        """Initialize with the asset, release tag and underlying cause.

        Args:
            filename: Asset filename being downloaded.
            tag: Release tag of the asset.
            cause: Underlying transport or filesystem exception.
            transport: True when the failure happened during the network
                transfer, False when it happened while finalizing.
            secrets: Values to mask out of the cause text.

        """
        stage = "from private release" if transport else "into cache from"
        message = f"Failed to download {filename} {stage} {tag}"
        detail = _describe_cause(cause, secrets)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.filename = filename
        self.tag = tag
        self.cause = cause
        self.transport = transport

    @property
    def timed_out(self) -> bool:
        """Return whether the underlying cause was a timeout."""
        return isinstance(self.cause, TimeoutError)
