"""Private release asset fetch workflow.

One attempt moves through ``START → RESOLVING_ASSET → DOWNLOADING →
FINALIZING → DONE``; any failure ends in ``FAILED``. Nothing is retried and
nothing outlives the attempt: retry policy belongs to the caller.

Typical use from async code::

    async with create_http_session(settings) as session:
        fetcher = ReleaseAssetFetcher(GitHubReleaseTransfer(session))
        await fetcher.fetch(target, temp_path, final_path, timeout=300)

Blocking callers use ``fetch_release_asset()`` instead.
"""

from __future__ import annotations

import asyncio
import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

import aiohttp

from gh_private_release.config.paths import Paths
from gh_private_release.config.settings import FetchSettings
from gh_private_release.core.github_client import GitHubReleaseTransfer
from gh_private_release.core.http_session import create_http_session
from gh_private_release.core.interrupts import ignore_interrupts
from gh_private_release.domain import DownloadTarget, FetchResult, FetchState
from gh_private_release.exceptions import DownloadFailedError, ReleaseFetchError
from gh_private_release.logger import get_logger, register_secret

if TYPE_CHECKING:
    from gh_private_release.core.protocols import (
        AuthenticatedTransfer,
        TokenProvider,
    )

logger = get_logger(__name__)

TRANSFER_ERRORS = (aiohttp.ClientError, TimeoutError, OSError)


def _discard(path: Path) -> None:
    if path.exists():
        logger.debug("Removing partial download: %s", path)
        with contextlib.suppress(OSError):
            path.unlink()


class ReleaseAssetFetcher:
    """Fetch one private release asset into the cache.

    The fetcher owns no credentials and no HTTP session: the token arrives
    inside the ``DownloadTarget`` and the network work is delegated to the
    injected ``AuthenticatedTransfer``.
    """

    def __init__(self, transfer: AuthenticatedTransfer) -> None:
        """Initialize with the transfer capability to use."""
        self.transfer = transfer
        self.state = FetchState.START

    def _enter(self, state: FetchState) -> None:
        logger.debug("Fetch state: %s -> %s", self.state.value, state.value)
        self.state = state

    async def fetch(
        self,
        target: DownloadTarget,
        temp_path: Path,
        final_path: Path,
        timeout: float | None = None,
    ) -> Path:
        """Download the asset to ``temp_path`` and move it to ``final_path``.

        Args:
            target: What to fetch and the token to fetch it with
            temp_path: In-progress file, owned by this attempt
            final_path: Cache location of the finished file
            timeout: Bound in seconds for the binary transfer

        Returns:
            ``final_path``

        Raises:
            ReleaseLookupError: If the release cannot be retrieved
            AssetNotFoundError: If the release has no such asset
            DownloadFailedError: If the transfer or the final move fails

        """
        register_secret(target.access_token, min_length=1)
        self.state = FetchState.START
        try:
            return await self._run(target, temp_path, final_path, timeout)
        except BaseException:
            self._enter(FetchState.FAILED)
            raise

    async def _run(
        self,
        target: DownloadTarget,
        temp_path: Path,
        final_path: Path,
        timeout: float | None,
    ) -> Path:
        secrets = (target.access_token,)

        self._enter(FetchState.RESOLVING_ASSET)
        asset = await self.transfer.resolve_asset(target)

        self._enter(FetchState.DOWNLOADING)
        logger.info(
            "Downloading %s from private release %s",
            target.filename,
            target.tag,
        )
        try:
            size = await self.transfer.transfer_binary(
                target, asset, temp_path, timeout=timeout
            )
        except TRANSFER_ERRORS as e:
            _discard(temp_path)
            raise DownloadFailedError(
                target.filename, target.tag, cause=e, secrets=secrets
            ) from e
        except asyncio.CancelledError:
            _discard(temp_path)
            raise

        self._enter(FetchState.FINALIZING)
        try:
            final_path.parent.mkdir(parents=True, exist_ok=True)
            with ignore_interrupts():
                temp_path.replace(final_path)
        except OSError as e:
            _discard(temp_path)
            raise DownloadFailedError(
                target.filename,
                target.tag,
                cause=e,
                transport=False,
                secrets=secrets,
            ) from e

        self._enter(FetchState.DONE)
        logger.debug("Saved %d bytes to %s", size, final_path)
        return final_path

    async def try_fetch(
        self,
        target: DownloadTarget,
        temp_path: Path,
        final_path: Path,
        timeout: float | None = None,
    ) -> FetchResult:
        """Run ``fetch`` and return the outcome instead of raising.

        Only the ``ReleaseFetchError`` family is captured; cancellation and
        programming errors still propagate.
        """
        try:
            path = await self.fetch(target, temp_path, final_path, timeout)
        except ReleaseFetchError as e:
            return FetchResult(error=e, failed_in=self._failed_in(e))
        return FetchResult(path=path)

    @staticmethod
    def _failed_in(error: ReleaseFetchError) -> FetchState:
        if isinstance(error, DownloadFailedError):
            return (
                FetchState.DOWNLOADING
                if error.transport
                else FetchState.FINALIZING
            )
        return FetchState.RESOLVING_ASSET


async def download_release_asset(
    url: str,
    final_path: Path,
    *,
    token_provider: TokenProvider,
    settings: FetchSettings | None = None,
    session: aiohttp.ClientSession | None = None,
    transfer: AuthenticatedTransfer | None = None,
    temp_path: Path | None = None,
    timeout: float | None = None,
) -> Path:
    """Fetch the asset behind a release download URL.

    The URL is parsed and the token resolved before any network call, so
    configuration errors never touch the API.

    Args:
        url: GitHub release download URL
        final_path: Cache location for the asset
        token_provider: Source of the access token
        settings: Loaded settings (defaults when None)
        session: Existing aiohttp session; one is created when None
        transfer: Transfer capability; built on ``session`` when None
        temp_path: In-progress path (``<final>.incomplete`` when None)
        timeout: Transfer bound in seconds; settings default when None

    Returns:
        ``final_path``

    Raises:
        ReleaseFetchError: Any failure of the attempt

    """
    settings = settings or FetchSettings()
    target = DownloadTarget.from_url(
        url, token_provider, host=settings.github_host
    )
    temp_path = temp_path or Paths.temporary_path(final_path)
    if timeout is None:
        timeout = settings.download_timeout

    if transfer is not None:
        return await ReleaseAssetFetcher(transfer).fetch(
            target, temp_path, final_path, timeout
        )

    async with contextlib.AsyncExitStack() as stack:
        if session is None:
            session = await stack.enter_async_context(
                create_http_session(settings)
            )
        transfer = GitHubReleaseTransfer(
            session,
            api_url=settings.resolved_api_url,
            lookup_timeout=settings.lookup_timeout,
        )
        return await ReleaseAssetFetcher(transfer).fetch(
            target, temp_path, final_path, timeout
        )


def fetch_release_asset(
    url: str,
    final_path: Path,
    *,
    token_provider: TokenProvider,
    settings: FetchSettings | None = None,
    temp_path: Path | None = None,
    timeout: float | None = None,
) -> Path:
    """Blocking wrapper around ``download_release_asset``.

    Runs its own event loop; call it from synchronous code only.
    """
    return asyncio.run(
        download_release_asset(
            url,
            Path(final_path),
            token_provider=token_provider,
            settings=settings,
            temp_path=temp_path,
            timeout=timeout,
        )
    )
