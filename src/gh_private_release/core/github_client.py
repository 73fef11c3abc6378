"""GitHub REST client for private release assets.

``GitHubReleaseTransfer`` is the single implementation of the
``AuthenticatedTransfer`` capability: it looks up the numeric asset id
behind a ``(tag, filename)`` pair and streams the asset bytes through the
authenticated asset endpoint. Public ``browser_download_url`` links cannot
be used for private repositories, which is why both calls go through the
API with the token.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import aiofiles
import aiohttp
import orjson

from gh_private_release.constants import (
    ACCEPT_JSON,
    ACCEPT_OCTET_STREAM,
    CHUNK_SIZE,
    DEFAULT_GITHUB_API_URL,
    GITHUB_API_VERSION,
    HTTP_NOT_FOUND,
)
from gh_private_release.core.url import release_asset_url, release_by_tag_url
from gh_private_release.domain.asset import find_asset
from gh_private_release.exceptions import AssetNotFoundError, ReleaseLookupError
from gh_private_release.logger import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from gh_private_release.domain import DownloadTarget, ReleaseAsset

logger = get_logger(__name__)


def auth_headers(access_token: str, accept: str) -> dict[str, str]:
    """Return request headers carrying the token.

    Args:
        access_token: GitHub access token
        accept: Value of the Accept header

    """
    return {
        "Authorization": f"token {access_token}",
        "Accept": accept,
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }


class GitHubReleaseTransfer:
    """Authenticated release asset lookup and download over aiohttp."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_url: str = DEFAULT_GITHUB_API_URL,
        lookup_timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: aiohttp session for making requests
            api_url: REST API base URL
            lookup_timeout: Bound for the release lookup; the session
                default applies when None

        """
        self.session = session
        self.api_url = api_url.rstrip("/")
        self.lookup_timeout = lookup_timeout

    async def _fetch_release(self, target: DownloadTarget) -> Any:
        """GET the release-by-tag document and decode it."""
        url = release_by_tag_url(
            self.api_url, target.owner, target.repo, target.tag
        )
        request_kwargs: dict[str, Any] = {
            "headers": auth_headers(target.access_token, ACCEPT_JSON),
        }
        if self.lookup_timeout:
            request_kwargs["timeout"] = aiohttp.ClientTimeout(
                total=self.lookup_timeout
            )

        logger.debug("Looking up release: %s", url)
        async with self.session.get(url, **request_kwargs) as response:
            if response.status == HTTP_NOT_FOUND:
                error = aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=response.reason or "Not Found",
                )
                # GitHub also answers 404 when the token lacks repo access
                raise ReleaseLookupError(
                    target.owner,
                    target.repo,
                    target.tag,
                    "no release found for tag, or the token cannot "
                    "access the repository",
                    cause=error,
                    secrets=(target.access_token,),
                ) from error
            response.raise_for_status()
            return orjson.loads(await response.read())

    async def resolve_asset(self, target: DownloadTarget) -> ReleaseAsset:
        """Return the asset named ``target.filename`` in the tagged release.

        Args:
            target: Download target with the release coordinates

        Returns:
            The first asset whose name equals the filename exactly

        Raises:
            ReleaseLookupError: If the release request fails or the
                response is not a release document
            AssetNotFoundError: If no asset carries the filename

        """
        try:
            release = await self._fetch_release(target)
        except (
            aiohttp.ClientError,
            TimeoutError,
            orjson.JSONDecodeError,
        ) as e:
            raise ReleaseLookupError(
                target.owner,
                target.repo,
                target.tag,
                "release request failed",
                cause=e,
                secrets=(target.access_token,),
            ) from e

        assets = release.get("assets") if isinstance(release, dict) else None
        if not isinstance(assets, list):
            raise ReleaseLookupError(
                target.owner,
                target.repo,
                target.tag,
                "response has no assets list",
            )

        asset = find_asset(assets, target.filename)
        if asset is None:
            logger.debug(
                "Release %s has %d assets, none named %s",
                target.tag,
                len(assets),
                target.filename,
            )
            raise AssetNotFoundError(target.filename, target.tag)

        logger.debug("Resolved %s to asset id %s", asset.name, asset.id)
        return asset

    async def _stream_to_file(
        self, url: str, headers: dict[str, str], dest: Path
    ) -> int:
        written = 0
        async with self.session.get(
            url,
            headers=headers,
            allow_redirects=True,
            # The caller's timeout (if any) bounds the whole transfer
            timeout=aiohttp.ClientTimeout(
                total=None, sock_connect=self.lookup_timeout
            ),
        ) as response:
            response.raise_for_status()
            dest.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(dest, mode="wb") as f:
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    if chunk:
                        await f.write(chunk)
                        written += len(chunk)
        return written

    async def transfer_binary(
        self,
        target: DownloadTarget,
        asset: ReleaseAsset,
        dest: Path,
        timeout: float | None = None,
    ) -> int:
        """Stream the asset bytes to ``dest``.

        Args:
            target: Download target providing the token and repository
            asset: Resolved asset
            dest: File to write (parents are created)
            timeout: Bound in seconds for the whole transfer

        Returns:
            Number of bytes written

        Raises:
            aiohttp.ClientError: On HTTP or connection failures
            TimeoutError: If the transfer exceeds ``timeout``
            OSError: If ``dest`` cannot be written

        """
        url = release_asset_url(
            self.api_url, target.owner, target.repo, asset.id
        )
        headers = auth_headers(target.access_token, ACCEPT_OCTET_STREAM)
        logger.debug("Downloading asset %s: %s", asset.id, url)

        transfer = self._stream_to_file(url, headers, dest)
        if timeout:
            return await asyncio.wait_for(transfer, timeout)
        return await transfer
