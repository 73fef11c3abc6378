"""GitHub release download URL parsing.

Turns ``https://github.com/OWNER/REPO/releases/download/TAG/FILENAME``
into a ``ReleaseLocation``. The filename is the remainder of the path,
taken verbatim.
"""

import re
from functools import lru_cache
from urllib.parse import quote

from gh_private_release.constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_GITHUB_HOST,
)
from gh_private_release.domain.target import ReleaseLocation
from gh_private_release.exceptions import InvalidUrlPatternError


@lru_cache(maxsize=8)
def _url_pattern(host: str) -> re.Pattern[str]:
    return re.compile(
        rf"https://{re.escape(host)}/"
        r"(?P<owner>[^/]+)/(?P<repo>[^/]+)/releases/download/"
        r"(?P<tag>[^/]+)/(?P<filename>.+)"
    )


def parse_release_url(
    url: str, host: str = DEFAULT_GITHUB_HOST
) -> ReleaseLocation:
    """Parse a release asset download URL.

    Args:
        url: Release download URL
        host: Web host serving the repository

    Returns:
        ReleaseLocation with owner, repo, tag and filename

    Raises:
        InvalidUrlPatternError: If the URL does not match the expected shape

    """
    match = _url_pattern(host).fullmatch(url or "")
    if match is None:
        raise InvalidUrlPatternError(
            url,
            expected=(
                f"https://{host}/OWNER/REPO/releases/download/TAG/FILENAME"
            ),
        )

    return ReleaseLocation(
        owner=match["owner"],
        repo=match["repo"],
        tag=match["tag"],
        filename=match["filename"],
        url=url,
    )


def default_api_url(host: str = DEFAULT_GITHUB_HOST) -> str:
    """Return the REST API base URL for a GitHub web host.

    github.com is served by api.github.com; GitHub Enterprise Server
    exposes the API under ``/api/v3`` on the same host.
    """
    if host == DEFAULT_GITHUB_HOST:
        return DEFAULT_GITHUB_API_URL
    return f"https://{host}/api/v3"


def release_by_tag_url(api_url: str, owner: str, repo: str, tag: str) -> str:
    """Build the releases-by-tag endpoint URL."""
    return (
        f"{api_url.rstrip('/')}/repos/{quote(owner, safe='')}/"
        f"{quote(repo, safe='')}/releases/tags/{quote(tag, safe='')}"
    )


def release_asset_url(
    api_url: str, owner: str, repo: str, asset_id: int
) -> str:
    """Build the release-asset-by-id endpoint URL."""
    return (
        f"{api_url.rstrip('/')}/repos/{quote(owner, safe='')}/"
        f"{quote(repo, safe='')}/releases/assets/{asset_id}"
    )
