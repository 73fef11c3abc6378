"""HTTP session utilities.

Creates the aiohttp session used for both API requests. The session-level
timeout bounds the release lookup; the binary transfer sets its own bound
per request.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

from gh_private_release import __version__
from gh_private_release.config.settings import FetchSettings
from gh_private_release.constants import APP_NAME


@asynccontextmanager
async def create_http_session(
    settings: FetchSettings,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Create configured HTTP session.

    Args:
        settings: Loaded settings

    Yields:
        Configured aiohttp.ClientSession

    """
    timeout = aiohttp.ClientTimeout(total=settings.lookup_timeout)
    connector = aiohttp.TCPConnector(limit=4)

    async with aiohttp.ClientSession(
        timeout=timeout,
        connector=connector,
        headers={"User-Agent": f"{APP_NAME}/{__version__}"},
    ) as session:
        yield session
