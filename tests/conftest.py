"""Pytest configuration and fixtures for gh-private-release tests."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from gh_private_release.domain import DownloadTarget

RELEASE_URL = (
    "https://github.com/acme/tool/releases/download/v1.2.0/tool-linux.tar.gz"
)
TOKEN = "tok_abc"


@pytest.fixture(autouse=True)
def enable_log_propagation() -> Iterator[None]:
    """Let caplog see records from the package logger.

    The package root logger is created with propagate=False so records do
    not reach the Python root logger in production.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("gh_private_release"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logging.getLogger(name).propagate = propagate_value


async def async_chunk_gen(
    chunks: list[bytes], delay: float = 0.0
) -> AsyncGenerator[bytes, None]:
    """Yield byte chunks like ``StreamReader.iter_chunked``.

    Args:
        chunks: Chunks to yield.
        delay: Seconds to sleep before each chunk, to simulate a slow link.

    """
    for chunk in chunks:
        if delay:
            await asyncio.sleep(delay)
        yield chunk


def make_response(
    status: int = 200,
    body: bytes = b"",
    chunks: list[bytes] | None = None,
    delay: float = 0.0,
    raise_for_status: Exception | None = None,
    reason: str = "",
) -> AsyncMock:
    """Build a mock aiohttp response usable with ``async with``."""
    response = AsyncMock()
    response.__aenter__.return_value = response
    response.__aexit__.return_value = None
    response.status = status
    response.reason = reason
    response.request_info = MagicMock()
    response.history = ()
    response.read = AsyncMock(return_value=body)
    response.raise_for_status = MagicMock(side_effect=raise_for_status)
    response.content.iter_chunked = lambda size: async_chunk_gen(
        chunks if chunks is not None else [body], delay=delay
    )
    return response


@pytest.fixture
def mock_session() -> MagicMock:
    """Provide a mock aiohttp.ClientSession."""
    return MagicMock()


@pytest.fixture
def target() -> DownloadTarget:
    """Download target for the acme/tool scenario."""
    return DownloadTarget(
        owner="acme",
        repo="tool",
        tag="v1.2.0",
        filename="tool-linux.tar.gz",
        access_token=TOKEN,
    )


@pytest.fixture
def cache_paths(tmp_path: Path) -> tuple[Path, Path]:
    """Temporary and final cache paths inside tmp_path."""
    final_path = tmp_path / "cache" / "tool-linux.tar.gz"
    temp_path = tmp_path / "cache" / "tool-linux.tar.gz.incomplete"
    return temp_path, final_path
