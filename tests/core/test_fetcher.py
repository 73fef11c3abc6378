"""Tests for the private release asset fetch workflow."""

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import orjson
import pytest

from gh_private_release.config import FetchSettings
from gh_private_release.core.fetcher import (
    ReleaseAssetFetcher,
    download_release_asset,
    fetch_release_asset,
)
from gh_private_release.core.token import EnvironmentTokenProvider
from gh_private_release.domain import DownloadTarget, FetchState, ReleaseAsset
from gh_private_release.exceptions import (
    AssetNotFoundError,
    DownloadFailedError,
    FetchErrorKind,
    InvalidUrlPatternError,
    MissingCredentialError,
    ReleaseLookupError,
)
from gh_private_release.logger import get_state
from tests.conftest import RELEASE_URL, TOKEN, make_response

ASSET = ReleaseAsset(id=555, name="tool-linux.tar.gz", size=10)
RELEASE_BODY = orjson.dumps(
    {"assets": [{"id": 555, "name": "tool-linux.tar.gz", "size": 10}]}
)


class FakeTransfer:
    """In-memory AuthenticatedTransfer double."""

    def __init__(
        self,
        payload: bytes = b"BINARYDATA",
        resolve_error: Exception | None = None,
        transfer_error: BaseException | None = None,
    ) -> None:
        self.payload = payload
        self.resolve_error = resolve_error
        self.transfer_error = transfer_error
        self.transfer_calls: list[tuple[Path, float | None]] = []

    async def resolve_asset(self, target: DownloadTarget) -> ReleaseAsset:
        if self.resolve_error is not None:
            raise self.resolve_error
        return ASSET

    async def transfer_binary(
        self,
        target: DownloadTarget,
        asset: ReleaseAsset,
        dest: Path,
        timeout: float | None = None,
    ) -> int:
        self.transfer_calls.append((dest, timeout))
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(self.payload[:4])
        if self.transfer_error is not None:
            raise self.transfer_error
        dest.write_bytes(self.payload)
        return len(self.payload)


@pytest.fixture
def token_provider() -> EnvironmentTokenProvider:
    """Token provider reading from an injected environment."""
    return EnvironmentTokenProvider(
        environ={"HOMEBREW_GITHUB_API_TOKEN": TOKEN}
    )


class TestDownloadReleaseAsset:
    """End-to-end tests against a mocked aiohttp session."""

    @pytest.mark.asyncio
    async def test_downloads_private_asset(
        self,
        mock_session: MagicMock,
        token_provider: EnvironmentTokenProvider,
        cache_paths: tuple[Path, Path],
    ) -> None:
        """Test lookup, authenticated download and move into the cache."""
        temp_path, final_path = cache_paths
        mock_session.get.side_effect = [
            make_response(body=RELEASE_BODY),
            make_response(chunks=[b"BINARY", b"DATA"]),
        ]

        result = await download_release_asset(
            RELEASE_URL,
            final_path,
            token_provider=token_provider,
            session=mock_session,
            temp_path=temp_path,
        )

        assert result == final_path
        assert final_path.read_bytes() == b"BINARYDATA"
        assert not temp_path.exists()

        lookup_call, download_call = mock_session.get.call_args_list
        assert lookup_call.args[0].endswith(
            "/repos/acme/tool/releases/tags/v1.2.0"
        )
        assert download_call.args[0] == (
            "https://api.github.com/repos/acme/tool/releases/assets/555"
        )
        headers = download_call.kwargs["headers"]
        assert headers["Authorization"] == "token tok_abc"
        assert headers["Accept"] == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_default_temp_path(
        self,
        token_provider: EnvironmentTokenProvider,
        tmp_path: Path,
    ) -> None:
        """Test the in-progress file defaults to ``<final>.incomplete``."""
        transfer = FakeTransfer()
        final_path = tmp_path / "tool-linux.tar.gz"

        await download_release_asset(
            RELEASE_URL,
            final_path,
            token_provider=token_provider,
            transfer=transfer,
        )

        dest, timeout = transfer.transfer_calls[0]
        assert dest == tmp_path / "tool-linux.tar.gz.incomplete"
        assert timeout is None

    @pytest.mark.asyncio
    async def test_settings_timeout_used_by_default(
        self,
        token_provider: EnvironmentTokenProvider,
        cache_paths: tuple[Path, Path],
    ) -> None:
        """Test the configured download timeout applies when none is given."""
        temp_path, final_path = cache_paths
        transfer = FakeTransfer()

        await download_release_asset(
            RELEASE_URL,
            final_path,
            token_provider=token_provider,
            settings=FetchSettings(download_timeout_seconds=90),
            transfer=transfer,
            temp_path=temp_path,
        )

        assert transfer.transfer_calls[0][1] == 90

    @pytest.mark.asyncio
    async def test_missing_token_makes_no_request(
        self, mock_session: MagicMock, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test a missing credential fails before any network call."""
        temp_path, final_path = cache_paths

        with pytest.raises(MissingCredentialError) as exc_info:
            await download_release_asset(
                RELEASE_URL,
                final_path,
                token_provider=EnvironmentTokenProvider(environ={}),
                session=mock_session,
                temp_path=temp_path,
            )

        assert "HOMEBREW_GITHUB_API_TOKEN" in str(exc_info.value)
        mock_session.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_url_makes_no_request(
        self,
        mock_session: MagicMock,
        token_provider: EnvironmentTokenProvider,
        tmp_path: Path,
    ) -> None:
        """Test a malformed URL fails before any network call."""
        with pytest.raises(InvalidUrlPatternError):
            await download_release_asset(
                "https://example.com/not-a-release",
                tmp_path / "out",
                token_provider=token_provider,
                session=mock_session,
            )

        mock_session.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_slow_transfer_times_out(
        self,
        mock_session: MagicMock,
        token_provider: EnvironmentTokenProvider,
        cache_paths: tuple[Path, Path],
    ) -> None:
        """Test the timeout aborts the transfer and removes the partial."""
        temp_path, final_path = cache_paths
        mock_session.get.side_effect = [
            make_response(body=RELEASE_BODY),
            make_response(chunks=[b"a", b"b", b"c"], delay=0.2),
        ]

        with pytest.raises(DownloadFailedError) as exc_info:
            await download_release_asset(
                RELEASE_URL,
                final_path,
                token_provider=token_provider,
                session=mock_session,
                temp_path=temp_path,
                timeout=0.05,
            )

        error = exc_info.value
        assert error.transport is True
        assert error.timed_out is True
        assert "from private release v1.2.0" in str(error)
        assert not temp_path.exists()
        assert not final_path.exists()

    @pytest.mark.asyncio
    async def test_release_lookup_failure(
        self,
        mock_session: MagicMock,
        token_provider: EnvironmentTokenProvider,
        cache_paths: tuple[Path, Path],
    ) -> None:
        """Test lookup failures propagate without downloading."""
        temp_path, final_path = cache_paths
        mock_session.get.return_value = make_response(status=404)

        with pytest.raises(ReleaseLookupError):
            await download_release_asset(
                RELEASE_URL,
                final_path,
                token_provider=token_provider,
                session=mock_session,
                temp_path=temp_path,
            )

        assert mock_session.get.call_count == 1
        assert not final_path.exists()


class TestReleaseAssetFetcher:
    """Tests for ReleaseAssetFetcher with an in-memory transfer."""

    @pytest.mark.asyncio
    async def test_success_ends_in_done(
        self, target: DownloadTarget, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test a successful attempt reaches DONE and registers the token."""
        temp_path, final_path = cache_paths
        fetcher = ReleaseAssetFetcher(FakeTransfer())

        path = await fetcher.fetch(target, temp_path, final_path, timeout=5)

        assert path == final_path
        assert fetcher.state is FetchState.DONE
        assert TOKEN in get_state().secrets

    @pytest.mark.asyncio
    async def test_short_token_masked(
        self, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test a token below the usual secret length is still masked."""
        temp_path, final_path = cache_paths
        target = DownloadTarget(
            "acme", "tool", "v1.2.0", "tool-linux.tar.gz", access_token="Q7"
        )
        transfer = FakeTransfer(transfer_error=OSError("write failed: Q7"))

        with pytest.raises(DownloadFailedError) as exc_info:
            await ReleaseAssetFetcher(transfer).fetch(
                target, temp_path, final_path
            )

        assert "Q7" not in str(exc_info.value)
        assert "Q7" in get_state().secrets

    @pytest.mark.asyncio
    async def test_rename_runs_with_interrupts_deferred(
        self, target: DownloadTarget, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test the move into the cache happens inside ignore_interrupts."""
        temp_path, final_path = cache_paths
        events: list[tuple[str, bool]] = []

        @contextmanager
        def recording() -> Iterator[None]:
            events.append(("enter", final_path.exists()))
            yield
            events.append(("exit", final_path.exists()))

        with patch(
            "gh_private_release.core.fetcher.ignore_interrupts",
            side_effect=recording,
        ):
            await ReleaseAssetFetcher(FakeTransfer()).fetch(
                target, temp_path, final_path
            )

        assert events == [("enter", False), ("exit", True)]

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(
        self, target: DownloadTarget, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test transport errors become DownloadFailedError."""
        temp_path, final_path = cache_paths
        cause = aiohttp.ClientPayloadError("connection reset")
        fetcher = ReleaseAssetFetcher(FakeTransfer(transfer_error=cause))

        with pytest.raises(DownloadFailedError) as exc_info:
            await fetcher.fetch(target, temp_path, final_path)

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert fetcher.state is FetchState.FAILED
        assert not temp_path.exists()

    @pytest.mark.asyncio
    async def test_cancellation_removes_partial(
        self, target: DownloadTarget, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test cancellation propagates and leaves no partial file."""
        temp_path, final_path = cache_paths
        fetcher = ReleaseAssetFetcher(
            FakeTransfer(transfer_error=asyncio.CancelledError())
        )

        with pytest.raises(asyncio.CancelledError):
            await fetcher.fetch(target, temp_path, final_path)

        assert fetcher.state is FetchState.FAILED
        assert not temp_path.exists()
        assert not final_path.exists()

    @pytest.mark.asyncio
    async def test_finalize_error_is_not_transport(
        self, target: DownloadTarget, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test a failed move is reported as a finalization failure."""
        temp_path, final_path = cache_paths
        final_path.mkdir(parents=True)

        result = await ReleaseAssetFetcher(FakeTransfer()).try_fetch(
            target, temp_path, final_path
        )

        assert not result.ok
        assert isinstance(result.error, DownloadFailedError)
        assert result.error.transport is False
        assert "into cache from v1.2.0" in str(result.error)
        assert result.failed_in is FetchState.FINALIZING
        assert not temp_path.exists()

    @pytest.mark.asyncio
    async def test_try_fetch_success(
        self, target: DownloadTarget, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test try_fetch returns the path on success."""
        temp_path, final_path = cache_paths

        result = await ReleaseAssetFetcher(FakeTransfer()).try_fetch(
            target, temp_path, final_path
        )

        assert result.ok
        assert result.path == final_path
        assert result.state is FetchState.DONE
        assert result.kind is None

    @pytest.mark.asyncio
    async def test_try_fetch_asset_not_found(
        self, target: DownloadTarget, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test try_fetch reports the kind and failing state."""
        temp_path, final_path = cache_paths
        transfer = FakeTransfer(
            resolve_error=AssetNotFoundError("tool-linux.tar.gz", "v1.2.0")
        )

        result = await ReleaseAssetFetcher(transfer).try_fetch(
            target, temp_path, final_path
        )

        assert result.kind is FetchErrorKind.ASSET_NOT_FOUND
        assert result.failed_in is FetchState.RESOLVING_ASSET
        assert result.state is FetchState.FAILED
        assert transfer.transfer_calls == []

    @pytest.mark.asyncio
    async def test_try_fetch_download_failure(
        self, target: DownloadTarget, cache_paths: tuple[Path, Path]
    ) -> None:
        """Test transport failures are reported from DOWNLOADING."""
        temp_path, final_path = cache_paths
        transfer = FakeTransfer(transfer_error=OSError("disk full"))

        result = await ReleaseAssetFetcher(transfer).try_fetch(
            target, temp_path, final_path
        )

        assert result.kind is FetchErrorKind.DOWNLOAD_FAILED
        assert result.failed_in is FetchState.DOWNLOADING


def test_fetch_release_asset_blocking(tmp_path: Path) -> None:
    """Test the blocking wrapper runs the async workflow."""
    final_path = tmp_path / "tool.tar.gz"
    provider = MagicMock()

    with patch(
        "gh_private_release.core.fetcher.download_release_asset",
        new=AsyncMock(return_value=final_path),
    ) as mock_download:
        result = fetch_release_asset(
            RELEASE_URL, final_path, token_provider=provider, timeout=10
        )

    assert result == final_path
    mock_download.assert_awaited_once()
    assert mock_download.call_args.kwargs["timeout"] == 10
    assert mock_download.call_args.kwargs["token_provider"] is provider
