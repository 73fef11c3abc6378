"""Tests for the CLI runner and command handlers."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gh_private_release import __version__
from gh_private_release.cli import CLIRunner
from gh_private_release.cli.parser import CLIParser
from gh_private_release.config import FetchSettings
from gh_private_release.core.token import EnvironmentTokenProvider
from gh_private_release.domain import ReleaseAsset
from gh_private_release.exceptions import (
    AssetNotFoundError,
    DownloadFailedError,
    ReleaseLookupError,
)
from tests.conftest import RELEASE_URL, TOKEN

FETCH_DOWNLOAD = "gh_private_release.cli.commands.fetch.download_release_asset"


def make_runner(token: str | None = TOKEN) -> CLIRunner:
    """Build a runner with default settings and an injected environment."""
    environ = {"HOMEBREW_GITHUB_API_TOKEN": token} if token else {}
    return CLIRunner(
        settings=FetchSettings(),
        token_provider=EnvironmentTokenProvider(environ=environ),
    )


@pytest.mark.asyncio
async def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    """Test --version prints the package version."""
    exit_code = await make_runner().run(["--version"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == __version__


@pytest.mark.asyncio
async def test_no_command() -> None:
    """Test running without a command fails."""
    assert await make_runner().run([]) == 1


def test_invalid_timeout_rejected() -> None:
    """Test argparse rejects non-positive timeouts."""
    with pytest.raises(SystemExit) as exc_info:
        CLIParser().parse_args(["fetch", RELEASE_URL, "--timeout", "0"])

    assert exc_info.value.code == 2


class TestResolveCommand:
    """Test the resolve command."""

    @pytest.mark.asyncio
    async def test_prints_coordinates(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test owner, repo, tag and filename are printed without a token."""
        runner = make_runner(token=None)

        exit_code = await runner.run(["resolve", RELEASE_URL])

        assert exit_code == 0
        assert capsys.readouterr().out.splitlines() == [
            "owner: acme",
            "repo: tool",
            "tag: v1.2.0",
            "filename: tool-linux.tar.gz",
        ]

    @pytest.mark.asyncio
    async def test_invalid_url_exit_code(self) -> None:
        """Test an invalid URL exits with code 2."""
        exit_code = await make_runner().run(
            ["resolve", "https://github.com/acme/tool/archive/v1.zip"]
        )

        assert exit_code == 2

    @pytest.mark.asyncio
    @patch("gh_private_release.cli.commands.resolve.GitHubReleaseTransfer")
    @patch("gh_private_release.cli.commands.resolve.create_http_session")
    async def test_asset_id(
        self,
        mock_create_session: MagicMock,
        mock_transfer_cls: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test --asset-id prints the asset id, size and content type."""
        mock_create_session.return_value.__aenter__.return_value = MagicMock()
        mock_transfer_cls.return_value.resolve_asset = AsyncMock(
            return_value=ReleaseAsset(
                id=555,
                name="tool-linux.tar.gz",
                size=10,
                content_type="application/gzip",
            )
        )

        exit_code = await make_runner().run(
            ["resolve", RELEASE_URL, "--asset-id"]
        )

        out = capsys.readouterr().out.splitlines()
        assert exit_code == 0
        assert out[-3:] == [
            "asset_id: 555",
            "size: 10",
            "content_type: application/gzip",
        ]
        target = mock_transfer_cls.return_value.resolve_asset.call_args.args[0]
        assert target.access_token == TOKEN

    @pytest.mark.asyncio
    @patch("gh_private_release.cli.commands.resolve.GitHubReleaseTransfer")
    @patch("gh_private_release.cli.commands.resolve.create_http_session")
    async def test_asset_id_not_found(
        self,
        mock_create_session: MagicMock,
        mock_transfer_cls: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test a missing asset is printed and exits with code 5."""
        mock_create_session.return_value.__aenter__.return_value = MagicMock()
        mock_transfer_cls.return_value.resolve_asset = AsyncMock(
            side_effect=AssetNotFoundError("tool-linux.tar.gz", "v1.2.0")
        )

        exit_code = await make_runner().run(
            ["resolve", RELEASE_URL, "--asset-id"]
        )

        assert exit_code == 5
        assert capsys.readouterr().out.splitlines()[-1] == (
            "asset_id: not found"
        )

    @pytest.mark.asyncio
    async def test_asset_id_requires_token(self) -> None:
        """Test --asset-id without a token exits with code 3."""
        exit_code = await make_runner(token=None).run(
            ["resolve", RELEASE_URL, "--asset-id"]
        )

        assert exit_code == 3


class TestFetchCommand:
    """Test the fetch command."""

    @pytest.mark.asyncio
    async def test_fetch_to_output(self, tmp_path: Path) -> None:
        """Test the download is requested with the given output and bound."""
        output = tmp_path / "tool.tar.gz"
        with patch(
            FETCH_DOWNLOAD, new=AsyncMock(return_value=output)
        ) as mock_download:
            exit_code = await make_runner().run(
                ["fetch", RELEASE_URL, "-o", str(output), "--timeout", "30"]
            )

        assert exit_code == 0
        call = mock_download.call_args
        assert call.args == (RELEASE_URL, output)
        assert call.kwargs["timeout"] == 30.0

    @pytest.mark.asyncio
    async def test_fetch_default_output(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the output defaults to the asset name in the cwd."""
        monkeypatch.chdir(tmp_path)
        with patch(FETCH_DOWNLOAD, new=AsyncMock()) as mock_download:
            await make_runner().run(["fetch", RELEASE_URL])

        assert mock_download.call_args.args[1] == (
            tmp_path / "tool-linux.tar.gz"
        )
        assert mock_download.call_args.kwargs["timeout"] is None

    @pytest.mark.asyncio
    async def test_missing_token_exit_code(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a missing token exits with code 3 and explains the fix."""
        exit_code = await make_runner(token=None).run(
            ["fetch", RELEASE_URL, "-o", str(tmp_path / "out")]
        )

        assert exit_code == 3
        assert "export HOMEBREW_GITHUB_API_TOKEN" in caplog.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ReleaseLookupError("acme", "tool", "v1.2.0", "failed"), 4),
            (AssetNotFoundError("tool-linux.tar.gz", "v1.2.0"), 5),
            (DownloadFailedError("tool-linux.tar.gz", "v1.2.0"), 6),
        ],
    )
    async def test_error_exit_codes(
        self, tmp_path: Path, error: Exception, expected: int
    ) -> None:
        """Test each failure kind maps to its exit code."""
        with patch(FETCH_DOWNLOAD, new=AsyncMock(side_effect=error)):
            exit_code = await make_runner().run(
                ["fetch", RELEASE_URL, "-o", str(tmp_path / "out")]
            )

        assert exit_code == expected


class TestTokenCommand:
    """Test the token command."""

    @pytest.mark.asyncio
    async def test_status_available(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test status reports an available token without printing it."""
        exit_code = await make_runner().run(["token", "--status"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "token: available" in out
        assert TOKEN not in out

    @pytest.mark.asyncio
    async def test_status_missing(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test status reports a missing token."""
        exit_code = await make_runner(token=None).run(["token", "--status"])

        assert exit_code == 1
        assert "token: missing" in capsys.readouterr().out

    @pytest.mark.asyncio
    @patch("gh_private_release.cli.commands.token.getpass.getpass")
    async def test_save(self, mock_getpass: MagicMock) -> None:
        """Test a confirmed token is stored in the keyring."""
        mock_getpass.side_effect = ["new-token", "new-token"]
        runner = make_runner()
        store = MagicMock()
        runner.command_handlers["token"].keyring_store = store

        exit_code = await runner.run(["token", "--save"])

        assert exit_code == 0
        store.set.assert_called_once_with("new-token")

    @pytest.mark.asyncio
    @patch("gh_private_release.cli.commands.token.getpass.getpass")
    async def test_save_mismatch(self, mock_getpass: MagicMock) -> None:
        """Test a mismatched confirmation stores nothing."""
        mock_getpass.side_effect = ["new-token", "other-token"]
        runner = make_runner()
        store = MagicMock()
        runner.command_handlers["token"].keyring_store = store

        exit_code = await runner.run(["token", "--save"])

        assert exit_code == 1
        store.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_absent(self) -> None:
        """Test removing an absent token still succeeds."""
        runner = make_runner()
        store = MagicMock()
        store.delete.return_value = False
        runner.command_handlers["token"].keyring_store = store

        assert await runner.run(["token", "--remove"]) == 0
        store.delete.assert_called_once_with()
