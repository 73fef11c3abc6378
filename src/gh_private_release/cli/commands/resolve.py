"""Resolve command handler.

Prints the coordinates encoded in a release URL as ``key: value`` lines on
stdout. With ``--asset-id`` the release is looked up through the API and a
missing asset is reported as a line instead of a failure.
"""

from argparse import Namespace

from gh_private_release.constants import EXIT_ASSET_NOT_FOUND, EXIT_OK
from gh_private_release.core.github_client import GitHubReleaseTransfer
from gh_private_release.core.http_session import create_http_session
from gh_private_release.core.url import parse_release_url
from gh_private_release.domain import DownloadTarget
from gh_private_release.exceptions import AssetNotFoundError
from gh_private_release.logger import register_secret

from .base import BaseCommandHandler


class ResolveHandler(BaseCommandHandler):
    """Show what a release URL points at."""

    async def execute(self, args: Namespace) -> int:
        """Print owner, repo, tag, filename and optionally the asset id."""
        location = parse_release_url(args.url, host=self.settings.github_host)
        print(f"owner: {location.owner}")
        print(f"repo: {location.repo}")
        print(f"tag: {location.tag}")
        print(f"filename: {location.filename}")

        if not args.asset_id:
            return EXIT_OK

        target = DownloadTarget.from_location(
            location, self.token_provider.resolve_token()
        )
        register_secret(target.access_token, min_length=1)
        async with create_http_session(self.settings) as session:
            transfer = GitHubReleaseTransfer(
                session,
                api_url=self.settings.resolved_api_url,
                lookup_timeout=self.settings.lookup_timeout,
            )
            try:
                asset = await transfer.resolve_asset(target)
            except AssetNotFoundError:
                print("asset_id: not found")
                return EXIT_ASSET_NOT_FOUND

        print(f"asset_id: {asset.id}")
        print(f"size: {asset.size}")
        print(f"content_type: {asset.content_type or 'unknown'}")
        return EXIT_OK
