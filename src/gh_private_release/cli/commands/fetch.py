"""Fetch command handler."""

from argparse import Namespace
from pathlib import Path

from gh_private_release.constants import EXIT_OK
from gh_private_release.core.fetcher import download_release_asset
from gh_private_release.core.url import parse_release_url
from gh_private_release.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class FetchHandler(BaseCommandHandler):
    """Download one private release asset."""

    async def execute(self, args: Namespace) -> int:
        """Download ``args.url`` to ``args.output``."""
        location = parse_release_url(args.url, host=self.settings.github_host)
        output = Path(args.output or Path.cwd() / location.filename)
        output = output.expanduser()

        path = await download_release_asset(
            args.url,
            output,
            token_provider=self.token_provider,
            settings=self.settings,
            timeout=args.timeout,
        )
        logger.info("Saved %s", path)
        return EXIT_OK
