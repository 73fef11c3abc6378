"""CLI runner for gh-private-release.

Routes parsed arguments to command handlers and maps the fetch error family
to process exit codes.
"""

import logging
from argparse import Namespace
from collections.abc import Sequence

from gh_private_release import __version__
from gh_private_release.config import FetchSettings, SettingsManager
from gh_private_release.constants import (
    EXIT_ASSET_NOT_FOUND,
    EXIT_DOWNLOAD_FAILED,
    EXIT_FAILURE,
    EXIT_INVALID_URL,
    EXIT_MISSING_CREDENTIAL,
    EXIT_OK,
    EXIT_RELEASE_LOOKUP,
)
from gh_private_release.core.protocols import TokenProvider
from gh_private_release.core.token import build_token_provider
from gh_private_release.exceptions import FetchErrorKind, ReleaseFetchError
from gh_private_release.logger import (
    get_logger,
    get_state,
    update_logger_from_config,
)
from gh_private_release.logger.config import apply_levels

from .commands import (
    BaseCommandHandler,
    FetchHandler,
    ResolveHandler,
    TokenHandler,
)
from .parser import CLIParser

logger = get_logger(__name__)

EXIT_CODES: dict[FetchErrorKind, int] = {
    FetchErrorKind.INVALID_URL: EXIT_INVALID_URL,
    FetchErrorKind.MISSING_CREDENTIAL: EXIT_MISSING_CREDENTIAL,
    FetchErrorKind.RELEASE_LOOKUP: EXIT_RELEASE_LOOKUP,
    FetchErrorKind.ASSET_NOT_FOUND: EXIT_ASSET_NOT_FOUND,
    FetchErrorKind.DOWNLOAD_FAILED: EXIT_DOWNLOAD_FAILED,
}


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(
        self,
        settings: FetchSettings | None = None,
        token_provider: TokenProvider | None = None,
    ) -> None:
        """Initialize CLI runner with shared dependencies.

        Args:
            settings: Loaded settings; read from settings.conf when None
            token_provider: Token source; selected from settings when None

        """
        self.settings = settings or SettingsManager().load()
        update_logger_from_config(self.settings)
        self.token_provider = token_provider or build_token_provider(
            self.settings
        )
        self.command_handlers: dict[str, BaseCommandHandler] = {
            "fetch": FetchHandler(self.settings, self.token_provider),
            "resolve": ResolveHandler(self.settings, self.token_provider),
            "token": TokenHandler(self.settings, self.token_provider),
        }

    async def run(self, argv: Sequence[str] | None = None) -> int:
        """Parse arguments, run the command and return the exit code."""
        args = CLIParser().parse_args(argv)

        if args.version:
            print(__version__)
            return EXIT_OK

        if not args.command:
            logger.error("No command specified. Use --help.")
            return EXIT_FAILURE

        if args.verbose:
            apply_levels(
                get_state(),
                logging.getLevelName(logging.DEBUG),
                self.settings.log_level,
            )

        return await self._execute_command(args)

    async def _execute_command(self, args: Namespace) -> int:
        handler = self.command_handlers[args.command]
        try:
            return await handler.execute(args)
        except ReleaseFetchError as e:
            # Messages are already redacted; never log the traceback, which
            # could carry request details from the cause chain
            logger.error("%s", e)
            return EXIT_CODES.get(e.kind, EXIT_FAILURE)
