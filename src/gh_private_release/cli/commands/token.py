"""Token command handler.

Manages the token kept in the system keyring. Input is read with getpass
so the token is never echoed or stored in shell history.
"""

import getpass
from argparse import Namespace

from keyring.errors import KeyringError

from gh_private_release.config import FetchSettings
from gh_private_release.constants import (
    APP_NAME,
    EXIT_FAILURE,
    EXIT_OK,
    TOKEN_SOURCE_KEYRING,
)
from gh_private_release.core.protocols import TokenProvider
from gh_private_release.core.token import KeyringTokenProvider
from gh_private_release.exceptions import MissingCredentialError
from gh_private_release.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class TokenHandler(BaseCommandHandler):
    """Handler for token command operations."""

    def __init__(
        self,
        settings: FetchSettings,
        token_provider: TokenProvider,
        keyring_store: KeyringTokenProvider | None = None,
    ) -> None:
        """Initialize handler with shared dependencies.

        Args:
            settings: Loaded settings
            token_provider: Provider used by ``--status``
            keyring_store: Keyring accessor for ``--save``/``--remove``

        """
        super().__init__(settings, token_provider)
        self.keyring_store = keyring_store or KeyringTokenProvider()

    async def execute(self, args: Namespace) -> int:
        """Execute the token command."""
        if args.save:
            return self._save_token()
        if args.remove:
            return self._remove_token()
        return self._show_status()

    def _save_token(self) -> int:
        try:
            token = getpass.getpass(
                prompt="Enter your GitHub token (input hidden): "
            ).strip()
            confirm_token = getpass.getpass(
                prompt="Confirm your GitHub token: "
            ).strip()
        except EOFError:
            logger.error("Token input aborted")
            return EXIT_FAILURE

        if not token:
            logger.error("Token cannot be empty")
            return EXIT_FAILURE
        if token != confirm_token:
            logger.error("Token confirmation does not match")
            return EXIT_FAILURE

        try:
            self.keyring_store.set(token)
        except KeyringError as e:
            logger.error(
                "Failed to save token to keyring: %s", type(e).__name__
            )
            return EXIT_FAILURE

        logger.info("GitHub token saved to keyring.")
        if self.settings.token_source != TOKEN_SOURCE_KEYRING:
            logger.info(
                "Set 'token_source = keyring' in settings.conf to use it."
            )
        return EXIT_OK

    def _remove_token(self) -> int:
        try:
            removed = self.keyring_store.delete()
        except KeyringError as e:
            logger.error(
                "Failed to remove token from keyring: %s", type(e).__name__
            )
            return EXIT_FAILURE

        if removed:
            logger.info("GitHub token removed from keyring.")
        else:
            logger.warning("No GitHub token found in keyring.")
            logger.info("Tip: Use '%s token --save' to save one.", APP_NAME)
        return EXIT_OK

    def _show_status(self) -> int:
        try:
            self.token_provider.resolve_token()
        except MissingCredentialError as e:
            print(f"token_source: {self.settings.token_source}")
            print("token: missing")
            logger.info("%s", e.message)
            return EXIT_FAILURE

        print(f"token_source: {self.settings.token_source}")
        print("token: available")
        return EXIT_OK
