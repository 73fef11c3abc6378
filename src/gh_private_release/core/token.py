"""GitHub access token providers.

Providers are constructed once and passed explicitly to the code that needs
a token, so nothing reads credentials from ambient global state. The
environment provider reads one named variable; the keyring provider reads
the system keyring (SecretService on Linux, Keychain on macOS, Credential
Manager on Windows).
"""

import os
from collections.abc import Mapping

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from gh_private_release.config.settings import FetchSettings
from gh_private_release.constants import (
    APP_NAME,
    DEFAULT_TOKEN_ENV_VAR,
    KEYRING_SERVICE,
    KEYRING_USERNAME,
    TOKEN_SOURCE_KEYRING,
)
from gh_private_release.exceptions import MissingCredentialError
from gh_private_release.logger import get_logger

logger = get_logger(__name__)


class EnvironmentTokenProvider:
    """Read the access token from a single environment variable."""

    def __init__(
        self,
        env_var: str = DEFAULT_TOKEN_ENV_VAR,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            env_var: Name of the variable holding the token.
            environ: Mapping to read from. Defaults to ``os.environ``;
                tests inject a plain dict instead.

        """
        self.env_var = env_var
        self._environ = environ if environ is not None else os.environ

    def resolve_token(self) -> str:
        """Return the token.

        Raises:
            MissingCredentialError: If the variable is unset or blank.

        """
        token = (self._environ.get(self.env_var) or "").strip()
        if not token:
            logger.debug("%s is not set", self.env_var)
            raise MissingCredentialError(self.env_var)
        logger.debug("GitHub token read from %s (value hidden)", self.env_var)
        return token


class KeyringTokenProvider:
    """Read and manage the access token stored in the system keyring."""

    def __init__(
        self,
        service: str = KEYRING_SERVICE,
        username: str = KEYRING_USERNAME,
    ) -> None:
        """Initialize the provider.

        Args:
            service: Keyring service name.
            username: Keyring username.

        """
        self.service = service
        self.username = username

    def _missing(self, reason: str) -> MissingCredentialError:
        return MissingCredentialError(
            hint=(
                f"{reason}. Store a token with: {APP_NAME} token --save"
            )
        )

    def get(self) -> str | None:
        """Return the stored token, or None if absent.

        Raises:
            KeyringError: If the keyring backend cannot be used.

        """
        token = keyring.get_password(self.service, self.username)
        return token.strip() if token and token.strip() else None

    def resolve_token(self) -> str:
        """Return the token.

        Raises:
            MissingCredentialError: If no token is stored or the keyring
                is unavailable.

        """
        try:
            token = self.get()
        except KeyringError as e:
            # Security: Don't log exception details
            logger.debug("Keyring access failed: %s", type(e).__name__)
            raise self._missing("System keyring is unavailable") from None

        if token is None:
            raise self._missing("No GitHub token stored in the keyring")
        logger.debug("GitHub token retrieved from keyring (value hidden)")
        return token

    def set(self, token: str) -> None:
        """Store ``token`` in the keyring."""
        keyring.set_password(self.service, self.username, token)
        logger.debug("Token saved to keyring successfully")

    def delete(self) -> bool:
        """Remove the stored token.

        Returns:
            True if a token was removed, False if none was stored.

        """
        try:
            keyring.delete_password(self.service, self.username)
        except PasswordDeleteError:
            logger.debug("No token found in keyring to delete")
            return False
        logger.debug("Token removed from keyring successfully")
        return True


def build_token_provider(
    settings: FetchSettings,
) -> EnvironmentTokenProvider | KeyringTokenProvider:
    """Create the token provider selected in settings."""
    if settings.token_source == TOKEN_SOURCE_KEYRING:
        return KeyringTokenProvider()
    return EnvironmentTokenProvider(settings.token_env_var)
