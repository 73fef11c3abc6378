"""Base command handler for CLI commands."""

from abc import ABC, abstractmethod
from argparse import Namespace

from gh_private_release.config import FetchSettings
from gh_private_release.core.protocols import TokenProvider


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    CLIRunner is the composition root: it loads settings, builds the token
    provider and injects both, so handlers never read configuration or
    credentials on their own.
    """

    def __init__(
        self, settings: FetchSettings, token_provider: TokenProvider
    ) -> None:
        """Initialize handler with shared dependencies.

        Args:
            settings: Loaded settings
            token_provider: Source of the GitHub access token

        """
        self.settings = settings
        self.token_provider = token_provider

    @abstractmethod
    async def execute(self, args: Namespace) -> int:
        """Execute the command and return its exit code.

        Failures of the fetch workflow are raised as ReleaseFetchError and
        mapped to exit codes by the runner.
        """
