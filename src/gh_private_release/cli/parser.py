"""CLI argument parser for gh-private-release."""

import argparse
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path

from gh_private_release.constants import APP_NAME


def _positive_seconds(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        seconds = 0.0
    if seconds <= 0:
        msg = f"expected a positive number of seconds, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return seconds


class CLIParser:
    """Command-line argument parser for gh-private-release."""

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments without the program name; ``sys.argv`` when None

        Returns:
            Parsed arguments namespace

        """
        parser = self._create_main_parser()
        parser.add_argument(
            "--version",
            action="store_true",
            help=f"Show {APP_NAME} version and exit",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug output on the console",
        )
        self._add_subcommands(parser)
        return parser.parse_args(argv)

    @staticmethod
    def _create_main_parser() -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog=APP_NAME,
            description="Download release assets from private GitHub "
            "repositories",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Download an asset (token from HOMEBREW_GITHUB_API_TOKEN)
  %(prog)s fetch https://github.com/acme/tool/releases/download/v1.2.0/tool-linux.tar.gz

  # Choose the destination and bound the transfer
  %(prog)s fetch URL -o ~/cache/tool.tar.gz --timeout 300

  # Show what a URL points at, including the asset id
  %(prog)s resolve URL --asset-id

  # Keyring token management (token_source = keyring in settings.conf)
  %(prog)s token --save
  %(prog)s token --status
  %(prog)s token --remove
            """,
        )

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )
        self._add_fetch_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_token_command(subparsers)

    @staticmethod
    def _add_fetch_command(subparsers: argparse._SubParsersAction) -> None:
        fetch_parser = subparsers.add_parser(
            "fetch", help="Download a private release asset"
        )
        fetch_parser.add_argument("url", help="Release download URL")
        fetch_parser.add_argument(
            "-o",
            "--output",
            type=Path,
            help="Destination file (default: ./<asset filename>)",
        )
        fetch_parser.add_argument(
            "--timeout",
            type=_positive_seconds,
            help="Abort the transfer after this many seconds",
        )

    @staticmethod
    def _add_resolve_command(subparsers: argparse._SubParsersAction) -> None:
        resolve_parser = subparsers.add_parser(
            "resolve", help="Show the owner, repo, tag and filename of a URL"
        )
        resolve_parser.add_argument("url", help="Release download URL")
        resolve_parser.add_argument(
            "--asset-id",
            action="store_true",
            help="Also look up the numeric asset id (needs a token)",
        )

    @staticmethod
    def _add_token_command(subparsers: argparse._SubParsersAction) -> None:
        token_parser = subparsers.add_parser(
            "token", help="Manage the token stored in the system keyring"
        )
        group = token_parser.add_mutually_exclusive_group(required=True)
        group.add_argument(
            "--save", action="store_true", help="Save a token to the keyring"
        )
        group.add_argument(
            "--remove",
            action="store_true",
            help="Remove the token from the keyring",
        )
        group.add_argument(
            "--status",
            action="store_true",
            help="Show whether a token is available",
        )
