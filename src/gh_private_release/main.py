"""Main CLI entry point for gh-private-release."""

import sys

import uvloop

from gh_private_release.cli import CLIRunner
from gh_private_release.constants import EXIT_FAILURE, EXIT_INTERRUPTED
from gh_private_release.logger import get_logger

logger = get_logger(__name__)


async def async_main() -> int:
    """Run the CLI and return its exit code."""
    logger.debug("CLI started")
    runner = CLIRunner()
    return await runner.run()


def main() -> None:
    """Run the CLI application on uvloop and exit with its status."""
    try:
        exit_code = uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        sys.exit(EXIT_INTERRUPTED)
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(EXIT_FAILURE)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
