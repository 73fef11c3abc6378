"""Top-level package for gh-private-release.

Downloads release assets from private GitHub repositories through the
authenticated REST API.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gh-private-release")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
