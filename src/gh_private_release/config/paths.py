"""Path utilities for gh-private-release configuration.

Paths are resolved at call time so the override environment variables
(used by the test suite) take effect without reloading modules.
"""

import os
from pathlib import Path

from gh_private_release.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    ENV_CONFIG_DIR,
    ENV_LOG_DIR,
    LOG_FILE_NAME,
    TEMP_SUFFIX,
)


class Paths:
    """Application paths and directory structure."""

    @staticmethod
    def config_dir() -> Path:
        """Return the configuration directory.

        ``GH_PRIVATE_RELEASE_CONFIG_DIR`` overrides the default
        ``~/.config/gh-private-release``.
        """
        override = os.getenv(ENV_CONFIG_DIR)
        if override:
            return Path(override).expanduser()
        return Path.home() / ".config" / CONFIG_DIR_NAME

    @classmethod
    def settings_file(cls, config_dir: Path | None = None) -> Path:
        """Return the path of ``settings.conf``."""
        return (config_dir or cls.config_dir()) / CONFIG_FILE_NAME

    @classmethod
    def log_file(cls) -> Path:
        """Return the log file path.

        ``GH_PRIVATE_RELEASE_LOG_DIR`` overrides the default
        ``<config_dir>/logs``.
        """
        override = os.getenv(ENV_LOG_DIR)
        if override:
            return Path(override).expanduser() / LOG_FILE_NAME
        return cls.config_dir() / "logs" / LOG_FILE_NAME

    @staticmethod
    def temporary_path(final_path: Path) -> Path:
        """Return the in-progress download path beside ``final_path``.

        Example:
            >>> Paths.temporary_path(Path("/cache/tool.tar.gz"))
            PosixPath('/cache/tool.tar.gz.incomplete')

        """
        return final_path.with_name(final_path.name + TEMP_SUFFIX)
