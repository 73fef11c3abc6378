"""Configuration management - INI settings and path utilities.

This package provides:
- SettingsManager: INI configuration management (from settings.py)
- FetchSettings: Typed, immutable view of the loaded settings
- Paths: Path constants and utilities (from paths.py)
"""

from gh_private_release.config.paths import Paths
from gh_private_release.config.settings import FetchSettings, SettingsManager

__all__ = [
    "FetchSettings",
    "Paths",
    "SettingsManager",
]
