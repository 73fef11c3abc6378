"""Settings manager for the INI configuration file."""

import configparser
import logging
from dataclasses import dataclass
from pathlib import Path

from gh_private_release.config.paths import Paths
from gh_private_release.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    DEFAULT_GITHUB_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    DEFAULT_TOKEN_ENV_VAR,
    GLOBAL_CONFIG_VERSION,
    KEY_API_URL,
    KEY_CONFIG_VERSION,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_DOWNLOAD_TIMEOUT,
    KEY_HOST,
    KEY_LOG_LEVEL,
    KEY_LOOKUP_TIMEOUT,
    KEY_TOKEN_ENV_VAR,
    KEY_TOKEN_SOURCE,
    SECTION_DEFAULT,
    SECTION_GITHUB,
    SECTION_NETWORK,
    TOKEN_SOURCE_ENV,
    TOKEN_SOURCES,
    VALID_LOG_LEVELS,
)

# Plain stdlib logger: the logger package loads its levels from here
logger = logging.getLogger(__name__)

RawConfigDict = dict[str, str | dict[str, str]]

FILE_HEADER = """\
# gh-private-release settings
#
# Download release assets from private GitHub repositories.
# Lines starting with '#' are comments.
"""

KEY_COMMENTS: dict[str, dict[str, str]] = {
    SECTION_DEFAULT: {
        KEY_LOG_LEVEL: "# DEBUG, INFO, WARNING, ERROR, CRITICAL",
        KEY_CONSOLE_LOG_LEVEL: "# level for terminal output",
        KEY_TOKEN_SOURCE: "# env or keyring",
        KEY_TOKEN_ENV_VAR: "# variable holding the token",
    },
    SECTION_NETWORK: {
        KEY_LOOKUP_TIMEOUT: "# release lookup bound",
        KEY_DOWNLOAD_TIMEOUT: "# 0 = unbounded",
    },
    SECTION_GITHUB: {
        KEY_API_URL: "# empty = derived from host",
    },
}


@dataclass(slots=True, frozen=True)
class FetchSettings:
    """Typed view of ``settings.conf``.

    Attributes:
        log_level: File log level
        console_log_level: Console log level
        token_source: ``env`` or ``keyring``
        token_env_var: Environment variable holding the token
        lookup_timeout_seconds: Bound for the release lookup request
        download_timeout_seconds: Default transfer bound, 0 for none
        github_host: Web host of release download URLs
        api_url: REST API base URL, empty to derive it from the host

    """

    log_level: str = DEFAULT_LOG_LEVEL
    console_log_level: str = DEFAULT_CONSOLE_LOG_LEVEL
    token_source: str = TOKEN_SOURCE_ENV
    token_env_var: str = DEFAULT_TOKEN_ENV_VAR
    lookup_timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS
    download_timeout_seconds: float = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS
    github_host: str = DEFAULT_GITHUB_HOST
    api_url: str = ""

    @property
    def download_timeout(self) -> float | None:
        """Return the default download timeout, None when unbounded."""
        return self.download_timeout_seconds or None

    @property
    def lookup_timeout(self) -> float | None:
        """Return the lookup timeout, None when unbounded."""
        return self.lookup_timeout_seconds or None

    @property
    def resolved_api_url(self) -> str:
        """Return the API base URL, deriving it from the host if unset."""
        # Late import: core.url imports exceptions which import constants
        from gh_private_release.core.url import (  # noqa: PLC0415
            default_api_url,
        )

        return self.api_url.rstrip("/") or default_api_url(self.github_host)


class SettingsManager:
    """Manages the INI settings file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize settings manager.

        Args:
            config_dir: Configuration directory path
                (defaults to Paths.config_dir())

        """
        self.config_dir = config_dir or Paths.config_dir()
        self.settings_file = Paths.settings_file(self.config_dir)

    @staticmethod
    def get_default_config() -> RawConfigDict:
        """Get default configuration values.

        Returns:
            Default configuration dictionary

        """
        return {
            KEY_CONFIG_VERSION: GLOBAL_CONFIG_VERSION,
            KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
            KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            KEY_TOKEN_SOURCE: TOKEN_SOURCE_ENV,
            KEY_TOKEN_ENV_VAR: DEFAULT_TOKEN_ENV_VAR,
            SECTION_NETWORK: {
                KEY_LOOKUP_TIMEOUT: str(DEFAULT_LOOKUP_TIMEOUT_SECONDS),
                KEY_DOWNLOAD_TIMEOUT: str(DEFAULT_DOWNLOAD_TIMEOUT_SECONDS),
            },
            SECTION_GITHUB: {
                KEY_HOST: DEFAULT_GITHUB_HOST,
                KEY_API_URL: "",
            },
        }

    @staticmethod
    def _create_parser(defaults: RawConfigDict) -> configparser.ConfigParser:
        """Create ConfigParser populated with defaults."""
        config = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )

        flat_defaults = {
            key: str(value)
            for key, value in defaults.items()
            if not isinstance(value, dict)
        }
        config.read_dict({SECTION_DEFAULT: flat_defaults})

        for key, value in defaults.items():
            if isinstance(value, dict):
                config.add_section(key)
                for subkey, subvalue in value.items():
                    config.set(key, subkey, str(subvalue))

        return config

    def load(self) -> FetchSettings:
        """Load settings, creating the file with defaults if missing.

        Returns:
            Loaded settings

        """
        defaults = self.get_default_config()
        config = self._create_parser(defaults)

        if self.settings_file.exists():
            try:
                config.read(self.settings_file, encoding="utf-8")
            except configparser.Error:
                logger.warning(
                    "Could not parse %s, using default settings",
                    self.settings_file,
                )
                config = self._create_parser(defaults)
        else:
            self.save(config)

        return self._convert(config)

    def save(self, config: configparser.ConfigParser) -> None:
        """Write ``config`` to the settings file with comments.

        Args:
            config: Parsed configuration to save

        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with self.settings_file.open("w", encoding="utf-8") as f:
            f.write(FILE_HEADER)
            sections = [SECTION_DEFAULT, *config.sections()]
            for section in sections:
                f.write(f"\n[{section}]\n")
                items = (
                    config.defaults().items()
                    if section == SECTION_DEFAULT
                    else (
                        (key, value)
                        for key, value in config.items(section, raw=True)
                        if not config.has_option(SECTION_DEFAULT, key)
                    )
                )
                for key, value in items:
                    comment = KEY_COMMENTS.get(section, {}).get(key, "")
                    line = f"{key} = {value}"
                    f.write(f"{line}  {comment}\n" if comment else f"{line}\n")

    def _convert(self, config: configparser.ConfigParser) -> FetchSettings:
        """Convert parsed INI into validated ``FetchSettings``."""
        defaults = FetchSettings()

        def get_level(key: str, default: str) -> str:
            value = config.get(SECTION_DEFAULT, key, fallback=default)
            value = value.strip().upper()
            if value not in VALID_LOG_LEVELS:
                logger.warning("Invalid %s '%s', using %s", key, value, default)
                return default
            return value

        def get_seconds(key: str, default: float) -> float:
            raw = config.get(SECTION_NETWORK, key, fallback=str(default))
            try:
                seconds = float(raw)
            except ValueError:
                seconds = -1.0
            if seconds < 0:
                logger.warning("Invalid %s '%s', using %s", key, raw, default)
                return default
            return seconds

        token_source = (
            config.get(SECTION_DEFAULT, KEY_TOKEN_SOURCE, fallback="")
            .strip()
            .lower()
        )
        if token_source not in TOKEN_SOURCES:
            logger.warning(
                "Invalid token_source '%s', using %s",
                token_source,
                defaults.token_source,
            )
            token_source = defaults.token_source

        file_version = config.get(
            SECTION_DEFAULT, KEY_CONFIG_VERSION, fallback=""
        ).strip()
        if file_version != GLOBAL_CONFIG_VERSION:
            logger.warning(
                "%s has config_version '%s', expected %s; "
                "unknown keys are ignored and missing keys use defaults",
                self.settings_file,
                file_version,
                GLOBAL_CONFIG_VERSION,
            )

        return FetchSettings(
            log_level=get_level(KEY_LOG_LEVEL, defaults.log_level),
            console_log_level=get_level(
                KEY_CONSOLE_LOG_LEVEL, defaults.console_log_level
            ),
            token_source=token_source,
            token_env_var=config.get(
                SECTION_DEFAULT, KEY_TOKEN_ENV_VAR, fallback=""
            ).strip()
            or defaults.token_env_var,
            lookup_timeout_seconds=get_seconds(
                KEY_LOOKUP_TIMEOUT, defaults.lookup_timeout_seconds
            ),
            download_timeout_seconds=get_seconds(
                KEY_DOWNLOAD_TIMEOUT, defaults.download_timeout_seconds
            ),
            github_host=config.get(
                SECTION_GITHUB, KEY_HOST, fallback=""
            ).strip()
            or defaults.github_host,
            api_url=config.get(SECTION_GITHUB, KEY_API_URL, fallback="").strip(),
        )
