"""Constants shared across gh-private-release modules."""

# Application identity
APP_NAME = "gh-private-release"
LOGGER_ROOT_NAME = "gh_private_release"
CONFIG_DIR_NAME = "gh-private-release"
CONFIG_FILE_NAME = "settings.conf"
LOG_FILE_NAME = "gh-private-release.log"
KEYRING_SERVICE = "gh-private-release-github-token"
KEYRING_USERNAME = "token"

# Environment variables
ENV_CONFIG_DIR = "GH_PRIVATE_RELEASE_CONFIG_DIR"
ENV_LOG_DIR = "GH_PRIVATE_RELEASE_LOG_DIR"
DEFAULT_TOKEN_ENV_VAR = "HOMEBREW_GITHUB_API_TOKEN"

# GitHub endpoints
DEFAULT_GITHUB_HOST = "github.com"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
ACCEPT_JSON = "application/vnd.github+json"
ACCEPT_OCTET_STREAM = "application/octet-stream"
HTTP_NOT_FOUND = 404

# Transfer
CHUNK_SIZE = 65536
TEMP_SUFFIX = ".incomplete"

# Config sections and keys
GLOBAL_CONFIG_VERSION = "1.0.0"
SECTION_DEFAULT = "DEFAULT"
SECTION_NETWORK = "network"
SECTION_GITHUB = "github"
KEY_CONFIG_VERSION = "config_version"
KEY_LOG_LEVEL = "log_level"
KEY_CONSOLE_LOG_LEVEL = "console_log_level"
KEY_TOKEN_SOURCE = "token_source"
KEY_TOKEN_ENV_VAR = "token_env_var"
KEY_LOOKUP_TIMEOUT = "lookup_timeout_seconds"
KEY_DOWNLOAD_TIMEOUT = "download_timeout_seconds"
KEY_HOST = "host"
KEY_API_URL = "api_url"

TOKEN_SOURCE_ENV = "env"
TOKEN_SOURCE_KEYRING = "keyring"
TOKEN_SOURCES = (TOKEN_SOURCE_ENV, TOKEN_SOURCE_KEYRING)

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL = "WARNING"
DEFAULT_LOOKUP_TIMEOUT_SECONDS = 30
DEFAULT_DOWNLOAD_TIMEOUT_SECONDS = 0
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Logging
LOG_ROTATION_THRESHOLD_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3
LOG_CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_CONSOLE_DATE_FORMAT = "%H:%M:%S"
LOG_FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(funcName)s:%(lineno)d] - %(message)s"
)
LOG_FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
}
REDACTED = "******"

# CLI exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_URL = 2
EXIT_MISSING_CREDENTIAL = 3
EXIT_RELEASE_LOOKUP = 4
EXIT_ASSET_NOT_FOUND = 5
EXIT_DOWNLOAD_FAILED = 6
EXIT_INTERRUPTED = 130
