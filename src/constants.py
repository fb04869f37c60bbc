"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    USAGE_ERROR = 2
    CONFIG_ERROR = 3
    FILE_ERROR = 4
    PIPFILE_ERROR = 5
    UPDATES_REQUIRED = 6
    RUNTIME_CHECK_ERROR = 7
    DEV_CHECK_ERROR = 8


class Reporters(Enum):
    """Reporters selectable from the command line.

    Args:
        Enum (string): Reporter names.
    """

    MONOCHROME_TABLE = "monochrome-table"
    COLORIZED_TABLE = "colorized-table"
    JUNIT = "junit"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    VERSION = "0.4.0"
    PROG = "wilf"
    REGISTRY_URL_PYPI = "https://pypi.org/pypi/"
    SUPPORTED_REPORTERS = [r.value for r in Reporters]
    DEFAULT_REPORTER = Reporters.COLORIZED_TABLE.value
    JUNIT_FILE_PREFIX = "junit:"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "WILF_LOG_LEVEL"
    ENV_GITLAB_TOKEN = "GITLAB_TOKEN"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300
    DEFAULT_UPDATE_LEVEL = "minor"
