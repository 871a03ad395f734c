"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    VERSION_ERROR = 4
    CONFIG_ERROR = 5


class OutputFormats(Enum):
    """Output formats supported by the CLI.

    Args:
        Enum (string): Output formats supported by the CLI.
    """

    TEXT = "text"
    JSON = "json"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Bumped by maintainers whenever the packaging changes for the same upstream release.
    POD_VERSION = 0
    # Upper bound (exclusive) so the offset never spills into the upstream patch digit.
    POD_VERSION_LIMIT = 100

    GITHUB_URL = "https://github.com/xord/cruby"
    DEFAULT_RUBY_LABEL = "2.5"

    SUPPORTED_FORMATS = [
        OutputFormats.TEXT.value,
        OutputFormats.JSON.value,
    ]
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    DEFAULT_LOG_LEVEL = "WARNING"
    LOG_FORMAT = "[%(levelname)s] %(message)s"

    ENV_LOG_LEVEL = "CRUBY_LOG_LEVEL"
    ENV_RUBY_LABEL = "CRUBY_RUBY_LABEL"
    ENV_POD_VERSION = "CRUBY_POD_VERSION"
    ENV_XDG_CONFIG_HOME = "XDG_CONFIG_HOME"

    CONFIG_FILE_NAMES = ["cruby.yml", "cruby.yaml"]
    CONFIG_DIR_NAME = "cruby"
