"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    PROCESS_ERROR = 1
    DECODE_ERROR = 3
    SCHEMA_ERROR = 4
    NOT_FOUND = 5


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

    CARGO_BINARY = "cargo"
    ENV_CARGO = "CARGO"
    METADATA_ARGS = ["metadata", "--format-version=1"]
    OUTPUT_FORMATS = [
        OutputFormats.TEXT.value,
        OutputFormats.JSON.value,
    ]
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "CRATEPATH_LOG_LEVEL"
