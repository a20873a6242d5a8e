"""cratepath - print the manifest path of a package in a Cargo project.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from args import parse_args
from common.logging_utils import add_file_handler, configure_logging
from constants import ExitCodes, OutputFormats
from crate_metadata.errors import (
    OutputDecodeError,
    PackageNotFoundError,
    ProcessLaunchError,
    ResolverError,
    SchemaParseError,
)
from crate_metadata.source import CargoMetadataSource, FileMetadataSource
from resolver import resolve_package

logger = logging.getLogger(__name__)

_EXIT_CODES = {
    ProcessLaunchError: ExitCodes.PROCESS_ERROR,
    OutputDecodeError: ExitCodes.DECODE_ERROR,
    SchemaParseError: ExitCodes.SCHEMA_ERROR,
    PackageNotFoundError: ExitCodes.NOT_FOUND,
}


def setup_logging(args):
    """Configure logging from CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    level = "ERROR" if getattr(args, "QUIET", False) else getattr(args, "LOG_LEVEL", None)
    configure_logging(level)
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.debug("Logging to file: %s", log_file)


def build_source(args):
    """Pick the metadata source described by the CLI arguments."""
    input_file = getattr(args, "INPUT_FILE", None)
    if input_file:
        if getattr(args, "CARGO", None) or getattr(args, "DIRECTORY", None):
            logger.warning("--input given; ignoring --cargo/--directory.")
        return FileMetadataSource(input_file)
    return CargoMetadataSource(
        cargo=getattr(args, "CARGO", None),
        cwd=getattr(args, "DIRECTORY", None),
    )


def exit_code_for(exc):
    """Map a resolver failure to its ExitCodes member."""
    for exc_type, code in _EXIT_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return ExitCodes.PROCESS_ERROR


def format_result(package, output_format):
    """Render a resolved package for stdout."""
    if output_format == OutputFormats.JSON.value:
        return json.dumps(package.to_dict(), ensure_ascii=False, indent=4)
    return package.manifest_path


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    setup_logging(args)

    source = build_source(args)
    try:
        package = resolve_package(args.PACKAGE, source)
    except ResolverError as e:
        logger.error("%s failed: %s", e.stage, e)
        stderr = getattr(e, "stderr", "")
        if stderr:
            logger.error("cargo stderr:\n%s", stderr)
        sys.exit(exit_code_for(e).value)

    print(format_result(package, args.OUTPUT_FORMAT))
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
