"""Argument parsing functionality for cratepath."""

import argparse
from constants import Constants, OutputFormats

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="cratepath",
        description=(
            "cratepath - Print the Cargo.toml path of a package in the current Cargo project"
        ),
        add_help=True,
    )

    parser.add_argument("PACKAGE",
                        metavar="PACKAGE",
                        help="Package (crate) name to look up, i.e: serde",
                        type=str)

    parser.add_argument("-d", "--directory",
                        dest="DIRECTORY",
                        help="Run cargo metadata from this directory (default: current directory)",
                        action="store",
                        type=str)
    parser.add_argument("--cargo",
                        dest="CARGO",
                        help=f"Cargo binary to run (default: ${Constants.ENV_CARGO} or '{Constants.CARGO_BINARY}')",
                        action="store",
                        type=str)
    parser.add_argument("-i", "--input",
                        dest="INPUT_FILE",
                        help="Read saved cargo metadata JSON from a file instead of running cargo",
                        action="store",
                        type=str)

    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format: text prints the path, json prints the package record (default: text)",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS,
                        default=OutputFormats.TEXT.value)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only print the result; suppress log output below ERROR.",
                        action="store_true")

    return parser.parse_args(argv)
