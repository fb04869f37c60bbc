"""Argument parsing functionality for wilf."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog=Constants.PROG,
        description=(
            "wilf - check the packages of a Pipfile for available updates"
        ),
        epilog=(
            "Reporters: " + ", ".join(Constants.SUPPORTED_REPORTERS)
            + f", {Constants.JUNIT_FILE_PREFIX}<path> (JUnit report written to a file)"
        ),
        add_help=True,
    )

    parser.add_argument("pipfile",
                        metavar="PIPFILE",
                        help="Path to the Pipfile to check",
                        type=str)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (TOML, YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-r", "--reporter",
                        dest="REPORTERS",
                        help=f"Reporter to use, can be repeated (default: {Constants.DEFAULT_REPORTER})",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("-v", "--verbose",
                        dest="VERBOSE",
                        help="Enable debug logging",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--version",
                        action="version",
                        version=f"%(prog)s {Constants.VERSION}")

    return parser.parse_args(argv)
