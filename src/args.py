"""Argument parsing functionality for cruby."""

import argparse
from constants import Constants

COMMANDS = {
    "version": "Print the packaged (extended) version, e.g. 2.5.500",
    "ruby-version": "Print the upstream Ruby version, e.g. 2.5.5",
    "source": "Print the selected archive URL, sha256 and versions",
    "list": "List all configured archives, newest first",
}


def _pod_version(text):
    """argparse type for --pod-version: a non-negative integer."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid pod version: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"pod version must be non-negative: {value}")
    return value


def _add_common_options(parser):
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--ruby",
                        dest="RUBY",
                        help="Ruby source label to select, i.e: 2.5 (default: %s)" % Constants.DEFAULT_RUBY_LABEL,
                        action="store",
                        type=str)
    parser.add_argument("--pod-version",
                        dest="POD_VERSION",
                        help="Packaging patch offset added to the upstream patch number",
                        action="store",
                        type=_pod_version)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json)",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS,
                        default="text")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="cruby",
        description="cruby - Ruby source archive versions for packaging",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="command")
    subparsers.required = True
    for name, help_text in COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text, description=help_text)
        _add_common_options(sub)

    return parser.parse_args(argv)
