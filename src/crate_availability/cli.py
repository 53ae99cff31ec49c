"""
Command line tool to check crate name availability on crates.io.

Usage:
    crate-availability serde
    crate-availability my-new-crate --timeout 2
    crate-availability my-new-crate --json
"""

import argparse
import json
import logging
import sys

from . import config
from .checker import Availability, CheckError, check_crate
from .display import color_formatter_for, format_result

EXIT_CODES = {
    Availability.AVAILABLE: 0,
    Availability.UNAVAILABLE: 1,
    Availability.UNKNOWN: 2,
}
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crate-availability",
        description="Check crate name availability on crates.io",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s serde
    %(prog)s my-new-crate --timeout 2
    %(prog)s my-new-crate --json

Exit status:
    0 available, 1 unavailable, 2 unknown or error
        """
    )
    parser.add_argument(
        "name",
        help="Crate name to check"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=f"Request timeout in seconds (default: {config.DEFAULT_TIMEOUT:g})"
    )
    parser.add_argument(
        "--registry",
        type=str,
        default=None,
        metavar="URL",
        help=f"Registry base URL (default: {config.DEFAULT_REGISTRY_URL})"
    )
    parser.add_argument(
        "--color",
        choices=config.COLOR_MODES,
        default=None,
        help="Colorize output (default: auto)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log request details to stderr"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if not args.verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    if not args.name:
        print("Error: Crate name can't be empty", file=sys.stderr)
        return EXIT_ERROR

    try:
        result = check_crate(args.name, args.timeout, registry_url=args.registry)
    except CheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        formatter = color_formatter_for(sys.stdout, args.color or config.get_color_mode())
        print(format_result(result, formatter))

    return EXIT_CODES[result.availability]
