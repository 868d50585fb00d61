"""Main CLI entry point for borshkit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from pprint import pformat

from .. import __version__
from ..cli.analyze import analyze_file, load_file
from ..codec.decoder import decode
from ..exceptions import BorshkitError


def main() -> int:
    """Main entry point for the borshkit CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="borshkit: borsh schema analyzer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  borshkit --analyze schemas.py                        Show layout of every registered type
  borshkit --analyze schemas.py --type Instruction     Show a single type
  borshkit --analyze schemas.py --decode Instruction 02
                                                       Decode hex bytes as a type
  borshkit --version                                   Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Python file registering schemas; show their layout",
    )

    parser.add_argument(
        "--type",
        metavar="TYPE_ID",
        type=str,
        help="Restrict --analyze output to one type",
    )

    parser.add_argument(
        "--decode",
        nargs=2,
        metavar=("TYPE_ID", "HEX"),
        help="Decode hex-encoded bytes as TYPE_ID (schemas come from --analyze FILE)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"borshkit {__version__}",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.decode and not args.analyze:
        parser.error("--decode requires --analyze FILE to load schemas")

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            if args.decode:
                type_id, hex_data = args.decode
                load_file(file_path)
                value = decode(type_id, bytes.fromhex(hex_data))
                print(pformat(value.to_dict()))
            else:
                analyze_file(file_path, only=args.type)
            return 0
        except (BorshkitError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
