"""Main CLI entry point for satpack."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file
from ..config import LinkConfig
from ..exceptions import SatpackError
from ..parser import Parser


def _read(path_text: str) -> str:
    path = Path(path_text)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def main() -> int:
    """Main entry point for the satpack CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="satpack: Schema-Driven Compact Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  satpack --analyze schema.json                      Analyze schema and show field sizes
  satpack --schema schema.json --encode msg.json     Encode a JSON message to hex
  satpack --schema schema.json --decode 00320454     Decode hex bytes to JSON
  satpack --version                                  Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="SCHEMA",
        type=str,
        help="Analyze schema and show field sizes",
    )
    parser.add_argument(
        "--schema",
        metavar="SCHEMA",
        type=str,
        help="Schema file used by --encode/--decode",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--encode",
        metavar="MESSAGE",
        type=str,
        help="Encode a JSON message file and print the bytes as hex",
    )
    action.add_argument(
        "--decode",
        metavar="HEX",
        type=str,
        help="Decode hex bytes and print the message as JSON",
    )
    parser.add_argument(
        "--data-rate",
        type=int,
        default=LinkConfig.data_rate,
        help="Link data rate in bps for --analyze (default: %(default)s)",
    )
    parser.add_argument(
        "--max-frame-size",
        type=int,
        default=LinkConfig.max_frame_size,
        help="Link frame limit in bytes for --analyze (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"satpack {__version__}",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            config = LinkConfig(data_rate=args.data_rate, max_frame_size=args.max_frame_size)
            analyze_file(file_path, config)
            return 0
        except (OSError, ValueError, SatpackError) as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # Handle --encode / --decode
    if args.encode or args.decode:
        if not args.schema:
            print("Error: --schema is required with --encode/--decode", file=sys.stderr)
            return 1

        try:
            codec = Parser.from_text(_read(args.schema))
            if args.encode:
                print(codec.encode_from_text(_read(args.encode)).hex())
            else:
                print(codec.decode_to_text(bytes.fromhex(args.decode)))
            return 0
        except (OSError, ValueError, SatpackError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
