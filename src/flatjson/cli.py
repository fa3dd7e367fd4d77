"""Command-line interface: re-encode a JSON document as a flat map or array."""

import argparse
import logging
import sys
from typing import Sequence

from flatjson.encode import Encoder
from flatjson.errors import FlatJsonError

logger = logging.getLogger(__name__)

EPILOG = """\
examples:
  read from stdin:
    cat file.json | flatjson

  read from a file, output as an array instead of a map:
    flatjson -array file.json
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flatjson",
        description="Re-encode a JSON document into a flat map or array of key-value pairs.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "path", nargs="?", default="-", help="Input JSON file path or '-' for stdin."
    )
    parser.add_argument(
        "-array", "--array", action="store_true", help="Output as an array of pairs."
    )
    parser.add_argument(
        "--indent", type=int, default=None, help="Pretty-print with this many spaces."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug details to stderr."
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="flatjson: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    shape = "array" if args.array else "map"
    encoder = Encoder(sys.stdout, shape, indent=args.indent)
    logger.debug("Flattening %s as a %s", args.path, shape)

    try:
        if args.path == "-":
            encoder.convert(sys.stdin.buffer)
        else:
            with open(args.path, "rb") as f:
                encoder.convert(f)
    except (FlatJsonError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
