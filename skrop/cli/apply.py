"""skrop CLI.

Applies a filter chain to an image file, the same way a response body is
transformed on a route.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from skrop.application.pipeline import handle_image_response, run_stages
from skrop.core.errors import FilterCreationError, FilterExecutionError
from skrop.filters.registry import DEFAULT_REGISTRY
from skrop.infrastructure.native.pillow_engine import PillowEngine
from skrop.kernel.system.config import APP_CONFIG
from skrop.kernel.system.logging import setup_logging

EXIT_OK = 0
EXIT_EXECUTION_ERROR = 1
EXIT_CHAIN_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skrop",
        description="skrop -- apply an image filter chain to a file",
        epilog='Example: skrop --filters \'crop(800, 600) -> overlayImage("logo.png", 0.5, SE)\' in.jpg out.jpg',
    )

    parser.add_argument("input", metavar="INPUT", help="Source image file")
    parser.add_argument(
        "output",
        metavar="OUTPUT",
        nargs="?",
        help="Where to write the transformed image (required unless --dry-run)",
    )
    parser.add_argument(
        "--filters",
        required=True,
        help=f"Filter chain, filters: {', '.join(DEFAULT_REGISTRY.names())}",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the composed stages as JSON instead of writing the output",
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=None,
        help=f"JPEG output quality (default: {APP_CONFIG.jpeg_quality})",
    )
    parser.add_argument(
        "--log-level",
        default=APP_CONFIG.log_level,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help="Logging verbosity (default: %(default)s)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.dry_run and not args.output:
        parser.error("OUTPUT is required unless --dry-run is given")

    logger = setup_logging(getattr(logging, args.log_level))

    try:
        operations = DEFAULT_REGISTRY.compile_chain(args.filters)
    except FilterCreationError as e:
        print(f"Invalid filter chain: {e}", file=sys.stderr)
        return EXIT_CHAIN_ERROR

    try:
        with open(args.input, "rb") as f:
            body = f.read()
    except OSError as e:
        print(f"Cannot read {args.input}: {e}", file=sys.stderr)
        return EXIT_EXECUTION_ERROR

    engine = PillowEngine(jpeg_quality=args.quality)

    try:
        if args.dry_run:
            stages, _ = run_stages(operations, body, engine)
            print(json.dumps([s.describe() for s in stages], indent=2))
            return EXIT_OK

        result = handle_image_response(operations, body, engine)
    except FilterExecutionError as e:
        print(f"Processing failed: {e}", file=sys.stderr)
        return EXIT_EXECUTION_ERROR

    with open(args.output, "wb") as f:
        f.write(result)

    logger.info(f"Wrote {args.output} ({len(result)} bytes)")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
