"""Command-line interface for domino-mosaic."""

import argparse
import json
import logging
from pathlib import Path

from .errors import ConvertError
from .pipeline import convert

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Main entry point for converting an image file to a domino mosaic."""
    parser = argparse.ArgumentParser(
        description="Convert an image into a black and white domino mosaic."
    )
    parser.add_argument("input", help="Input image path")
    parser.add_argument("-o", "--output", help="Output image path (default: input_dominoes.jpg)")
    parser.add_argument("-W", "--board-width", type=int, required=True,
                        help="Board width in dominoes (columns)")
    parser.add_argument("-H", "--board-height", type=int, required=True,
                        help="Board height in dominoes (rows)")
    parser.add_argument("--map-json", help="Write the domino map and counts to this JSON file")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print the domino map")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging output")

    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    input_path = Path(args.input)
    if args.output is None:
        output_path = input_path.parent / f"{input_path.stem}_dominoes.jpg"
    else:
        output_path = Path(args.output)

    try:
        raw_bytes = input_path.read_bytes()
    except OSError as e:
        logger.error(f"Could not read image '{input_path}': {e}")
        return 1

    try:
        result = convert(raw_bytes, (args.board_width, args.board_height))
    except ConvertError as e:
        logger.error(f"Conversion failed ({e.kind}): {e.message}")
        return 1

    output_path.write_bytes(result.image_bytes)
    logger.info(f"Saved mosaic: {output_path}")

    if args.map_json:
        Path(args.map_json).write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        logger.info(f"Saved domino map: {args.map_json}")

    if not args.quiet:
        print(f"Dominoes: {result.total_count} ({result.white_count} white, {result.black_count} black)")
        for index, row in enumerate(result.domino_map, start=1):
            print(f"  Row {index:>3}: {' '.join(row)}")

    return 0


if __name__ == "__main__":
    exit(main())
