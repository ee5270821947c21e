#!/usr/bin/env python3
"""
CLI script to compress ResourceTiming entries into a URL trie payload.

Usage:
    # Compress a JSON export of performance entries
    python scripts/compress_resource_timing.py --input timings.json

    # Walk a frame-tree snapshot and write the payload to a file
    python scripts/compress_resource_timing.py --provider frame_snapshot \\
        --input snapshot.json --output payload.json --stats

    # Turn a payload back into timing entries
    python scripts/compress_resource_timing.py --decompress --input payload.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from resourcetiming_compression.compression import (
    CompressionError,
    ResourceTimingCompressor,
    decompress,
    dumps_payload,
    loads_payload,
)
from resourcetiming_compression.config import get_settings
from resourcetiming_compression.ingestion import IngestionError, get_provider

logger = logging.getLogger(__name__)

# Providers that read from a file given by --input
FILE_PROVIDERS = ["json_file", "frame_snapshot"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compress ResourceTiming entries into a URL trie payload",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compress a JSON export
  python scripts/compress_resource_timing.py --input timings.json

  # Compress a frame snapshot and show statistics
  python scripts/compress_resource_timing.py --provider frame_snapshot --input snap.json --stats

  # Decompress a payload
  python scripts/compress_resource_timing.py --decompress --input payload.json
        """,
    )

    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        required=True,
        help="Entry file (or payload file with --decompress)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write the result here instead of stdout",
    )
    parser.add_argument(
        "--provider",
        choices=FILE_PROVIDERS,
        help="Entry provider (default: from config, usually json_file)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML config file (default: resourcetiming.yaml)",
    )
    parser.add_argument(
        "--decompress",
        action="store_true",
        help="Decode a payload back into timing entries",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print compression statistics to stderr",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def run_compress(args: argparse.Namespace) -> str:
    """Compress the input file and return the JSON payload."""
    settings = get_settings(args.config)
    provider_name = args.provider or settings.default_provider
    if provider_name not in FILE_PROVIDERS:
        raise IngestionError(
            f"Provider '{provider_name}' cannot read from --input; "
            f"use one of: {', '.join(FILE_PROVIDERS)}"
        )

    provider = get_provider(provider_name, path=args.input)
    compressor = ResourceTimingCompressor(settings.compression)
    payload = compressor.compress_provider(provider)

    if args.stats and compressor.last_result:
        stats = compressor.last_result.to_dict()
        print(json.dumps(stats, indent=2), file=sys.stderr)

    return dumps_payload(payload)


def run_decompress(args: argparse.Namespace) -> str:
    """Decode the input payload and return the entries as JSON."""
    payload = loads_payload(args.input.read_text(encoding="utf-8"))
    records = decompress(payload)
    logger.info(f"Decoded {len(records)} timing records from {args.input}")
    return json.dumps([record.to_dict() for record in records], indent=2)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings(args.config)
    if args.verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    errors = settings.validate()
    if errors:
        for error in errors:
            logger.error(f"Invalid configuration: {error}")
        return 1

    try:
        if args.decompress:
            output = run_decompress(args)
        else:
            output = run_compress(args)
    except (IngestionError, CompressionError) as e:
        logger.error(f"Failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not read {args.input}: {e}")
        return 1

    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(output)} bytes to {args.output}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
