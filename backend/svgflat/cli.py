"""
svgflat — bake transform attributes into SVG geometry.

Usage:
  svgflat input.svg                   # prints flattened SVG to stdout
  svgflat input.svg -o flat.svg       # saves flattened SVG
  svgflat folder/ -o output_folder/   # batch process folder
  svgflat input.svg --precision 3     # round written coordinates
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace

from dotenv import load_dotenv

from svgflat import flatten_svg
from svgflat.engine.config import FlattenConfig
from svgflat.errors import FlattenError

logger = logging.getLogger("svgflat.cli")


def process_file(input_path: str, output_path: str | None, config: FlattenConfig) -> bool:
    """Flatten a single SVG file. Returns False on error."""
    with open(input_path, "r", encoding="utf-8") as f:
        raw = f.read()

    try:
        flat_svg, report = flatten_svg(raw, config)
    except FlattenError as e:
        print(f"  ERROR: {e}", file=sys.stderr)
        return False

    print(
        f"  {report.flattened} flattened, {report.converted} converted, "
        f"{len(report.diagnostics)} diagnostics",
        file=sys.stderr,
    )
    for diag in report.diagnostics:
        print(f"  {diag.level}: [{diag.code}] <{diag.tag}> {diag.message}", file=sys.stderr)

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(flat_svg)
        print(f"  → Saved: {output_path}", file=sys.stderr)
    else:
        print(flat_svg)

    return not report.errors


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flatten SVG transform attributes into coordinates")
    parser.add_argument("input", help="SVG file or folder of SVGs")
    parser.add_argument("-o", "--output", help="Output file or folder")
    parser.add_argument("--precision", type=int, help="Round coordinates to N decimals")
    parser.add_argument(
        "--keep-going", action="store_true", help="Record per-element errors instead of stopping"
    )
    parser.add_argument("--verify", action="store_true", help="Check flattened paths by sampling")
    parser.add_argument(
        "--remove-used", action="store_true", help="Delete elements referenced by <use>"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    from svgflat.config import settings

    logging.basicConfig(
        level=getattr(logging, settings.svgflat_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    args = build_parser().parse_args(argv)
    config = FlattenConfig.from_settings(settings)
    if args.precision is not None:
        config = replace(config, precision=args.precision)
    if args.keep_going:
        config = replace(config, fail_fast=False)
    if args.verify:
        config = replace(config, verify_paths=True)
    if args.remove_used:
        config = replace(config, remove_used_sources=True)

    if os.path.isdir(args.input):
        svg_files = [f for f in os.listdir(args.input) if f.lower().endswith(".svg")]
        if not svg_files:
            print("No .svg files found in folder.", file=sys.stderr)
            return 1

        out_dir = args.output or args.input.rstrip("/\\") + "_flat"
        os.makedirs(out_dir, exist_ok=True)

        success = 0
        for fname in sorted(svg_files):
            print(f"[{fname}]", file=sys.stderr)
            if process_file(os.path.join(args.input, fname), os.path.join(out_dir, fname), config):
                success += 1
        logger.info("Done: %d/%d processed → %s", success, len(svg_files), out_dir)
        return 0 if success == len(svg_files) else 1

    if not os.path.exists(args.input):
        print(f"File not found: {args.input}", file=sys.stderr)
        return 1
    return 0 if process_file(args.input, args.output, config) else 1


if __name__ == "__main__":
    sys.exit(main())
