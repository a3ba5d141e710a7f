"""
Command-line interface for mdproof.

Usage:
    mdproof input.md --output output.pdf
    mdproof input.md -o output.pdf --page-size letter --margin 25
    mdproof input.md -o output.pdf --config layout.json -v
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from reportlab.lib.units import mm

from .api import render_file
from .config import PAGE_SIZES, LayoutConfig
from .engine.geometry import Margins
from .exceptions import MdproofError
from .utils.logger import configure_logging
from .version import __version__

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdproof",
        description="mdproof - render markdown documents to paginated PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mdproof notes.md -o notes.pdf
  mdproof notes.md -o notes.pdf --page-size letter --margin 25
  mdproof notes.md -o notes.pdf --config layout.json
        """,
    )
    parser.add_argument("input", help="Markdown file to render")
    parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: input name with .pdf extension)",
    )
    parser.add_argument("--config", help="JSON layout configuration file")
    parser.add_argument(
        "--page-size",
        choices=sorted(PAGE_SIZES),
        help="Page size (default: a4)",
    )
    parser.add_argument("--margin", type=float, help="Margin on every side, in millimetres")
    parser.add_argument("--font-size", type=float, help="Body font size in points")
    parser.add_argument("--line-spacing", type=float, help="Line spacing multiplier (>= 1.0)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show errors")
    parser.add_argument("--no-rich", action="store_true", help="Plain log output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_config(args: argparse.Namespace) -> LayoutConfig:
    """Merge the configuration file with command-line overrides."""
    config = LayoutConfig.from_file(args.config) if args.config else LayoutConfig()
    overrides = {}
    if args.page_size:
        overrides["page_size"] = PAGE_SIZES[args.page_size]
    if args.margin is not None:
        overrides["margins"] = Margins.uniform(args.margin * mm)
    if args.font_size is not None:
        overrides["default_font_size"] = args.font_size
    if args.line_spacing is not None:
        overrides["line_spacing"] = args.line_spacing
    return dataclasses.replace(config, **overrides).validate()


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else "ERROR" if args.quiet else "INFO"
    configure_logging(level, use_rich=not args.no_rich)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1
    output_path = Path(args.output) if args.output else input_path.with_suffix(".pdf")

    try:
        config = build_config(args)
        result = render_file(input_path, output_path, config)
    except MdproofError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for resource in result.missing_resources:
        logger.warning("Missing resource: %s", resource)
    logger.info("Wrote %d pages to %s", result.page_count, output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
