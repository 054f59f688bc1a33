"""Convert a Doxygen XML export to Docusaurus compatible Markdown.

This module is the command line entry point: it parses the options,
configures logging and runs the conversion pipeline.
"""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from doxy2md.errors import ConversionError
from doxy2md.run_conversion import run_conversion

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    ap = argparse.ArgumentParser(
        prog="doxygen2md",
        description="Convert Doxygen XML to Docusaurus Markdown pages.",
    )
    ap.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )
    ap.add_argument(
        "--id",
        help="Instance id, for sites with several API references (default: default)",
    )
    ap.add_argument(
        "--input",
        type=Path,
        help="Folder with the Doxygen XML files (overrides the configuration)",
    )
    ap.add_argument(
        "--output",
        type=Path,
        help="Docusaurus docs folder (overrides the configuration)",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Show progress details",
    )
    ap.add_argument(
        "--debug",
        action="store_true",
        help="Show debug details and write files sequentially",
    )
    ap.add_argument(
        "--suggest-todo",
        action="store_true",
        help="Render TODO notes for missing brief and detailed descriptions",
    )
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    """Run the conversion process."""
    args = build_parser().parse_args(argv)

    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")

    try:
        return run_conversion(args)
    except ConversionError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
