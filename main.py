"""Main orchestration script for running Doxygen and generating the Docusaurus pages."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from doxy2md.convert import main as convert_main


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> int:
    """Run the full documentation generation pipeline."""
    parser = argparse.ArgumentParser(
        description="Run Doxygen and convert its XML output to Docusaurus pages."
    )
    parser.add_argument(
        "--run-doxygen",
        action="store_true",
        help="Run doxygen with the Doxyfile in the current folder first",
    )
    parser.add_argument(
        "--doxyfile",
        default="Doxyfile",
        help="Doxygen configuration file used with --run-doxygen (default: Doxyfile)",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--id",
        help="Instance id in the configuration file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show progress details",
    )
    args = parser.parse_args()

    if args.run_doxygen:
        # 1. Generate the XML export
        print("--- Step 1: Running Doxygen ---")
        run_command(["doxygen", args.doxyfile])

    # 2. Convert XML to Docusaurus Markdown
    print("\n--- Step 2: Converting Doxygen XML to Markdown ---")
    convert_args: list[str] = []
    if args.config:
        convert_args.extend(["--config", args.config])
    if args.id:
        convert_args.extend(["--id", args.id])
    if args.verbose:
        convert_args.append("--verbose")

    return convert_main(convert_args)


if __name__ == "__main__":
    raise SystemExit(main())
