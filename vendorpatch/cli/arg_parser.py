"""Argument parsing for the vendorpatch CLI."""

import argparse
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="vendorpatch",
        description=(
            "Apply unified diff patches to a vendored source tree. "
            "Patches are applied in the order given; the first failure stops the run."
        ),
        epilog="Set the log level with -v or the VENDORPATCH_LOG environment variable.",
    )
    parser.add_argument(
        "patches",
        nargs="+",
        type=Path,
        metavar="PATCH",
        help="Patch files, relative to the project root or absolute",
    )
    parser.add_argument(
        "--project-root", "-C",
        dest="project_root",
        type=Path,
        required=True,
        help="Directory holding the unpatched source tree",
    )
    parser.add_argument(
        "--strip", "-p",
        type=int,
        default=None,
        help="Leading path components to drop from header paths (default: 1)",
    )
    parser.add_argument(
        "--trailing",
        choices=["keep", "drop"],
        default=None,
        help="Keep or drop old lines after the last hunk (default: keep)",
    )
    parser.add_argument(
        "--dry-run", "-n",
        dest="dry_run",
        action="store_true",
        help="Verify every patch without writing any file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: ~/.vendorpatch and <project-root>/.vendorpatch layers)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    args = build_parser().parse_args(argv)
    if args.strip is not None and args.strip < 0:
        build_parser().error("--strip must be >= 0")
    return args
