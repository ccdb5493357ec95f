"""Entry point for the vendorpatch CLI."""

import logging
import sys
from dataclasses import replace
from pathlib import Path

from vendorpatch.cli.arg_parser import parse_args
from vendorpatch.cli.output import print_error, print_info, print_result
from vendorpatch.config import load_config
from vendorpatch.core.errors import ConfigError, PatchError
from vendorpatch.core.logging_setup import configure_logging, resolve_level
from vendorpatch.patch.applier import TrailingPolicy
from vendorpatch.patch.runner import run_patch_file
from vendorpatch.patch.workspace import PatchOptions, Workspace

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PATCH_FAILED = 1
EXIT_CONFIG_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Apply the patch files named on the command line.

    Returns:
        Process exit code: 0 on success, 1 when a patch fails, 2 for
        configuration errors.
    """
    args = parse_args(argv)
    project_root: Path = args.project_root

    try:
        config = load_config(args.config, project_root=project_root)
    except ConfigError as e:
        configure_logging(resolve_level("WARNING", args.verbose))
        print_error(e.message)
        return EXIT_CONFIG_ERROR

    log_file = Path(config.logging.file) if config.logging.file else None
    configure_logging(resolve_level(config.logging.level, args.verbose), log_file)

    if not project_root.is_dir():
        print_error(f"Project root is not a directory: {project_root}")
        return EXIT_CONFIG_ERROR

    # Command line flags override the config file
    options = PatchOptions.from_config(config.patch)
    if args.strip is not None:
        options = replace(options, strip=args.strip)
    if args.trailing is not None:
        options = replace(options, trailing=TrailingPolicy(args.trailing))
    logger.debug("Patch options: %s", options)

    workspace = Workspace(project_root, options, dry_run=args.dry_run)
    for patch in args.patches:
        try:
            result = run_patch_file(workspace, patch)
        except PatchError as e:
            print_error(e.message)
            return EXIT_PATCH_FAILED
        print_result(result, project_root)

    count = len(args.patches)
    summary = f"{count} patch file{'s' if count != 1 else ''}"
    if args.dry_run:
        changed = len(workspace.pending_paths())
        print_info(
            f"{summary} would apply cleanly, changing {changed} "
            f"file{'s' if changed != 1 else ''} (nothing written)"
        )
    else:
        print_info(f"{summary} applied cleanly")
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
