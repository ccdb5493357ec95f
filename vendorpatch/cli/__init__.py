"""Command-line interface."""

from vendorpatch.cli.main import main, run

__all__ = ["main", "run"]
