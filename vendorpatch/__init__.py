"""vendorpatch: apply unified diffs to vendored source trees."""

__version__ = "0.1.0"
