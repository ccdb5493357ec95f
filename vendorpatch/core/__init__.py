"""Core types and utilities for vendorpatch."""

from vendorpatch.core.errors import (
    ApplyError,
    ConfigError,
    ContextMismatch,
    HunkOutOfRange,
    LoadError,
    ParseError,
    PatchError,
    PathSecurityError,
    ReadError,
    RemovalMismatch,
    VendorPatchError,
    WriteError,
)

__all__ = [
    "ApplyError",
    "ConfigError",
    "ContextMismatch",
    "HunkOutOfRange",
    "LoadError",
    "ParseError",
    "PatchError",
    "PathSecurityError",
    "ReadError",
    "RemovalMismatch",
    "VendorPatchError",
    "WriteError",
]
