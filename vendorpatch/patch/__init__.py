"""Patch module for parsing and applying unified diffs to a project tree.

Main components:
- Types: Line, Range, Hunk, FilePatch, PatchSet - immutable representation of diffs
- Parser: parse_patch_set() - convert multi-file diff text to a PatchSet
- Resolver: resolve_patch_path() - map header paths under a project root (-pN)
- Applier: apply_hunks() - exact, context-verified hunk application
- Runner: apply_patch_file() - read, apply and write every file in a patch file

Example usage:
    >>> from vendorpatch.patch import apply_patch_file
    >>> result = apply_patch_file(project_root, "fix-build.patch")  # doctest: +SKIP
    >>> [outcome.action for outcome in result.outcomes]  # doctest: +SKIP
    [<FileAction.MODIFIED: 'modified'>]
"""

from vendorpatch.patch.applier import TrailingPolicy, apply_hunks
from vendorpatch.patch.parser import parse_patch_set
from vendorpatch.patch.resolver import resolve_patch_path, strip_components
from vendorpatch.patch.runner import (
    FileAction,
    FileOutcome,
    PatchResult,
    apply_file_patch,
    apply_patch_file,
    apply_patch_files,
    run_patch_file,
)
from vendorpatch.patch.types import FilePatch, Hunk, Line, LineKind, PatchSet, Range
from vendorpatch.patch.workspace import PatchOptions, Workspace

__all__ = [
    # Types
    "FilePatch",
    "Hunk",
    "Line",
    "LineKind",
    "PatchSet",
    "Range",
    # Parser
    "parse_patch_set",
    # Resolver
    "resolve_patch_path",
    "strip_components",
    # Applier
    "TrailingPolicy",
    "apply_hunks",
    # Runner
    "FileAction",
    "FileOutcome",
    "PatchOptions",
    "PatchResult",
    "Workspace",
    "apply_file_patch",
    "apply_patch_file",
    "apply_patch_files",
    "run_patch_file",
]
