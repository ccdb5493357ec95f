"""Apply patch files to a project root.

Each file patch commits on its own: it is written as soon as all of its
hunks have applied. A patch file is therefore not atomic. When the third
file patch of a patch file fails, the first two stay written and the
error propagates to the caller, which is expected to stop its run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from vendorpatch.core.errors import (
    ApplyError,
    ParseError,
    PathSecurityError,
    RemovalMismatch,
    WriteError,
)
from vendorpatch.patch.applier import (
    apply_hunks,
    covered_old_lines,
    split_lines,
)
from vendorpatch.patch.parser import parse_patch_set
from vendorpatch.patch.types import FilePatch
from vendorpatch.patch.workspace import PatchOptions, Workspace

logger = logging.getLogger(__name__)


class FileAction(str, Enum):
    """What applying a file patch did to the tree."""

    MODIFIED = "modified"
    CREATED = "created"
    RENAMED = "renamed"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileOutcome:
    """Result of one applied file patch.

    Attributes:
        old_path: Resolved file the content was read from (None when created)
        new_path: Resolved file that was written (None when deleted)
        action: What happened to the tree
        hunks: Number of hunks applied
    """

    old_path: Path | None
    new_path: Path | None
    action: FileAction
    hunks: int

    @property
    def path(self) -> Path:
        """The file a reader would care about: new path, or old path for deletes."""
        if self.new_path is not None:
            return self.new_path
        if self.old_path is not None:
            return self.old_path
        raise ValueError("file outcome has neither an old nor a new path")


@dataclass
class PatchResult:
    """Result of applying one patch file."""

    patch_path: Path
    outcomes: list[FileOutcome] = field(default_factory=list)
    dry_run: bool = False


def _check_fully_removed(file_patch: FilePatch, old_text: str) -> None:
    """A deletion must verify every line of the old file."""
    old_lines = split_lines(old_text)
    covered = covered_old_lines(file_patch.hunks)
    if covered >= len(old_lines):
        return
    hunks = file_patch.hunks
    last = max(range(len(hunks)), key=lambda index: hunks[index].old_range.start, default=0)
    raise RemovalMismatch(
        last,
        hunks[last].header() if hunks else "no hunks",
        covered,
        None,
        old_lines[covered],
    )


def apply_file_patch(workspace: Workspace, file_patch: FilePatch) -> FileOutcome:
    """Apply one file patch.

    Reads the old file, applies every hunk, and writes the result to the new
    path. The old and new header paths are resolved independently, so a
    patch can rename or create a file. ``/dev/null`` as old path creates the
    file; as new path removes it once its content has been verified.

    Args:
        workspace: Project root, options and dry-run state.
        file_patch: Parsed patch for a single file.

    Returns:
        FileOutcome describing what was written.

    Raises:
        PathSecurityError: A header path resolves outside the project root.
        ReadError: The old file could not be read.
        ApplyError: A hunk did not match the old file.
        WriteError: The result could not be written.
    """
    try:
        old_path = None if file_patch.is_new_file else workspace.resolve(file_patch.old_path)
        new_path = None if file_patch.is_deleted else workspace.resolve(file_patch.new_path)
    except PathSecurityError as e:
        logger.error("Refusing patch for %s: %s", file_patch.path, e.reason)
        raise

    if old_path is None:
        if new_path is not None and workspace.exists(new_path):
            logger.error("Refusing to create %s: file already exists", new_path)
            raise WriteError(new_path, "file to be created already exists")
        old_text = ""
    else:
        old_text = workspace.read(old_path)

    try:
        new_text = apply_hunks(
            file_patch.hunks,
            old_text,
            trailing=workspace.options.trailing,
            new_eof_newline=file_patch.new_eof_newline,
        )
        if new_path is None:
            # Checked against the old lines, so the trailing policy has no say
            _check_fully_removed(file_patch, old_text)
    except ApplyError as e:
        e.with_file(file_patch.path)
        logger.error("%s", e)
        raise

    if new_path is not None:
        workspace.write(new_path, new_text)
        if old_path is None:
            action = FileAction.CREATED
        elif old_path != new_path:
            action = FileAction.RENAMED
        else:
            action = FileAction.MODIFIED
    elif old_path is not None:
        workspace.remove(old_path)
        action = FileAction.DELETED
    else:
        raise ParseError(f"file patch for {file_patch.path!r} has /dev/null on both sides")

    logger.debug("%s %s (%d hunks)", action.value, file_patch.path, len(file_patch.hunks))
    return FileOutcome(old_path, new_path, action, len(file_patch.hunks))


def run_patch_file(workspace: Workspace, patch_file_path: str | Path) -> PatchResult:
    """Apply a patch file inside an existing workspace.

    Relative patch paths are taken from the workspace root; absolute paths
    are used as-is.
    """
    patch_path = workspace.root / patch_file_path
    logger.info("Applying patch %s", patch_path)

    text = workspace.read(patch_path)
    try:
        patch_set = parse_patch_set(text)
    except ParseError as e:
        e.with_path(patch_path)
        logger.error("%s", e)
        raise
    logger.debug("%s touches: %s", patch_path, ", ".join(patch_set.file_paths()))

    result = PatchResult(patch_path=patch_path, dry_run=workspace.dry_run)
    for file_patch in patch_set:
        result.outcomes.append(apply_file_patch(workspace, file_patch))
    return result


def apply_patch_file(
    project_root: Path,
    patch_file_path: str | Path,
    options: PatchOptions | None = None,
    *,
    dry_run: bool = False,
) -> PatchResult:
    """Apply every file patch in a patch file, in order, stopping at the first failure.

    Files written before a failure stay written.

    Args:
        project_root: Directory holding the source tree to patch.
        patch_file_path: Patch file, relative to ``project_root`` or absolute.
        options: Strip depth, trailing-line policy, encoding.
        dry_run: Verify everything but write nothing.

    Returns:
        PatchResult listing one FileOutcome per file patch.

    Raises:
        PatchError: ReadError, ParseError, ApplyError, WriteError or
            PathSecurityError from the first failing step.
    """
    workspace = Workspace(project_root, options, dry_run=dry_run)
    return run_patch_file(workspace, patch_file_path)


def apply_patch_files(
    project_root: Path,
    patch_file_paths: Iterable[str | Path],
    options: PatchOptions | None = None,
    *,
    dry_run: bool = False,
) -> list[PatchResult]:
    """Apply several patch files in the given order, stopping at the first failure.

    In a dry run, later patch files see the in-memory results of earlier ones.
    """
    workspace = Workspace(project_root, options, dry_run=dry_run)
    return [run_patch_file(workspace, path) for path in patch_file_paths]
