"""Types for unified diff patch representation.

Parsed patches are immutable: every type is a frozen dataclass and every
sequence is a tuple. A PatchSet is built once from patch text and discarded
after the files it describes have been written.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from vendorpatch.core.constants import DEV_NULL


class LineKind(Enum):
    """Kind of a hunk line. The value is its unified diff prefix."""

    CONTEXT = " "  # Present, unchanged, in old and new content
    ADD = "+"  # Only in new content
    REMOVE = "-"  # Only in old content


@dataclass(frozen=True)
class Line:
    """A single typed line of a hunk, without its prefix or line ending."""

    kind: LineKind
    text: str

    @classmethod
    def context(cls, text: str) -> Line:
        return cls(LineKind.CONTEXT, text)

    @classmethod
    def add(cls, text: str) -> Line:
        return cls(LineKind.ADD, text)

    @classmethod
    def remove(cls, text: str) -> Line:
        return cls(LineKind.REMOVE, text)

    def __str__(self) -> str:
        return f"{self.kind.value}{self.text}"


@dataclass(frozen=True)
class Range:
    """A line range from a hunk header.

    Attributes:
        start: First line of the range (1-indexed, as in diff headers).
            For an empty range this is the line the hunk follows.
        length: Number of lines in the range.
    """

    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.length < 0:
            raise ValueError(f"invalid range {self.start},{self.length}")

    def __str__(self) -> str:
        return f"{self.start},{self.length}"


@dataclass(frozen=True)
class Hunk:
    """A single hunk in a unified diff.

    A hunk represents a contiguous section of changes in a file,
    including context lines before and after the actual modifications.

    Attributes:
        old_range: Lines covered in the original file (context + removed)
        new_range: Lines covered in the new version (context + added)
        lines: Typed lines in diff order
        section: Optional function/class context after the closing @@
    """

    old_range: Range
    new_range: Range
    lines: tuple[Line, ...] = ()
    section: str = ""

    def old_lines(self) -> list[str]:
        """Lines this hunk expects in the original file."""
        return [line.text for line in self.lines if line.kind is not LineKind.ADD]

    def new_lines(self) -> list[str]:
        """Lines this hunk produces in the new file."""
        return [line.text for line in self.lines if line.kind is not LineKind.REMOVE]

    def header(self) -> str:
        """Render the ``@@ -a,b +c,d @@`` header line."""
        suffix = f" {self.section}" if self.section else ""
        return f"@@ -{self.old_range} +{self.new_range} @@{suffix}"

    def __str__(self) -> str:
        return "\n".join([self.header(), *(str(line) for line in self.lines)])


@dataclass(frozen=True)
class FilePatch:
    """A patch for a single file.

    Represents all the changes to be applied to a single file,
    which may consist of multiple non-contiguous hunks.

    Attributes:
        old_path: Path from the --- line, exactly as written (prefixes kept)
        new_path: Path from the +++ line, exactly as written (prefixes kept)
        hunks: Hunks in patch order
        old_eof_newline: False if the original file has no final newline
        new_eof_newline: False if the new file must end without a newline
    """

    old_path: str
    new_path: str
    hunks: tuple[Hunk, ...] = ()
    old_eof_newline: bool = True
    new_eof_newline: bool = True

    @property
    def is_new_file(self) -> bool:
        """True if the patch creates the file (old path is /dev/null)."""
        return self.old_path == DEV_NULL

    @property
    def is_deleted(self) -> bool:
        """True if the patch removes the file (new path is /dev/null)."""
        return self.new_path == DEV_NULL

    @property
    def path(self) -> str:
        """Get the effective file path (new_path for edits/creates, old_path for deletes)."""
        if self.is_deleted:
            return self.old_path
        return self.new_path


@dataclass(frozen=True)
class PatchSet:
    """All file patches parsed from one patch file, in patch order."""

    files: tuple[FilePatch, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[FilePatch]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def file_paths(self) -> list[str]:
        """Get list of all affected file paths."""
        return [fp.path for fp in self.files]
