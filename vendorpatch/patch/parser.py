"""Parser for multi-file unified diff text.

This module turns patch text into an immutable PatchSet. Hunk bodies are
read by count: the ``@@ -a,b +c,d @@`` header says exactly how many old and
new lines follow, so removed lines such as ``--- foo`` are never mistaken for
the next file header.
"""

import logging
import re

from vendorpatch.core.constants import DEV_NULL
from vendorpatch.core.errors import ParseError
from vendorpatch.patch.types import FilePatch, Hunk, Line, LineKind, PatchSet, Range

logger = logging.getLogger(__name__)

# Pattern for hunk header: @@ -old_start[,old_count] +new_start[,new_count] @@ [section]
HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$"
)

# File headers; anything after a TAB is a timestamp
UNIFIED_OLD_RE = re.compile(r"^--- (.+?)(?:\t.*)?$")
UNIFIED_NEW_RE = re.compile(r"^\+\+\+ (.+?)(?:\t.*)?$")

# "\ No newline at end of file" (the text after the backslash is localized)
NO_NEWLINE_PREFIX = "\\"


def _is_file_header(lines: list[str], idx: int) -> bool:
    return (
        lines[idx].startswith("--- ")
        and idx + 1 < len(lines)
        and lines[idx + 1].startswith("+++ ")
    )


def _looks_like_body(line: str) -> bool:
    """True for a line that can only be a stray hunk body line."""
    if line.startswith(("+", " ")):
        return True
    # "-- " separates a format-patch signature; "--- " starts a file header
    return line.startswith("-") and not line.startswith(("-- ", "--- ")) and line != "--"


def _parse_header_path(line: str, pattern: re.Pattern[str], idx: int) -> str:
    match = pattern.match(line.rstrip("\r"))
    if not match:
        raise ParseError(f"malformed file header {line!r}", idx + 1)
    return match.group(1)


def _parse_hunk_header(line: str, idx: int) -> Hunk:
    """Parse a hunk header line into an empty Hunk.

    Raises:
        ParseError: If the header is malformed or names an impossible range.
    """
    header = line.rstrip("\r")
    match = HUNK_HEADER_RE.match(header)
    if not match:
        raise ParseError(f"malformed hunk header {header!r}", idx + 1)

    # Count defaults to 1 if omitted (e.g., @@ -1 +1,2 @@)
    old_range = Range(int(match.group(1)), int(match.group(2) or 1))
    new_range = Range(int(match.group(3)), int(match.group(4) or 1))
    for side in (old_range, new_range):
        if side.start == 0 and side.length != 0:
            raise ParseError(
                f"hunk header {header!r} has a non-empty range starting at line 0",
                idx + 1,
            )

    return Hunk(old_range=old_range, new_range=new_range, section=match.group(5).strip())


def _parse_hunk(
    lines: list[str], idx: int
) -> tuple[Hunk, int, bool, bool]:
    """Parse one hunk starting at its header line.

    Returns:
        Tuple of (hunk, next_index, old_missing_newline, new_missing_newline)
    """
    hunk = _parse_hunk_header(lines[idx], idx)
    header_idx = idx
    idx += 1

    old_left = hunk.old_range.length
    new_left = hunk.new_range.length
    body: list[Line] = []
    old_missing_newline = False
    new_missing_newline = False

    def mark_missing_newline(marker_idx: int) -> None:
        nonlocal old_missing_newline, new_missing_newline
        if not body:
            raise ParseError("end-of-file marker before any hunk line", marker_idx + 1)
        last = body[-1].kind
        if last is not LineKind.ADD:
            old_missing_newline = True
        if last is not LineKind.REMOVE:
            new_missing_newline = True

    while old_left > 0 or new_left > 0:
        if idx >= len(lines):
            raise ParseError(
                f"hunk {hunk.header()!r} ends early: missing {old_left} old "
                f"and {new_left} new lines",
                header_idx + 1,
            )
        raw = lines[idx]

        if raw.startswith(NO_NEWLINE_PREFIX):
            mark_missing_newline(idx)
            idx += 1
            continue

        if raw in ("", "\r"):
            # Blank context line whose leading space was stripped by an editor
            kind, text = LineKind.CONTEXT, raw
        else:
            try:
                kind = LineKind(raw[0])
            except ValueError:
                raise ParseError(f"unexpected line in hunk body: {raw!r}", idx + 1) from None
            text = raw[1:]

        takes_old = kind is not LineKind.ADD
        takes_new = kind is not LineKind.REMOVE
        if (takes_old and old_left == 0) or (takes_new and new_left == 0):
            raise ParseError(
                f"hunk {hunk.header()!r} has more lines than its header declares",
                idx + 1,
            )
        old_left -= takes_old
        new_left -= takes_new
        body.append(Line(kind, text))
        idx += 1

    if idx < len(lines) and lines[idx].startswith(NO_NEWLINE_PREFIX):
        mark_missing_newline(idx)
        idx += 1

    if idx < len(lines) and _looks_like_body(lines[idx]):
        raise ParseError(
            f"hunk {hunk.header()!r} has more lines than its header declares",
            idx + 1,
        )

    hunk = Hunk(hunk.old_range, hunk.new_range, tuple(body), hunk.section)
    return hunk, idx, old_missing_newline, new_missing_newline


def _parse_file_patch(lines: list[str], idx: int) -> tuple[FilePatch, int]:
    """Parse one file section starting at its ``---`` line.

    Returns:
        Tuple of (FilePatch, next_index)
    """
    start = idx
    old_path = _parse_header_path(lines[idx], UNIFIED_OLD_RE, idx)
    new_path = _parse_header_path(lines[idx + 1], UNIFIED_NEW_RE, idx + 1)
    if old_path == DEV_NULL and new_path == DEV_NULL:
        raise ParseError("file section has /dev/null on both sides", start + 1)
    idx += 2

    hunks: list[Hunk] = []
    old_eof_newline = True
    new_eof_newline = True
    while idx < len(lines) and lines[idx].startswith("@@"):
        hunk, idx, old_missing, new_missing = _parse_hunk(lines, idx)
        hunks.append(hunk)
        old_eof_newline = old_eof_newline and not old_missing
        new_eof_newline = new_eof_newline and not new_missing

    if not hunks:
        raise ParseError(f"file section for {new_path!r} has no hunks", start + 1)

    logger.debug("Parsed %d hunk(s) for %s -> %s", len(hunks), old_path, new_path)
    file_patch = FilePatch(
        old_path=old_path,
        new_path=new_path,
        hunks=tuple(hunks),
        old_eof_newline=old_eof_newline,
        new_eof_newline=new_eof_newline,
    )
    return file_patch, idx


def parse_patch_set(text: str) -> PatchSet:
    """Parse unified diff text into a PatchSet.

    Handles:
    - Standard unified diff format (--- path, +++ path, @@ ... @@)
    - Several files in one text, with git or format-patch noise between them
    - Context lines (space prefix), removals (-), additions (+)
    - '\\ No newline at end of file' markers

    Header paths are kept exactly as written; prefix stripping is the
    resolver's job.

    Args:
        text: Unified diff text to parse

    Returns:
        PatchSet with one FilePatch per file section, in text order.

    Raises:
        ParseError: If the text contains no file sections or any section
            is malformed.

    Example:
        >>> patch_set = parse_patch_set('''--- a/file.py
        ... +++ b/file.py
        ... @@ -1,2 +1,2 @@
        ...  context
        ... -removed
        ... +added
        ... ''')
        >>> len(patch_set)
        1
        >>> patch_set.files[0].new_path
        'b/file.py'
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    files: list[FilePatch] = []
    idx = 0
    while idx < len(lines):
        line = lines[idx]
        if _is_file_header(lines, idx):
            file_patch, idx = _parse_file_patch(lines, idx)
            files.append(file_patch)
        elif line.startswith("--- "):
            raise ParseError(f"file header {line!r} is not followed by '+++'", idx + 1)
        elif line.startswith("@@"):
            raise ParseError("hunk outside of a file section", idx + 1)
        else:
            # Preamble, git metadata, commit message, signature
            idx += 1

    if not files:
        raise ParseError("no file patches found")

    return PatchSet(files=tuple(files))
