"""Applier for unified diff hunks.

Hunks are applied exactly where their headers say. There is no offset
search and no fuzz: every context and removed line must equal the old
file's line at the cursor, byte for byte, or the whole file fails.
"""

import logging
from collections.abc import Sequence
from enum import Enum

from vendorpatch.core.errors import ContextMismatch, HunkOutOfRange, RemovalMismatch
from vendorpatch.patch.types import Hunk, LineKind

logger = logging.getLogger(__name__)


class TrailingPolicy(Enum):
    """What happens to old lines after the last hunk."""

    KEEP = "keep"  # Copy them into the output unchanged
    DROP = "drop"  # Discard them; the patch must cover the file to its end


def _split_lines(text: str) -> tuple[list[str], bool]:
    """Split text on newlines.

    Returns:
        Tuple of (lines, ends_with_newline). A final newline does not
        produce an empty last line.
    """
    if not text:
        return [], False
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
        return lines, True
    return lines, False


def _hunk_start(hunk: Hunk) -> int:
    """0-based index of the first old line a hunk covers.

    An empty old range (``@@ -5,0 +6,2 @@``) names the line the insertion
    follows, so the insertion point is the start itself.
    """
    if hunk.old_range.length == 0:
        return hunk.old_range.start
    return hunk.old_range.start - 1


def covered_old_lines(hunks: Sequence[Hunk]) -> int:
    """0-based index one past the last old line the hunks verify.

    Lines from this index on are never compared against the patch.
    """
    if not hunks:
        return 0
    last = max(hunks, key=lambda hunk: hunk.old_range.start)
    return _hunk_start(last) + len(last.old_lines())


def split_lines(text: str) -> list[str]:
    """Split text into lines the way apply_hunks() sees them."""
    return _split_lines(text)[0]


def apply_hunks(
    hunks: Sequence[Hunk],
    old_text: str,
    *,
    trailing: TrailingPolicy = TrailingPolicy.KEEP,
    new_eof_newline: bool = True,
) -> str:
    """Apply hunks to the text of a file.

    Unchanged lines before each hunk are copied, then the hunk's lines are
    walked with a cursor into the old lines: context lines are verified and
    kept, removed lines are verified and skipped, added lines are emitted.

    Args:
        hunks: Hunks of one file patch; applied in ascending old start order.
        old_text: Full content of the file before patching.
        trailing: Whether old lines after the last hunk are kept.
        new_eof_newline: Whether the result ends with a newline when the last
            hunk reaches the end of the old file.

    Returns:
        The patched text.

    Raises:
        ContextMismatch: A context line differs from the old file.
        RemovalMismatch: A removed line differs from the old file.
        HunkOutOfRange: A hunk overlaps the previous one or starts past EOF.

    Example:
        >>> from vendorpatch.patch.types import Hunk, Line, Range
        >>> hunk = Hunk(Range(2, 3), Range(2, 3), (
        ...     Line.context("b"), Line.remove("c"), Line.add("x"), Line.context("d")))
        >>> apply_hunks([hunk], "a\\nb\\nc\\nd\\n")
        'a\\nb\\nx\\nd\\n'
    """
    old_lines, ends_with_newline = _split_lines(old_text)
    out: list[str] = []
    cursor = 0

    ordered = sorted(enumerate(hunks), key=lambda item: item[1].old_range.start)
    for index, hunk in ordered:
        start = _hunk_start(hunk)
        if start < cursor:
            raise HunkOutOfRange(
                index, hunk.header(), start,
                f"overlaps the previous hunk, which ended at line {cursor}",
            )
        if start > len(old_lines):
            raise HunkOutOfRange(
                index, hunk.header(), start,
                f"file has only {len(old_lines)} lines",
            )

        # Unchanged lines in front of this hunk
        out.extend(old_lines[cursor:start])
        cursor = start

        for line in hunk.lines:
            if line.kind is LineKind.ADD:
                out.append(line.text)
                continue

            actual = old_lines[cursor] if cursor < len(old_lines) else None
            if actual != line.text:
                if line.kind is LineKind.CONTEXT:
                    raise ContextMismatch(index, hunk.header(), cursor, line.text, actual)
                raise RemovalMismatch(index, hunk.header(), cursor, line.text, actual)

            if line.kind is LineKind.CONTEXT:
                out.append(line.text)
            cursor += 1

        logger.debug(
            "Applied hunk %d %s (%d -> %d lines)",
            index + 1, hunk.header(), len(hunk.old_lines()), len(hunk.new_lines()),
        )

    reached_eof = bool(hunks) and cursor == len(old_lines)
    if trailing is TrailingPolicy.KEEP:
        out.extend(old_lines[cursor:])
        final_newline = new_eof_newline if reached_eof else ends_with_newline
    else:
        if cursor < len(old_lines):
            logger.debug("Dropping %d line(s) after the last hunk", len(old_lines) - cursor)
        final_newline = False

    if not out:
        return ""
    return "\n".join(out) + ("\n" if final_newline else "")
