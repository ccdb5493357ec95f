"""Unit tests for vendorpatch.patch.parser module."""

import pytest

from vendorpatch.core.errors import ParseError
from vendorpatch.patch import parse_patch_set
from vendorpatch.patch.types import Line, LineKind, Range


class TestParsePatchSet:
    """Tests for parse_patch_set function."""

    def test_parse_simple_hunk(self) -> None:
        """Test parsing a single hunk with add/remove."""
        diff_text = """\
--- a/file.py
+++ b/file.py
@@ -1,4 +1,4 @@
 line1
-old line
+new line
 line3
 line4
"""
        patch_set = parse_patch_set(diff_text)

        assert len(patch_set) == 1
        fp = patch_set.files[0]
        assert fp.old_path == "a/file.py"
        assert fp.new_path == "b/file.py"
        assert len(fp.hunks) == 1

        hunk = fp.hunks[0]
        assert hunk.old_range == Range(1, 4)
        assert hunk.new_range == Range(1, 4)
        assert hunk.lines == (
            Line.context("line1"),
            Line.remove("old line"),
            Line.add("new line"),
            Line.context("line3"),
            Line.context("line4"),
        )

    def test_parse_multiple_hunks(self) -> None:
        """Test parsing multiple hunks in the same file."""
        diff_text = """\
--- a/file.py
+++ b/file.py
@@ -1,3 +1,4 @@
 line1
+added at top
 line2
 line3
@@ -10,3 +11,2 @@
 line10
-removed
 line11
"""
        fp = parse_patch_set(diff_text).files[0]

        assert [h.old_range.start for h in fp.hunks] == [1, 10]
        assert fp.hunks[1].new_range == Range(11, 2)
        assert fp.hunks[1].lines[1] == Line.remove("removed")

    def test_parse_multiple_files_in_order(self) -> None:
        """File patches keep the order they appear in."""
        diff_text = """\
--- a/z.txt
+++ b/z.txt
@@ -1 +1 @@
-z
+Z
--- a/a.txt
+++ b/a.txt
@@ -1 +1 @@
-a
+A
"""
        patch_set = parse_patch_set(diff_text)

        assert patch_set.file_paths() == ["b/z.txt", "b/a.txt"]

    def test_count_defaults_to_one(self) -> None:
        """Omitted lengths in the hunk header mean one line."""
        diff_text = "--- a/f\n+++ b/f\n@@ -3 +3 @@\n-x\n+y\n"

        hunk = parse_patch_set(diff_text).files[0].hunks[0]

        assert hunk.old_range == Range(3, 1)
        assert hunk.new_range == Range(3, 1)

    def test_section_text_is_kept(self) -> None:
        """Text after the closing @@ is stored as the hunk section."""
        diff_text = "--- a/f\n+++ b/f\n@@ -1 +1 @@ fn main() {\n-x\n+y\n"

        hunk = parse_patch_set(diff_text).files[0].hunks[0]

        assert hunk.section == "fn main() {"
        assert hunk.header() == "@@ -1,1 +1,1 @@ fn main() {"

    def test_timestamps_are_removed_from_paths(self) -> None:
        """Anything after a TAB in a file header is a timestamp."""
        diff_text = (
            "--- pkg-1.0/src/lib.rs\t2023-01-01 00:00:00.000000000 +0000\n"
            "+++ pkg-1.0/src/lib.rs\t2023-01-02 00:00:00.000000000 +0000\n"
            "@@ -1 +1 @@\n-a\n+b\n"
        )

        fp = parse_patch_set(diff_text).files[0]

        assert fp.old_path == "pkg-1.0/src/lib.rs"
        assert fp.new_path == "pkg-1.0/src/lib.rs"

    def test_paths_keep_absolute_form(self) -> None:
        """Absolute header paths are not touched by the parser."""
        diff_text = "--- /tmp/pkg/a.c\n+++ /tmp/pkg/a.c\n@@ -1 +1 @@\n-a\n+b\n"

        fp = parse_patch_set(diff_text).files[0]

        assert fp.old_path == "/tmp/pkg/a.c"

    def test_git_preamble_and_metadata_skipped(self) -> None:
        """Commit messages and git metadata around file sections are ignored."""
        diff_text = """\
From 1234 Mon Sep 17 00:00:00 2001
Subject: [PATCH] fix build

---
 src/lib.rs | 2 +-
 1 file changed, 1 insertion(+), 1 deletion(-)

diff --git a/src/lib.rs b/src/lib.rs
index 1111111..2222222 100644
--- a/src/lib.rs
+++ b/src/lib.rs
@@ -1,2 +1,2 @@
 use std::io;
-fn old() {}
+fn new() {}
--
2.39.0
"""
        patch_set = parse_patch_set(diff_text)

        assert len(patch_set) == 1
        assert patch_set.files[0].hunks[0].lines[2] == Line.add("fn new() {}")

    def test_removed_line_looking_like_header(self) -> None:
        """A removed '-- comment' line renders as '--- comment' and is still a removal."""
        diff_text = """\
--- a/query.sql
+++ b/query.sql
@@ -1,2 +1,1 @@
--- a comment
 SELECT 1;
"""
        hunk = parse_patch_set(diff_text).files[0].hunks[0]

        assert hunk.lines == (Line.remove("-- a comment"), Line.context("SELECT 1;"))

    def test_added_line_looking_like_header(self) -> None:
        """An added '++ x' line renders as '+++ x' and is still an addition."""
        diff_text = "--- a/f\n+++ b/f\n@@ -1 +1,2 @@\n x\n+++ y\n"

        hunk = parse_patch_set(diff_text).files[0].hunks[0]

        assert hunk.lines[1] == Line.add("++ y")

    def test_empty_line_is_blank_context(self) -> None:
        """A completely empty line inside a hunk is a blank context line."""
        diff_text = "--- a/f\n+++ b/f\n@@ -1,3 +1,3 @@\n a\n\n-b\n+c\n"

        hunk = parse_patch_set(diff_text).files[0].hunks[0]

        assert hunk.lines[1] == Line(LineKind.CONTEXT, "")

    def test_carriage_return_kept_in_hunk_lines(self) -> None:
        """CRLF patches keep the \\r so CRLF files compare byte-for-byte."""
        diff_text = "--- a/f\r\n+++ b/f\r\n@@ -1 +1 @@\r\n-a\r\n+b\r\n"

        fp = parse_patch_set(diff_text).files[0]

        assert fp.new_path == "b/f"
        assert fp.hunks[0].lines == (Line.remove("a\r"), Line.add("b\r"))

    def test_stripped_blank_line_in_crlf_patch(self) -> None:
        """A bare carriage return is a blank CRLF context line."""
        diff_text = "--- a/f\r\n+++ b/f\r\n@@ -1,2 +1,2 @@\r\n\r\n-a\r\n+b\r\n"

        hunk = parse_patch_set(diff_text).files[0].hunks[0]

        assert hunk.lines[0] == Line(LineKind.CONTEXT, "\r")

    def test_no_newline_marker_on_new_side(self) -> None:
        """The marker after an added line flags the new file only."""
        diff_text = """\
--- a/f
+++ b/f
@@ -1 +1 @@
-a
+b
\\ No newline at end of file
"""
        fp = parse_patch_set(diff_text).files[0]

        assert fp.old_eof_newline is True
        assert fp.new_eof_newline is False

    def test_no_newline_marker_on_old_side(self) -> None:
        """The marker after a removed line flags the old file only."""
        diff_text = """\
--- a/f
+++ b/f
@@ -1 +1 @@
-a
\\ No newline at end of file
+b
"""
        fp = parse_patch_set(diff_text).files[0]

        assert fp.old_eof_newline is False
        assert fp.new_eof_newline is True
        assert fp.hunks[0].lines == (Line.remove("a"), Line.add("b"))

    def test_no_newline_marker_after_context(self) -> None:
        """The marker after a context line flags both sides."""
        diff_text = "--- a/f\n+++ b/f\n@@ -1,2 +1,2 @@\n-a\n+b\n c\n\\ No newline at end of file\n"

        fp = parse_patch_set(diff_text).files[0]

        assert fp.old_eof_newline is False
        assert fp.new_eof_newline is False

    def test_new_and_deleted_files(self) -> None:
        """/dev/null sides mark creations and deletions."""
        diff_text = """\
--- /dev/null
+++ b/new.txt
@@ -0,0 +1,2 @@
+one
+two
--- a/old.txt
+++ /dev/null
@@ -1 +0,0 @@
-gone
"""
        created, deleted = parse_patch_set(diff_text).files

        assert created.is_new_file
        assert created.hunks[0].old_range == Range(0, 0)
        assert deleted.is_deleted
        assert deleted.path == "a/old.txt"


class TestParseErrors:
    """Tests for malformed patch text."""

    def test_empty_text(self) -> None:
        """Text without any file section is an error."""
        with pytest.raises(ParseError, match="no file patches found"):
            parse_patch_set("")

    def test_only_noise(self) -> None:
        """Commit messages alone are not a patch."""
        with pytest.raises(ParseError):
            parse_patch_set("just some words\nand more\n")

    def test_malformed_hunk_header(self) -> None:
        """A broken @@ line names its line number."""
        diff_text = "--- a/f\n+++ b/f\n@@ -1,x +1 @@\n-a\n"

        with pytest.raises(ParseError) as exc_info:
            parse_patch_set(diff_text)

        assert exc_info.value.line_number == 3
        assert "malformed hunk header" in exc_info.value.detail

    def test_truncated_hunk(self) -> None:
        """Running out of lines before the header counts are met is an error."""
        diff_text = "--- a/f\n+++ b/f\n@@ -1,3 +1,3 @@\n a\n b\n"

        with pytest.raises(ParseError, match="ends early"):
            parse_patch_set(diff_text)

    def test_hunk_longer_than_header(self) -> None:
        """Extra body lines after the counts are met are an error."""
        diff_text = "--- a/f\n+++ b/f\n@@ -1 +1 @@\n-a\n+b\n+c\n"

        with pytest.raises(ParseError, match="more lines than its header") as exc_info:
            parse_patch_set(diff_text)

        assert exc_info.value.line_number == 6

    def test_unexpected_line_in_body(self) -> None:
        """Lines with an unknown prefix inside a hunk are an error."""
        diff_text = "--- a/f\n+++ b/f\n@@ -1,2 +1,2 @@\n a\n?b\n"

        with pytest.raises(ParseError, match="unexpected line") as exc_info:
            parse_patch_set(diff_text)

        assert exc_info.value.line_number == 5

    def test_old_header_without_new_header(self) -> None:
        """A --- header must be followed by +++."""
        with pytest.raises(ParseError, match="not followed by"):
            parse_patch_set("--- a/f\n@@ -1 +1 @@\n-a\n+b\n")

    def test_file_section_without_hunks(self) -> None:
        """A file header with no hunks is an error."""
        with pytest.raises(ParseError, match="no hunks"):
            parse_patch_set("--- a/f\n+++ b/f\n")

    def test_hunk_outside_file_section(self) -> None:
        """A hunk with no file header is an error."""
        with pytest.raises(ParseError, match="outside of a file section"):
            parse_patch_set("@@ -1 +1 @@\n-a\n+b\n")

    def test_non_empty_range_at_line_zero(self) -> None:
        """Line 0 can only start an empty range."""
        with pytest.raises(ParseError, match="line 0"):
            parse_patch_set("--- a/f\n+++ b/f\n@@ -0,1 +1 @@\n-a\n+b\n")

    def test_both_sides_dev_null(self) -> None:
        """A file section cannot create and delete at once."""
        with pytest.raises(ParseError, match="both sides"):
            parse_patch_set("--- /dev/null\n+++ /dev/null\n@@ -0,0 +0,0 @@\n")
