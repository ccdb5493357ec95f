"""Typed exception hierarchy for vendorpatch."""

from __future__ import annotations

from pathlib import Path


class VendorPatchError(Exception):
    """Base class for all vendorpatch errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(VendorPatchError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class LoadError(VendorPatchError):
    """Raised when a JSON file cannot be loaded."""

    pass


# === Patch engine errors ===


class PatchError(VendorPatchError):
    """Base class for every failure raised while applying a patch file."""


class ReadError(PatchError):
    """The patch file or a file it touches could not be read as text."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to read {self.path}: {reason}")


class WriteError(PatchError):
    """The patched content could not be written (or the file removed)."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")


class ParseError(PatchError):
    """Patch text is not well-formed multi-file unified diff syntax.

    Attributes:
        detail: What was wrong.
        line_number: 1-based line in the patch text, or None if not tied to a line.
        path: Patch file the text came from, once known.
    """

    def __init__(
        self,
        detail: str,
        line_number: int | None = None,
        path: str | Path | None = None,
    ) -> None:
        self.detail = detail
        self.line_number = line_number
        self.path = Path(path) if path is not None else None
        super().__init__(self._format())

    def _format(self) -> str:
        where = f"line {self.line_number}: " if self.line_number is not None else ""
        source = f"{self.path}: " if self.path is not None else ""
        return f"Failed to parse patch: {source}{where}{self.detail}"

    def with_path(self, path: str | Path) -> ParseError:
        """Attach the patch file path and refresh the message."""
        self.path = Path(path)
        self.message = self._format()
        self.args = (self.message,)
        return self


class PathSecurityError(PatchError):
    """Raised when a patch header path would resolve outside the project root."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Path security violation for '{path}': {reason}")


class ApplyError(PatchError):
    """A hunk could not be applied to the old file content.

    Attributes:
        hunk_index: 0-based position of the hunk within its file patch.
        hunk_header: The ``@@ ... @@`` header of the failing hunk.
        line_index: 0-based index into the old file's lines.
        expected: Text the patch expected at ``line_index``.
        actual: Text found there, or None past end of file.
        file_path: Header path of the file patch, attached by the runner.
    """

    kind = "hunk failed"

    def __init__(
        self,
        hunk_index: int,
        hunk_header: str,
        line_index: int,
        expected: str | None,
        actual: str | None,
    ) -> None:
        self.hunk_index = hunk_index
        self.hunk_header = hunk_header
        self.line_index = line_index
        self.expected = expected
        self.actual = actual
        self.file_path: str | None = None
        super().__init__(self._format())

    def _describe(self) -> str:
        wanted = "end of file" if self.expected is None else repr(self.expected)
        found = "end of file" if self.actual is None else repr(self.actual)
        return f"{self.kind} at line {self.line_index}: expected {wanted} but found {found}"

    def _format(self) -> str:
        target = f" to {self.file_path}" if self.file_path else ""
        return (
            f"Failed to apply hunk {self.hunk_index + 1}{target} "
            f"({self.hunk_header}): {self._describe()}"
        )

    def with_file(self, file_path: str) -> ApplyError:
        """Attach the file patch path and refresh the message."""
        self.file_path = file_path
        self.message = self._format()
        self.args = (self.message,)
        return self


class ContextMismatch(ApplyError):
    """A context line does not match the old file at the cursor."""

    kind = "context mismatch"


class RemovalMismatch(ApplyError):
    """A line to be removed does not match the old file at the cursor."""

    kind = "line to be removed not found"


class HunkOutOfRange(ApplyError):
    """A hunk starts before the previous hunk ended or past end of file."""

    kind = "hunk out of range"

    def __init__(
        self, hunk_index: int, hunk_header: str, line_index: int, reason: str
    ) -> None:
        self.reason = reason
        super().__init__(hunk_index, hunk_header, line_index, None, None)

    def _describe(self) -> str:
        return f"{self.kind} at line {self.line_index}: {self.reason}"
