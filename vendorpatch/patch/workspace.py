"""File access for patch runs against a project root.

A Workspace resolves header paths and performs every read, write and
removal a patch run makes. In dry-run mode changes are kept in memory,
so a later file patch in the same run sees what an earlier one produced
while the tree on disk is never touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from vendorpatch.core.constants import DEFAULT_STRIP
from vendorpatch.core.errors import ReadError, WriteError
from vendorpatch.core.paths import atomic_write_text, read_text_exact
from vendorpatch.patch.applier import TrailingPolicy
from vendorpatch.patch.resolver import resolve_patch_path

if TYPE_CHECKING:
    from vendorpatch.config.schema import PatchConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatchOptions:
    """Settings for one patch run.

    Attributes:
        strip: Leading header path components to drop (-pN).
        trailing: What happens to old lines after the last hunk.
        encoding: Text encoding of patch files and patched files.
        create_parents: Create missing parent directories before writing.
    """

    strip: int = DEFAULT_STRIP
    trailing: TrailingPolicy = TrailingPolicy.KEEP
    encoding: str = "utf-8"
    create_parents: bool = True

    @classmethod
    def from_config(cls, patch_config: PatchConfig) -> PatchOptions:
        """Build options from the ``patch`` section of the config."""
        return cls(
            strip=patch_config.strip,
            trailing=TrailingPolicy(patch_config.trailing),
            encoding=patch_config.encoding,
            create_parents=patch_config.create_parents,
        )


class Workspace:
    """A project root plus the options used to patch it."""

    def __init__(
        self,
        root: Path,
        options: PatchOptions | None = None,
        dry_run: bool = False,
    ) -> None:
        self.root = Path(root)
        self.options = options or PatchOptions()
        self.dry_run = dry_run
        # Dry-run results: path -> content, None for a removed file
        self._pending: dict[Path, str | None] = {}

    def resolve(self, header_path: str) -> Path:
        """Resolve a patch header path under the root."""
        path = resolve_patch_path(self.root, header_path, self.options.strip)
        logger.debug("Resolved %s -> %s", header_path, path)
        return path

    def exists(self, path: Path) -> bool:
        if path in self._pending:
            return self._pending[path] is not None
        return path.exists()

    def read(self, path: Path) -> str:
        """Read a whole file as text.

        Raises:
            ReadError: If the file is missing, unreadable or not valid text.
        """
        if path in self._pending:
            content = self._pending[path]
            if content is None:
                raise ReadError(path, "file was removed earlier in this run")
            return content
        try:
            return read_text_exact(path, self.options.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", path, e)
            raise ReadError(path, str(e)) from e

    def write(self, path: Path, content: str) -> None:
        """Replace a file's content atomically.

        Raises:
            WriteError: If the file or its parent directory cannot be written.
        """
        if self.dry_run:
            self._pending[path] = content
            return
        try:
            if self.options.create_parents:
                path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_text(path, content, self.options.encoding)
        except (OSError, UnicodeEncodeError) as e:
            logger.error("Failed to write %s: %s", path, e)
            raise WriteError(path, str(e)) from e
        logger.info("Wrote %s", path)

    def remove(self, path: Path) -> None:
        """Remove a file.

        Raises:
            WriteError: If the file cannot be removed.
        """
        if self.dry_run:
            self._pending[path] = None
            return
        try:
            path.unlink()
        except OSError as e:
            logger.error("Failed to remove %s: %s", path, e)
            raise WriteError(path, str(e)) from e
        logger.info("Removed %s", path)

    def pending_paths(self) -> list[Path]:
        """Paths a dry run would have written or removed."""
        return list(self._pending)
