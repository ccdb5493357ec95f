"""Filesystem helpers for reading and writing patched files.

Patched files are matched and written byte-for-byte, so neither helper
translates line endings.
"""

import os
import stat
import tempfile
from pathlib import Path


def read_text_exact(path: Path, encoding: str = "utf-8") -> str:
    """Read a whole text file without newline translation.

    ``Path.read_text`` turns ``\\r\\n`` into ``\\n``; patches are matched
    byte-for-byte so line endings must survive the read.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the content is not valid in ``encoding``.
    """
    with open(path, encoding=encoding, newline="") as f:
        return f.read()


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``content`` in a single rename.

    The new content goes to a sibling temp file first, which then takes the
    target's place, so readers see either the old file or the new one. A
    replaced file keeps its permission bits.

    Raises:
        OSError: If the temp file cannot be created, written or renamed.
        UnicodeEncodeError: If ``content`` cannot be encoded.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".part")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as out:
            out.write(content)
        if path.exists():
            tmp.chmod(stat.S_IMODE(path.stat().st_mode))
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
