"""Resolve patch header paths against a project root.

Diff tools write paths like ``a/src/lib.rs`` or ``/tmp/project-1.0/src/lib.rs``:
the first component (or, for absolute paths, the root and the first
component) names a synthetic top-level directory that does not exist in the
project root. The strip depth says how many leading components to drop,
like ``patch -pN``.
"""

from pathlib import Path, PurePosixPath

from vendorpatch.core.constants import DEFAULT_STRIP
from vendorpatch.core.errors import PathSecurityError


def strip_components(header_path: str, strip: int = DEFAULT_STRIP) -> PurePosixPath:
    """Drop the leading components of a header path.

    Components are counted as written, like ``patch -pN``: a leading ``./``
    is a component of its own and repeated slashes add nothing. The root of
    an absolute path counts as one extra component, so ``/pkg/src/a.c``,
    ``pkg/src/a.c`` and ``./src/a.c`` all become ``src/a.c`` at strip
    depth 1.

    Raises:
        PathSecurityError: If nothing is left after stripping, or the rest
            would climb out of the project root.
    """
    if strip < 0:
        raise ValueError(f"strip depth must be >= 0, got {strip}")

    # Splitting drops the root of an absolute path along with empty segments,
    # which is the "+1" an absolute path gets
    named = [segment for segment in header_path.split("/") if segment]
    stripped = PurePosixPath(*named[strip:])

    if not stripped.parts:
        raise PathSecurityError(
            header_path, f"no path left after stripping {strip} component(s)"
        )
    if ".." in stripped.parts:
        raise PathSecurityError(header_path, "path escapes the project root")

    return stripped


def resolve_patch_path(
    project_root: Path, header_path: str, strip: int = DEFAULT_STRIP
) -> Path:
    """Map a patch header path to a file under ``project_root``.

    No existence check is made; a missing file shows up when it is read.

    Args:
        project_root: Directory holding the unpatched source tree.
        header_path: Path as written after ``---`` or ``+++``.
        strip: Leading components to drop from a relative path.

    Returns:
        ``project_root`` joined with the stripped path.
    """
    return project_root.joinpath(*strip_components(header_path, strip).parts)
