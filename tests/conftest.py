"""Shared pytest fixtures for vendorpatch tests."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project root inside tmp_path."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_file(project: Path) -> Callable[[str, str], Path]:
    """Write a file under the project root without newline translation."""

    def _write(relative: str, content: str) -> Path:
        path = project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at tmp_path so no real ~/.vendorpatch is read."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("VENDORPATCH_LOG", raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_vendorpatch_logger() -> Iterator[None]:
    """Undo configure_logging() so handlers don't outlive a test's captured streams."""
    pkg_logger = logging.getLogger("vendorpatch")
    yield
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True
