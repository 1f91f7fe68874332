"""Virtual filesystem backed by a local store directory.

Paths handed to :class:`VirtualFileSystem` are absolute POSIX paths such as
``/repo/src/notes``; they are mapped beneath the store root on disk. The
``mkdir`` primitive creates a single level only, so callers that need a whole
chain of directories go through :func:`ensure_directory`.
"""

from __future__ import annotations

import logging
import os
import posixpath
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

_ROOT_PATHS = ("", ".", "/")


class VirtualFileSystem:
    """Filesystem rooted at a local store directory."""

    def __init__(self, root: Path) -> None:
        """
        Initialize the store, creating its root directory if needed.

        Args:
            root: Directory on disk that holds the virtual filesystem
        """
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def resolve(self, path: str) -> Path:
        """Map a virtual path to its location on disk.

        Raises:
            ValueError: If the path escapes the store root
        """
        relative = posixpath.normpath(path.lstrip("/") or ".")
        if relative == ".." or relative.startswith("../"):
            raise ValueError(f"Path escapes the store root: {path}")
        return self.root if relative == "." else self.root / relative

    # --- Primitives ---

    def stat(self, path: str) -> os.stat_result:
        """Stat a path. Raises FileNotFoundError if it does not exist."""
        return self.resolve(path).stat()

    def exists(self, path: str) -> bool:
        """Check whether a path exists."""
        try:
            self.stat(path)
        except FileNotFoundError:
            return False
        return True

    def is_dir(self, path: str) -> bool:
        """Check whether a path exists and is a directory."""
        return self.resolve(path).is_dir()

    def mkdir(self, path: str) -> None:
        """Create one directory level.

        Raises:
            FileExistsError: If the path already exists
            FileNotFoundError: If the parent does not exist
        """
        self.resolve(path).mkdir()

    def read_bytes(self, path: str) -> bytes:
        """Read a file's content."""
        return self.resolve(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        """Write binary content, replacing the file if it exists."""
        self.resolve(path).write_bytes(data)

    def write_text(self, path: str, text: str) -> None:
        """Write UTF-8 text, replacing the file if it exists."""
        # newline="" keeps "\n" on every platform so staging stays byte-stable
        with self.resolve(path).open("w", encoding="utf-8", newline="") as f:
            f.write(text)

    def wipe(self) -> None:
        """Remove everything in the store and start over empty."""
        if self.root.exists():
            shutil.rmtree(self.root)
            logger.info("Wiped store at %s", self.root)
        self.root.mkdir(parents=True, exist_ok=True)


def ensure_directory(fs: VirtualFileSystem, path: str) -> None:
    """Make sure ``path`` and all its ancestors exist.

    Safe to call repeatedly, and safe against another creator winning the
    race for the same directory.

    Raises:
        NotADirectoryError: If the path or one of its ancestors is a file
        OSError: Any other filesystem failure
    """
    target = posixpath.normpath(path) if path else ""
    if target in _ROOT_PATHS or target == "//":
        return

    try:
        fs.stat(target)
    except FileNotFoundError:
        pass
    else:
        if not fs.is_dir(target):
            raise NotADirectoryError(f"Not a directory: {target}")
        return

    parent = posixpath.dirname(target)
    if parent != target and parent not in _ROOT_PATHS:
        ensure_directory(fs, parent)

    try:
        fs.mkdir(target)
        logger.debug("Created directory %s", target)
    except FileExistsError:
        # Lost a race with a concurrent creator
        if not fs.is_dir(target):
            raise
