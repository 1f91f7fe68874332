"""Virtual filesystem store."""

from .virtual_fs import VirtualFileSystem, ensure_directory

__all__ = [
    "VirtualFileSystem",
    "ensure_directory",
]
