"""Clear-cache command for wiping the local store."""

import logging

from ..config import Settings
from ..storage import VirtualFileSystem
from .output import error, info, success

logger = logging.getLogger(__name__)


def run_clear_cache(settings: Settings) -> int:
    """Remove the local store so the next sync starts with a fresh clone.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    info("Now removing fs cache...")
    try:
        VirtualFileSystem(settings.store_root).wipe()
    except OSError as e:
        logger.exception("Failed to wipe %s", settings.store_root)
        error(f"Error: {e}")
        return 1
    success("Successfully removed.")
    return 0
