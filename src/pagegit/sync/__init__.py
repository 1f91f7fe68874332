"""Repository sync package."""

from .errors import PushRejectedError, SyncConfigError, SyncError, SyncInProgressError
from .git_repository import GitRepository, current_branch_ref
from .orchestrator import COMMIT_MESSAGE_PREFIX, TOKEN_PASSWORD, SyncOrchestrator

__all__ = [
    "COMMIT_MESSAGE_PREFIX",
    "TOKEN_PASSWORD",
    "GitRepository",
    "PushRejectedError",
    "SyncConfigError",
    "SyncError",
    "SyncInProgressError",
    "SyncOrchestrator",
    "current_branch_ref",
]
