"""Sync-related data models."""

from dataclasses import dataclass, field
from enum import Enum


class SyncState(str, Enum):
    """Progress of a single sync invocation."""

    UNINITIALIZED = "uninitialized"  # Working tree not prepared yet
    INITIALIZED = "initialized"  # Cloned or pulled
    STAGED = "staged"  # Published notes written into the working tree
    COMMITTED = "committed"  # Local commit created
    PUSHED = "pushed"  # Commit pushed to the remote


@dataclass
class StageResult:
    """Result of staging the vault into the working tree."""

    published: list[str] = field(default_factory=list)  # Working tree paths written
    skipped: int = 0  # Documents not published
    assets: list[str] = field(default_factory=list)  # Asset paths written

    @property
    def published_count(self) -> int:
        """Number of documents written."""
        return len(self.published)

    @property
    def asset_count(self) -> int:
        """Number of assets copied."""
        return len(self.assets)


@dataclass
class SyncResult:
    """Result of a complete sync."""

    state: SyncState = SyncState.UNINITIALIZED
    cloned: bool = False  # True if the repo was cloned, False if pulled
    commit_id: str | None = None  # Hex id of the commit created
    stage: StageResult = field(default_factory=StageResult)
