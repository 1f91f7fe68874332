"""Data models."""

from .document import (
    DESC_KEY,
    PUBLISHED_KEY,
    TAG_KEY,
    AssetFile,
    DocumentContext,
    DocumentMetadata,
    SourceDocument,
    is_published,
)
from .publish_config import DEFAULT_AUTHOR_EMAIL, PublishConfig
from .sync import StageResult, SyncResult, SyncState

__all__ = [
    "DEFAULT_AUTHOR_EMAIL",
    "DESC_KEY",
    "PUBLISHED_KEY",
    "TAG_KEY",
    "AssetFile",
    "DocumentContext",
    "DocumentMetadata",
    "PublishConfig",
    "SourceDocument",
    "StageResult",
    "SyncResult",
    "SyncState",
    "is_published",
]
