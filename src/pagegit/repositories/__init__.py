"""Repository layer for data access."""

from .protocol import SourceStoreProtocol
from .vault import VaultRepository, extract_embeds

__all__ = [
    "SourceStoreProtocol",
    "VaultRepository",
    "extract_embeds",
]
