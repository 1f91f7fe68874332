"""Source document domain models."""

import posixpath

from pydantic import BaseModel, Field

PUBLISHED_KEY = "Published"
DESC_KEY = "desc"
TAG_KEY = "SpecTag"


class SourceDocument(BaseModel):
    """A file in the source store, identified by its vault-relative path."""

    path: str  # e.g., "guides/foo.md" (POSIX separators, relative to vault root)

    @property
    def name(self) -> str:
        """File name including extension."""
        return posixpath.basename(self.path)

    @property
    def extension(self) -> str:
        """Extension without the leading dot, as written on disk."""
        _, ext = posixpath.splitext(self.path)
        return ext[1:]


class AssetFile(SourceDocument):
    """A binary file a document links to (image, pdf, ...)."""


class DocumentMetadata(BaseModel):
    """Cached metadata the source store holds for one document."""

    frontmatter: dict = Field(default_factory=dict)
    embeds: list[str] = Field(default_factory=list)  # raw link targets, e.g. "pic.png"


class DocumentContext(BaseModel):
    """Snapshot of everything staging needs for one document.

    Built once per document by the caller so the transformation never reads
    the source store's caches on its own.
    """

    document: SourceDocument
    text: str
    embeds: list[str] = Field(default_factory=list)


def is_published(metadata: dict) -> bool:
    """Check whether frontmatter marks a document as published.

    Accepts the boolean ``True`` and the legacy exact string ``"True"``.
    """
    value = metadata.get(PUBLISHED_KEY)
    return value is True or value == "True"
