"""Source store protocol."""

from typing import Protocol

from ..models import AssetFile, DocumentMetadata, SourceDocument


class SourceStoreProtocol(Protocol):
    """Read-only interface to the document collection being published.

    The filesystem vault is the only implementation shipped, but staging only
    depends on this contract.
    """

    def list_documents(self) -> list[SourceDocument]:
        """List every markdown document that may be published."""
        ...

    def read_text(self, document: SourceDocument) -> str:
        """Read a document's full text, frontmatter included."""
        ...

    def get_metadata(self, document: SourceDocument) -> DocumentMetadata:
        """Get the cached frontmatter and embedded links of a document."""
        ...

    def resolve_link(self, link: str, source_path: str) -> AssetFile | None:
        """Resolve a link written in ``source_path`` to an existing file.

        Returns:
            The linked file, or None if nothing in the store matches.
        """
        ...

    def read_binary(self, asset: AssetFile) -> bytes:
        """Read a linked file's content."""
        ...
