"""Filesystem vault acting as the source store."""

from __future__ import annotations

import logging
import posixpath
import re
from collections.abc import Iterator
from pathlib import Path
from urllib.parse import unquote

import frontmatter

from ..models import AssetFile, DocumentMetadata, SourceDocument

logger = logging.getLogger(__name__)

# ![[target]], ![[target|300]], ![[target#section]]
WIKI_EMBED_PATTERN = re.compile(r"!\[\[([^\]|#]+)(?:#[^\]|]*)?(?:\|[^\]]*)?\]\]")
# ![alt](target) and ![alt](<target with spaces> "title")
MARKDOWN_EMBED_PATTERN = re.compile(r"!\[[^\]]*\]\(\s*(<[^>]+>|[^)\s]+)(?:\s+\"[^\"]*\")?\s*\)")
EXTERNAL_LINK_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


class VaultRepository:
    """
    Source store for a vault of markdown notes on disk.

    Notes are .md files with YAML front matter anywhere below the vault root.
    Hidden directories (.obsidian, .git, .trash) are not part of the vault.
    Metadata is cached per file and refreshed when the file's mtime changes.
    """

    def __init__(self, vault_root: Path) -> None:
        """
        Initialize repository.

        Args:
            vault_root: Path to the vault directory
        """
        self.vault_root = vault_root
        self._metadata: dict[str, tuple[float, DocumentMetadata]] = {}
        self._files: list[str] | None = None

    # --- Source Store Operations ---

    def list_documents(self) -> list[SourceDocument]:
        """List all markdown notes, sorted by path."""
        return [SourceDocument(path=p) for p in self._all_files() if p.endswith(".md")]

    def read_text(self, document: SourceDocument) -> str:
        """Read a note's full text."""
        return self._abspath(document.path).read_text(encoding="utf-8")

    def get_metadata(self, document: SourceDocument) -> DocumentMetadata:
        """Get a note's frontmatter and embedded links, reusing the cache when fresh."""
        filepath = self._abspath(document.path)
        mtime = filepath.stat().st_mtime
        cached = self._metadata.get(document.path)
        if cached is not None and cached[0] == mtime:
            return cached[1]

        metadata = self._parse_metadata(filepath)
        self._metadata[document.path] = (mtime, metadata)
        return metadata

    def resolve_link(self, link: str, source_path: str) -> AssetFile | None:
        """Resolve a link the way the note editor does.

        Tries, in order: the link as a vault path, the link relative to the
        linking note's folder, then the first file with a matching name
        (shortest path wins).
        """
        target = _clean_link(link)
        if not target:
            return None

        files = self._all_files()
        file_set = set(files)

        candidates = [
            posixpath.normpath(target.lstrip("/")),
            posixpath.normpath(posixpath.join(posixpath.dirname(source_path), target)),
        ]
        for candidate in candidates:
            for path in (candidate, f"{candidate}.md"):
                if path in file_set:
                    return AssetFile(path=path)

        name = posixpath.basename(target)
        matches = [p for p in files if posixpath.basename(p) in (name, f"{name}.md")]
        if not matches:
            logger.debug("Unresolved link %r in %s", link, source_path)
            return None
        matches.sort(key=lambda p: (p.count("/"), p))
        return AssetFile(path=matches[0])

    def read_binary(self, asset: AssetFile) -> bytes:
        """Read a linked file's bytes."""
        return self._abspath(asset.path).read_bytes()

    # --- Reload Support ---

    def reload(self) -> None:
        """Clear caches and rescan the vault on next access."""
        self._metadata.clear()
        self._files = None

    # --- Private Methods ---

    def _abspath(self, path: str) -> Path:
        return self.vault_root / Path(*path.split("/"))

    def _all_files(self) -> list[str]:
        if self._files is None:
            self._files = sorted(self._iter_files())
        return self._files

    def _iter_files(self) -> Iterator[str]:
        """Yield vault-relative POSIX paths of all files outside hidden directories."""
        if not self.vault_root.exists():
            return
        for filepath in self.vault_root.rglob("*"):
            relative = filepath.relative_to(self.vault_root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if filepath.is_file():
                yield relative.as_posix()

    def _parse_metadata(self, filepath: Path) -> DocumentMetadata:
        post = frontmatter.load(filepath)  # pyrefly: ignore[bad-argument-type]
        return DocumentMetadata(
            frontmatter=dict(post.metadata),
            embeds=extract_embeds(post.content),
        )


def extract_embeds(body: str) -> list[str]:
    """Extract embedded link targets from a note body, in order, without duplicates."""
    found: list[tuple[int, str]] = []
    for match in WIKI_EMBED_PATTERN.finditer(body):
        found.append((match.start(), match.group(1).strip()))
    for match in MARKDOWN_EMBED_PATTERN.finditer(body):
        target = match.group(1)
        if target.startswith("<") and target.endswith(">"):
            target = target[1:-1]
        if EXTERNAL_LINK_PATTERN.match(target):
            continue
        found.append((match.start(), unquote(target.strip())))

    embeds: list[str] = []
    for _, target in sorted(found):
        if target and target not in embeds:
            embeds.append(target)
    return embeds


def _clean_link(link: str) -> str:
    """Strip alias, heading and block references from a link target."""
    target = link.split("|", 1)[0].split("#", 1)[0].strip()
    if EXTERNAL_LINK_PATTERN.match(target):
        return ""
    return unquote(target)
