"""Content staging: write published notes and their images into the working tree."""

from __future__ import annotations

import logging
import posixpath

import frontmatter

from ..models import (
    DESC_KEY,
    TAG_KEY,
    DocumentContext,
    StageResult,
    is_published,
)
from ..repositories import SourceStoreProtocol
from ..storage import VirtualFileSystem, ensure_directory
from .summary import summarize

logger = logging.getLogger(__name__)

REPO_DIR = "/repo"
NOTES_DIR = "src/notes"
IMAGES_DIR = "public/images"
DEFAULT_TAG = "Uncategorized"
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp"})


class StagingError(Exception):
    """A document cannot be placed in the working tree."""

    pass


class ContentStager:
    """Copies the published subset of a source store into the working tree.

    Layout written below ``repo_dir``:
    - ``src/notes/<SpecTag>/<note>.md`` for each published note
    - ``public/images/<image>`` for each image the note embeds

    Files are only ever created or overwritten; notes that stop being
    published keep whatever was staged for them earlier.
    """

    def __init__(
        self,
        store: SourceStoreProtocol,
        fs: VirtualFileSystem,
        repo_dir: str = REPO_DIR,
    ) -> None:
        """Initialize the stager.

        Args:
            store: Source store to read notes and assets from
            fs: Virtual filesystem holding the working tree
            repo_dir: Working tree root in the virtual filesystem
        """
        self._store = store
        self._fs = fs
        self.notes_dir = posixpath.join(repo_dir, NOTES_DIR)
        self.images_dir = posixpath.join(repo_dir, IMAGES_DIR)

    def stage_all(self) -> StageResult:
        """Stage every published document of the store.

        Returns:
            StageResult with the paths written and the number skipped
        """
        result = StageResult()

        ensure_directory(self._fs, self.notes_dir)
        ensure_directory(self._fs, self.images_dir)

        for document in self._store.list_documents():
            metadata = self._store.get_metadata(document)
            if not is_published(metadata.frontmatter):
                result.skipped += 1
                continue

            context = DocumentContext(
                document=document,
                text=self._store.read_text(document),
                embeds=metadata.embeds,
            )
            if self.stage_document(context, result) is None:
                result.skipped += 1

        logger.info(
            "Staged %d document(s) and %d asset(s), skipped %d",
            result.published_count,
            result.asset_count,
            result.skipped,
        )
        return result

    def stage_document(
        self, context: DocumentContext, result: StageResult | None = None
    ) -> str | None:
        """Transform one document and write it into the working tree.

        Args:
            context: Snapshot of the document's text and embedded links
            result: Optional result to record written paths in

        Returns:
            The working tree path written, or None if the document is not published
        """
        post = frontmatter.loads(context.text)
        if not is_published(post.metadata):
            logger.debug("Skipping unpublished %s", context.document.path)
            return None

        if not post.metadata.get(DESC_KEY):
            post.metadata[DESC_KEY] = summarize(post.content)

        dest_dir = self.tag_directory(post.metadata.get(TAG_KEY))
        ensure_directory(self._fs, dest_dir)

        for asset_path in self._copy_assets(context):
            if result is not None and asset_path not in result.assets:
                result.assets.append(asset_path)

        dest_path = posixpath.join(dest_dir, context.document.name)
        self._fs.write_text(dest_path, frontmatter.dumps(post, sort_keys=False))
        logger.debug("Staged %s -> %s", context.document.path, dest_path)

        if result is not None:
            result.published.append(dest_path)
        return dest_path

    def tag_directory(self, tag: object) -> str:
        """Directory a document with the given SpecTag is placed in.

        Raises:
            StagingError: If the tag would place the document outside the notes root
        """
        name = str(tag).strip() if tag else ""
        if not name:
            name = DEFAULT_TAG

        dest_dir = posixpath.normpath(posixpath.join(self.notes_dir, name))
        if not dest_dir.startswith(self.notes_dir + "/"):
            raise StagingError(f"{TAG_KEY} {name!r} points outside {self.notes_dir}")
        return dest_dir

    def _copy_assets(self, context: DocumentContext) -> list[str]:
        """Copy embedded images byte-for-byte into the images directory."""
        written: list[str] = []
        for link in context.embeds:
            asset = self._store.resolve_link(link, context.document.path)
            if asset is None or asset.extension.lower() not in IMAGE_EXTENSIONS:
                continue

            dest_path = posixpath.join(self.images_dir, asset.name)
            self._fs.write_bytes(dest_path, self._store.read_binary(asset))
            logger.debug("Copied asset %s -> %s", asset.path, dest_path)
            written.append(dest_path)
        return written
