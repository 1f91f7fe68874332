"""Tests for VaultRepository."""

from pathlib import Path

import pytest

from pagegit.models import SourceDocument
from pagegit.repositories import VaultRepository, extract_embeds


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    """Create a small vault."""
    vault = tmp_path / "vault"
    (vault / "guides").mkdir(parents=True)
    (vault / "attachments" / "deep").mkdir(parents=True)
    (vault / ".obsidian").mkdir()

    (vault / "index.md").write_text("---\nPublished: true\n---\nHome")
    (vault / "guides" / "setup.md").write_text(
        "---\nPublished: true\nSpecTag: guides\n---\n![[diagram.png|400]]\n![alt](local.jpg)"
    )
    (vault / "guides" / "local.jpg").write_bytes(b"jpg")
    (vault / "attachments" / "diagram.png").write_bytes(b"png-top")
    (vault / "attachments" / "deep" / "diagram.png").write_bytes(b"png-deep")
    (vault / ".obsidian" / "workspace.md").write_text("hidden")
    return vault


@pytest.fixture
def repo(vault_dir: Path) -> VaultRepository:
    """Create a repository over the vault."""
    return VaultRepository(vault_dir)


class TestListDocuments:
    """Tests for listing and reading documents."""

    def test_lists_markdown_only(self, repo: VaultRepository):
        """Only .md files outside hidden directories are listed."""
        paths = [d.path for d in repo.list_documents()]
        assert paths == ["guides/setup.md", "index.md"]

    def test_missing_vault_is_empty(self, tmp_path: Path):
        """A vault directory that does not exist has no documents."""
        assert VaultRepository(tmp_path / "nope").list_documents() == []

    def test_read_text(self, repo: VaultRepository):
        """read_text returns the full file including frontmatter."""
        text = repo.read_text(SourceDocument(path="index.md"))
        assert text == "---\nPublished: true\n---\nHome"

    def test_document_name_and_extension(self):
        """SourceDocument derives name and extension from the path."""
        doc = SourceDocument(path="guides/setup.md")
        assert doc.name == "setup.md"
        assert doc.extension == "md"


class TestGetMetadata:
    """Tests for cached metadata."""

    def test_frontmatter_and_embeds(self, repo: VaultRepository):
        """Metadata carries frontmatter and embedded link targets."""
        meta = repo.get_metadata(SourceDocument(path="guides/setup.md"))
        assert meta.frontmatter == {"Published": True, "SpecTag": "guides"}
        assert meta.embeds == ["diagram.png", "local.jpg"]

    def test_no_frontmatter(self, repo: VaultRepository, vault_dir: Path):
        """A note without frontmatter has empty metadata."""
        (vault_dir / "plain.md").write_text("# Just text")
        repo.reload()
        meta = repo.get_metadata(SourceDocument(path="plain.md"))
        assert meta.frontmatter == {}
        assert meta.embeds == []

    def test_cached_until_reload(self, repo: VaultRepository):
        """The same metadata object is returned while the file is unchanged."""
        doc = SourceDocument(path="index.md")
        assert repo.get_metadata(doc) is repo.get_metadata(doc)


class TestResolveLink:
    """Tests for link resolution."""

    def test_relative_to_source(self, repo: VaultRepository):
        """A link next to the note resolves relative to its folder."""
        asset = repo.resolve_link("local.jpg", "guides/setup.md")
        assert asset is not None
        assert asset.path == "guides/local.jpg"

    def test_exact_vault_path(self, repo: VaultRepository):
        """A full vault path resolves directly."""
        asset = repo.resolve_link("attachments/deep/diagram.png", "index.md")
        assert asset is not None
        assert asset.path == "attachments/deep/diagram.png"

    def test_by_name_prefers_shortest_path(self, repo: VaultRepository):
        """A bare file name resolves to the least nested match."""
        asset = repo.resolve_link("diagram.png", "guides/setup.md")
        assert asset is not None
        assert asset.path == "attachments/diagram.png"

    def test_strips_alias_and_heading(self, repo: VaultRepository):
        """Aliases and heading anchors are ignored."""
        asset = repo.resolve_link("index#Intro|Home", "guides/setup.md")
        assert asset is not None
        assert asset.path == "index.md"

    def test_unresolved_returns_none(self, repo: VaultRepository):
        """Links to nothing resolve to None."""
        assert repo.resolve_link("missing.png", "index.md") is None

    def test_external_returns_none(self, repo: VaultRepository):
        """External URLs are never resolved."""
        assert repo.resolve_link("https://example.com/a.png", "index.md") is None

    def test_read_binary(self, repo: VaultRepository):
        """read_binary returns the asset bytes."""
        asset = repo.resolve_link("attachments/deep/diagram.png", "index.md")
        assert asset is not None
        assert repo.read_binary(asset) == b"png-deep"


class TestExtractEmbeds:
    """Tests for extract_embeds."""

    def test_wiki_and_markdown_embeds_in_order(self):
        """Both embed syntaxes are found in document order."""
        body = (
            "![[a.png|300]] text ![alt](img/b.png \"title\")\n"
            "![x](https://example.com/c.png) ![[Note#Section]]"
        )
        assert extract_embeds(body) == ["a.png", "img/b.png", "Note"]

    def test_plain_links_are_not_embeds(self):
        """Links without the leading ! are not embeds."""
        assert extract_embeds("[[Other note]] and [x](y.png)") == []

    def test_duplicates_removed(self):
        """Each target is listed once."""
        assert extract_embeds("![[a.png]] ![[a.png]]") == ["a.png"]

    def test_angle_brackets_and_encoding(self):
        """Angle-bracketed and URL-encoded targets are unwrapped."""
        assert extract_embeds("![a](<my pic.png>) ![b](my%20pic2.png)") == [
            "my pic.png",
            "my pic2.png",
        ]
