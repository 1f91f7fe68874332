"""Tests for SyncOrchestrator."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from dulwich.client import HTTPUnauthorized
from dulwich.errors import GitProtocolError

from pagegit.models import PublishConfig, SyncState
from pagegit.repositories import VaultRepository
from pagegit.staging import ContentStager
from pagegit.storage import VirtualFileSystem
from pagegit.sync import (
    TOKEN_PASSWORD,
    GitRepository,
    SyncConfigError,
    SyncInProgressError,
    SyncOrchestrator,
)
from pagegit.transport import Credentials


@pytest.fixture
def config() -> PublishConfig:
    """Create a complete configuration."""
    return PublishConfig(
        gitUrl="https://github.com/alice/site.git",
        gitToken="ghp_secret",
        username="alice",
    )


@pytest.fixture
def fs(tmp_path: Path) -> VirtualFileSystem:
    """Create the store."""
    return VirtualFileSystem(tmp_path / "store")


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    """Create a vault with one published note."""
    vault = tmp_path / "vault"
    vault.mkdir()
    (vault / "foo.md").write_text("---\nPublished: true\nSpecTag: guides\n---\n# Hi\nHello world")
    return vault


@pytest.fixture
def repository() -> MagicMock:
    """Create a mocked git repository."""
    repository = MagicMock(spec=GitRepository)
    repository.commit.return_value = "c" * 40
    return repository


@pytest.fixture
def notices() -> list[str]:
    """Collect progress notices."""
    return []


@pytest.fixture
def orchestrator(config, fs, vault_dir, repository, notices) -> SyncOrchestrator:
    """Create an orchestrator with a mocked repository."""
    stager = ContentStager(VaultRepository(vault_dir), fs)
    return SyncOrchestrator(config, fs, stager, repository=repository, notify=notices.append)


class TestInitialization:
    """Tests for choosing clone or pull."""

    def test_clones_when_working_tree_absent(self, orchestrator, repository, fs):
        """No working tree means clone, never pull."""
        assert not fs.exists("/repo")

        result = orchestrator.sync()

        repository.clone.assert_called_once_with(depth=1)
        repository.pull.assert_not_called()
        assert result.cloned is True

    def test_pulls_when_working_tree_present(self, orchestrator, repository, fs):
        """An existing working tree means pull, never clone."""
        fs.mkdir("/repo")

        result = orchestrator.sync()

        repository.pull.assert_called_once_with()
        repository.clone.assert_not_called()
        assert result.cloned is False


class TestSyncSequence:
    """Tests for the full sync sequence."""

    def test_runs_all_steps_in_order(self, orchestrator, repository, fs, notices):
        """Clone, stage, add, commit and push run in order."""
        result = orchestrator.sync()

        steps = [name for name, _, _ in repository.method_calls]
        assert steps == ["clone", "add_all", "commit", "push"]
        assert fs.exists("/repo/src/notes/guides/foo.md")
        assert result.state == SyncState.PUSHED
        assert orchestrator.state == SyncState.PUSHED
        assert result.commit_id == "c" * 40
        assert result.stage.published_count == 1
        assert notices[0] == "Cloning repo (One time)..."
        assert notices[-1] == "Pushed to remote. Deployment triggered."

    def test_commit_identity_and_message(self, orchestrator, repository):
        """Commits use the configured author and a timestamped message."""
        orchestrator.sync()

        kwargs = repository.commit.call_args.kwargs
        assert kwargs["author"] == "alice <mobile@obsidian.md>"
        assert kwargs["message"].startswith("Mobile Sync ")
        assert kwargs["message"].endswith("Z")

    def test_push_failure_stops_after_commit(self, orchestrator, repository):
        """A failed push leaves the local commit and reports the error."""
        repository.push.side_effect = GitProtocolError("remote hung up")

        with pytest.raises(GitProtocolError):
            orchestrator.sync()

        repository.commit.assert_called_once()
        assert orchestrator.state == SyncState.COMMITTED

    def test_auth_failure_stops_before_staging(self, orchestrator, repository, fs):
        """A rejected clone aborts before anything is staged."""
        repository.clone.side_effect = HTTPUnauthorized(None, "https://github.com")

        with pytest.raises(HTTPUnauthorized):
            orchestrator.sync()

        repository.add_all.assert_not_called()
        assert not fs.exists("/repo/src/notes")
        assert orchestrator.state == SyncState.UNINITIALIZED

    def test_rerun_after_failure(self, orchestrator, repository, fs):
        """Running again after a failure starts over and pulls."""
        repository.push.side_effect = [GitProtocolError("boom"), None]

        with pytest.raises(GitProtocolError):
            orchestrator.sync()
        result = orchestrator.sync()

        assert result.state == SyncState.PUSHED
        repository.pull.assert_called_once()


class TestGuards:
    """Tests for configuration checks and single-flight."""

    def test_missing_config_raises(self, fs, vault_dir, repository):
        """Unconfigured remote settings fail before any I/O."""
        stager = ContentStager(VaultRepository(vault_dir), fs)
        orchestrator = SyncOrchestrator(PublishConfig(), fs, stager, repository=repository)

        with pytest.raises(SyncConfigError, match="gitUrl, gitToken"):
            orchestrator.sync()

        repository.clone.assert_not_called()

    def test_second_sync_rejected_while_running(self, orchestrator, repository):
        """A sync started during another sync is refused."""
        repository.clone.side_effect = lambda depth: orchestrator.sync()

        with pytest.raises(SyncInProgressError):
            orchestrator.sync()

        assert not orchestrator.is_running

    def test_clear_cache_wipes_store(self, orchestrator, fs, notices):
        """Clearing the cache removes the working tree."""
        orchestrator.sync()
        assert fs.exists("/repo")

        orchestrator.clear_cache()

        assert not fs.exists("/repo")
        assert notices[-1] == "Successfully removed."


class TestCredentials:
    """Tests for credential injection."""

    def test_token_as_username(self, orchestrator):
        """The token is the username with the fixed password."""
        assert orchestrator.credentials() == Credentials("ghp_secret", TOKEN_PASSWORD)

    def test_default_repository_uses_callback(self, config, fs, vault_dir):
        """The built-in repository asks the orchestrator for credentials lazily."""
        stager = ContentStager(VaultRepository(vault_dir), fs)
        orchestrator = SyncOrchestrator(config, fs, stager)

        repository = orchestrator._repository
        assert isinstance(repository, GitRepository)
        assert repository.url == "https://github.com/alice/site.git"
        assert "ghp_secret" not in repository.url

        config.git_token = "ghp_rotated"
        assert repository._credentials() == Credentials("ghp_rotated", TOKEN_PASSWORD)
