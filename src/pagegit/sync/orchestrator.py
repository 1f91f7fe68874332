"""Sync orchestrator: clone or pull, stage, commit, push."""

from __future__ import annotations

import logging
import posixpath
import threading
from collections.abc import Callable

from ..models import PublishConfig, SyncResult, SyncState
from ..staging import REPO_DIR, ContentStager
from ..storage import VirtualFileSystem, ensure_directory
from ..transport import Credentials
from ..utils import now_utc, to_iso
from .errors import SyncConfigError, SyncInProgressError
from .git_repository import GitRepository

logger = logging.getLogger(__name__)

# Password sent alongside a personal access token used as the username
TOKEN_PASSWORD = "x-oauth-basic"
COMMIT_MESSAGE_PREFIX = "Mobile Sync"

Notifier = Callable[[str], None]


class SyncOrchestrator:
    """Runs one publish cycle from start to finish.

    States advance UNINITIALIZED -> INITIALIZED -> STAGED -> COMMITTED -> PUSHED.
    A failure stops the sequence where it happened; nothing is rolled back.
    Running sync again from the top is the recovery path: staging is
    idempotent and a commit left unpushed goes out with the next push.
    """

    def __init__(
        self,
        config: PublishConfig,
        fs: VirtualFileSystem,
        stager: ContentStager,
        repository: GitRepository | None = None,
        notify: Notifier | None = None,
        repo_dir: str = REPO_DIR,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            config: Remote URL, token and author identity
            fs: Virtual filesystem holding the working tree
            stager: Pipeline writing published notes into the working tree
            repository: Git operations (built from config if omitted)
            notify: Receives short progress messages for the user
            repo_dir: Working tree root in the virtual filesystem
            timeout: HTTP timeout in seconds for the default repository
        """
        self._config = config
        self._fs = fs
        self._stager = stager
        self._notify = notify or (lambda message: None)
        self._repo_dir = repo_dir
        self._repository = repository or GitRepository(
            work_tree=fs.resolve(repo_dir),
            url=config.git_url,
            credentials=self.credentials,
            branch=config.branch,
            timeout=timeout,
        )
        self._lock = threading.Lock()
        self.state = SyncState.UNINITIALIZED

    def credentials(self) -> Credentials:
        """Credentials for one authenticated request, read from config at call time."""
        return Credentials(username=self._config.git_token, password=TOKEN_PASSWORD)

    @property
    def is_running(self) -> bool:
        """Whether a sync is currently in flight."""
        return self._lock.locked()

    def sync(self) -> SyncResult:
        """Publish the vault: clone or pull, stage, commit and push.

        Returns:
            SyncResult describing what was done

        Raises:
            SyncInProgressError: Another sync on this orchestrator is running
            SyncConfigError: gitUrl or gitToken is not configured
        """
        if not self._lock.acquire(blocking=False):
            raise SyncInProgressError("A sync is already running")
        try:
            return self._run()
        finally:
            self._lock.release()

    def clear_cache(self) -> None:
        """Wipe the local store so the next sync clones from scratch."""
        if self.is_running:
            raise SyncInProgressError("Cannot clear the cache while a sync is running")
        self._notify("Now removing fs cache...")
        self._fs.wipe()
        self.state = SyncState.UNINITIALIZED
        self._notify("Successfully removed.")

    # --- Private Methods ---

    def _run(self) -> SyncResult:
        self._validate_config()
        self.state = SyncState.UNINITIALIZED
        result = SyncResult()

        if not self._fs.exists(self._repo_dir):
            self._notify("Cloning repo (One time)...")
            ensure_directory(self._fs, posixpath.dirname(self._repo_dir))
            self._repository.clone(depth=1)
            result.cloned = True
        else:
            self._notify("Pulling repo...")
            self._repository.pull()
        self._advance(result, SyncState.INITIALIZED)

        self._notify("Preparing files...")
        result.stage = self._stager.stage_all()
        self._advance(result, SyncState.STAGED)

        self._notify("Gitting...")
        self._repository.add_all()
        result.commit_id = self._repository.commit(
            message=f"{COMMIT_MESSAGE_PREFIX} {to_iso(now_utc())}",
            author=self._config.author,
        )
        self._advance(result, SyncState.COMMITTED)

        self._repository.push()
        self._advance(result, SyncState.PUSHED)
        self._notify("Pushed to remote. Deployment triggered.")
        return result

    def _advance(self, result: SyncResult, state: SyncState) -> None:
        logger.info("Sync state: %s -> %s", self.state.value, state.value)
        self.state = state
        result.state = state

    def _validate_config(self) -> None:
        required = {"gitUrl": self._config.git_url, "gitToken": self._config.git_token}
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise SyncConfigError(f"Missing configuration: {', '.join(missing)}")
