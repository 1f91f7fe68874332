"""Local git repository operations against an HTTPS remote."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from urllib.parse import urlparse

import httpx
from dulwich import porcelain
from dulwich.repo import Repo

from ..transport import BufferedHttpGitClient, BufferedHttpTransport, CredentialsCallback
from .errors import PushRejectedError, SyncError

logger = logging.getLogger(__name__)

HEADS_PREFIX = b"refs/heads/"
ORIGIN_PREFIX = b"refs/remotes/origin/"


class GitRepository:
    """Clone, pull, commit and push one working tree.

    Every network operation opens its own buffered transport and asks the
    credentials callback for a username/password at request time, so the
    token never ends up in the remote URL or in .git/config.
    """

    def __init__(
        self,
        work_tree: Path,
        url: str,
        credentials: CredentialsCallback,
        branch: str | None = None,
        timeout: float = 60.0,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the repository wrapper.

        Args:
            work_tree: Directory of the working tree on disk
            url: HTTPS URL of the remote repository
            credentials: Called for basic-auth credentials on each request
            branch: Branch to clone (default: the remote's HEAD)
            timeout: HTTP timeout in seconds
            http_transport: Optional httpx transport (for tests)
        """
        self.work_tree = work_tree.resolve()
        self.url = url
        self.branch = branch
        self._credentials = credentials
        self._timeout = timeout
        self._http_transport = http_transport

    @property
    def remote_path(self) -> str:
        """Path component of the remote URL, as dulwich clients expect it."""
        return urlparse(self.url).path

    # --- Network Operations ---

    def clone(self, depth: int | None = 1) -> None:
        """Clone the remote into the working tree directory.

        The working tree directory must not exist; its parent must.
        """
        logger.info("Cloning %s into %s (depth=%s)", self.url, self.work_tree, depth)
        with self._open_client() as client:
            repo = client.clone(
                self.remote_path,
                str(self.work_tree),
                mkdir=True,
                branch=self.branch or None,
                depth=depth,
                progress=_log_progress,
            )
            repo.close()

    def pull(self) -> bool:
        """Fetch the remote and fast-forward the current branch.

        Returns:
            True if the working tree moved to a new commit

        Raises:
            dulwich.porcelain.DivergedBranches: Local and remote histories diverged
        """
        with Repo(str(self.work_tree)) as repo, self._open_client() as client:
            result = client.fetch(self.remote_path, repo, progress=_log_progress)
            branch_ref = current_branch_ref(repo)

            remote_sha = result.refs.get(branch_ref)
            if remote_sha is None:
                logger.warning("Remote has no %s, nothing to pull", branch_ref.decode())
                return False
            repo.refs[ORIGIN_PREFIX + branch_ref[len(HEADS_PREFIX) :]] = remote_sha

            local_sha = repo.refs[branch_ref] if branch_ref in repo.refs else None
            if local_sha == remote_sha:
                logger.info("Already up to date")
                return False

            if local_sha is not None:
                porcelain.check_diverged(repo, local_sha, remote_sha)
            # Moves the branch HEAD points at, the index and the files together
            porcelain.reset(repo, "hard", remote_sha)
            logger.info("Fast-forwarded %s to %s", branch_ref.decode(), remote_sha.decode())
            return True

    def push(self) -> None:
        """Push the current branch to the remote.

        Raises:
            PushRejectedError: The remote refused the update
        """
        with Repo(str(self.work_tree)) as repo, self._open_client() as client:
            branch_ref = current_branch_ref(repo)
            local_sha = repo.refs[branch_ref]

            def update_refs(refs: dict[bytes, bytes]) -> dict[bytes, bytes]:
                return {branch_ref: local_sha}

            result = client.send_pack(
                self.remote_path,
                update_refs,
                generate_pack_data=repo.generate_pack_data,
                progress=_log_progress,
            )

            rejected = {
                ref.decode(): reason
                for ref, reason in (result.ref_status or {}).items()
                if reason is not None
            }
            if rejected:
                details = ", ".join(f"{ref}: {reason}" for ref, reason in rejected.items())
                raise PushRejectedError(f"Push rejected ({details})")

            repo.refs[ORIGIN_PREFIX + branch_ref[len(HEADS_PREFIX) :]] = local_sha
            logger.info("Pushed %s (%s)", branch_ref.decode(), local_sha.decode())

    # --- Local Operations ---

    def add_all(self) -> list[str]:
        """Stage every file of the working tree.

        Returns:
            Paths (relative to the working tree) that were staged
        """
        paths = list(self._iter_work_tree_files())
        if not paths:
            return []
        with Repo(str(self.work_tree)) as repo:
            added, ignored = porcelain.add(repo, paths=[str(p) for p in paths])
        if ignored:
            logger.debug("Ignored %d path(s) matched by .gitignore", len(ignored))
        logger.info("Staged %d path(s)", len(added))
        return [str(p) for p in added]

    def commit(self, message: str, author: str) -> str:
        """Create a commit from the index.

        Args:
            message: Commit message
            author: Author and committer, as "Name <email>"

        Returns:
            Hex id of the new commit
        """
        with Repo(str(self.work_tree)) as repo:
            sha = porcelain.commit(repo, message=message, author=author, committer=author)
        commit_id = sha.decode("ascii")
        logger.info("Committed %s: %s", commit_id[:8], message)
        return commit_id

    # --- Private Methods ---

    @contextmanager
    def _open_client(self) -> Iterator[BufferedHttpGitClient]:
        with BufferedHttpTransport(
            credentials=self._credentials,
            timeout=self._timeout,
            transport=self._http_transport,
        ) as transport:
            yield BufferedHttpGitClient(self.url, transport)

    def _iter_work_tree_files(self) -> Iterator[Path]:
        """Yield absolute paths of all files outside .git."""
        for dirpath, dirnames, filenames in os.walk(self.work_tree):
            dirnames[:] = sorted(d for d in dirnames if d != ".git")
            for filename in sorted(filenames):
                yield Path(dirpath) / filename


def current_branch_ref(repo: Repo) -> bytes:
    """Full ref name HEAD points at, e.g. b"refs/heads/main".

    Raises:
        SyncError: HEAD is detached
    """
    refnames, _ = repo.refs.follow(b"HEAD")
    branch_ref = refnames[-1]
    if not branch_ref.startswith(HEADS_PREFIX):
        raise SyncError("HEAD is detached; cannot determine the branch to sync")
    return branch_ref


def _log_progress(data: bytes) -> None:
    message = data.decode("utf-8", errors="replace").strip()
    if message:
        logger.debug("remote: %s", message)
