"""Sync command for publishing the vault to the remote repository."""

import logging

from ..config import Settings
from ..repositories import VaultRepository
from ..services import ConfigService
from ..staging import ContentStager
from ..storage import VirtualFileSystem
from ..sync import SyncOrchestrator
from .output import error, header, info, success

logger = logging.getLogger(__name__)


def build_orchestrator(settings: Settings, config_service: ConfigService) -> SyncOrchestrator:
    """Wire the vault, store and repository together from settings."""
    fs = VirtualFileSystem(settings.store_root)
    stager = ContentStager(VaultRepository(settings.vault_root), fs)
    return SyncOrchestrator(
        config_service.get_config(),
        fs,
        stager,
        notify=info,
        timeout=settings.http_timeout,
    )


def run_sync(settings: Settings) -> int:
    """Clone or pull, stage published notes, commit and push.

    Args:
        settings: Application settings (vault, store and config locations)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config_service = ConfigService(settings.config_file)
    config = config_service.get_config()
    if config_service.has_config_error:
        error(config_service.config_error or "Invalid configuration")
        return 1

    if not config.git_url or not config.git_token:
        error("Remote repository is not configured")
        info("Run 'pagegit configure --git-url URL --git-token TOKEN --username NAME'")
        return 1

    if not settings.vault_root.is_dir():
        error(f"Vault not found: {settings.vault_root}")
        return 1

    header(f"Publishing {settings.vault_root} to {config.git_url}")
    orchestrator = build_orchestrator(settings, config_service)

    try:
        result = orchestrator.sync()
    except Exception as e:
        logger.exception("Sync failed in state %s", orchestrator.state.value)
        error(f"Error: {e}")
        return 1

    print()
    success(
        f"Published {result.stage.published_count} note(s) "
        f"and {result.stage.asset_count} image(s)"
    )
    if result.commit_id:
        info(f"Commit {result.commit_id[:8]}")
    return 0
