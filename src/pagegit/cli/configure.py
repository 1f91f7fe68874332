"""Configure command for editing the publish configuration."""

import logging

from pydantic import ValidationError

from ..config import Settings
from ..services import ConfigService
from .output import error, header, info, success

logger = logging.getLogger(__name__)


def run_configure(
    settings: Settings,
    git_url: str | None = None,
    git_token: str | None = None,
    username: str | None = None,
    author_email: str | None = None,
    branch: str | None = None,
) -> int:
    """Update and save configuration, or show it when nothing is given.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config_service = ConfigService(settings.config_file)
    changes = {
        "git_url": git_url,
        "git_token": git_token,
        "username": username,
        "author_email": author_email,
        "branch": branch,
    }

    if all(value is None for value in changes.values()):
        config = config_service.get_config()
        if config_service.has_config_error:
            error(config_service.config_error or "Invalid configuration")
            return 1
        header(f"Configuration ({settings.config_file})")
        print(f"  gitUrl:      {config.git_url or '(not set)'}")
        print(f"  gitToken:    {config.masked_token or '(not set)'}")
        print(f"  username:    {config.username or '(not set)'}")
        print(f"  authorEmail: {config.author_email}")
        print(f"  branch:      {config.branch or '(remote default)'}")
        return 0

    try:
        config_service.update(**changes)
    except ValidationError as e:
        for err in e.errors():
            error(err["msg"])
        return 1
    except OSError as e:
        error(f"Cannot write {settings.config_file}: {e}")
        return 1

    success(f"Saved {settings.config_file}")
    if git_token is not None:
        info("Token stored in plain text; keep the file private")
    return 0
