"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_HOME = Path.home() / ".pagegit"


class Settings(BaseSettings):
    """Application settings."""

    vault_root: Path = Field(
        default=Path(),
        description="Path to the vault whose published notes are synced",
    )

    store_root: Path = Field(
        default=DEFAULT_HOME / "store",
        description="Local store holding the virtual filesystem (and the cloned repo)",
    )

    config_file: Path = Field(
        default=DEFAULT_HOME / "config.yml",
        description="YAML file holding git url, token and username",
    )

    http_timeout: float = Field(
        default=60.0,
        description="Timeout in seconds for each HTTP request to the remote",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2=DEBUG, 3+=DEBUG with wire traffic)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "PAGEGIT_",
    }
