"""Persisted publishing configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_AUTHOR_EMAIL = "mobile@obsidian.md"


class PublishConfig(BaseModel):
    """Remote repository settings, stored in config.yml.

    Keys are written in camelCase (``gitUrl``, ``gitToken``) and may be read
    by either their alias or field name.
    """

    model_config = ConfigDict(populate_by_name=True)

    git_url: str = Field(default="", alias="gitUrl")  # https://github.com/user/repo.git
    git_token: str = Field(default="", alias="gitToken")  # ghp_xxxxxxxxxxxx
    username: str = ""
    author_email: str = Field(default=DEFAULT_AUTHOR_EMAIL, alias="authorEmail")
    branch: str | None = None

    @field_validator("git_url", "git_token", "username", "author_email", mode="before")
    @classmethod
    def strip_strings(cls, v: object) -> object:
        """Strip surrounding whitespace pasted along with values."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("git_url")
    @classmethod
    def validate_git_url(cls, v: str) -> str:
        """Only HTTPS remotes are reachable through the buffered transport."""
        if v and not v.startswith(("https://", "http://")):
            raise ValueError("gitUrl must be an http(s) URL, e.g. https://github.com/user/repo.git")
        return v

    @property
    def author(self) -> str:
        """Author identity in git's ``Name <email>`` form."""
        return f"{self.username} <{self.author_email}>"

    @property
    def masked_token(self) -> str:
        """Token with everything but the last four characters hidden."""
        if not self.git_token:
            return ""
        if len(self.git_token) <= 4:
            return "*" * len(self.git_token)
        return "*" * (len(self.git_token) - 4) + self.git_token[-4:]

    def to_yaml_dict(self) -> dict:
        """Convert to dict for YAML serialization."""
        return self.model_dump(by_alias=True, exclude_none=True)
