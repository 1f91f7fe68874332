"""Transport between the git client and the buffered HTTP call."""

from .git_client import BufferedHttpGitClient, GitHttpResponse, check_status
from .http import (
    BufferedHttpTransport,
    BufferedResponse,
    Credentials,
    CredentialsCallback,
    collect_body,
    iter_buffer,
)

__all__ = [
    "BufferedHttpGitClient",
    "BufferedHttpTransport",
    "BufferedResponse",
    "Credentials",
    "CredentialsCallback",
    "GitHttpResponse",
    "check_status",
    "collect_body",
    "iter_buffer",
]
