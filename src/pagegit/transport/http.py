"""Buffered HTTP transport for the git smart protocol.

The git client speaks in chunk streams: it hands over the request body as an
iterator of byte chunks and consumes the response the same way. The transport
underneath makes one plain request per round, with the whole body in memory
on both sides. Repository payloads here are small, so giving up streaming
uploads is fine.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

import httpx

logger = logging.getLogger(__name__)


class Credentials(NamedTuple):
    """Username/password pair sent as HTTP basic auth."""

    username: str
    password: str


CredentialsCallback = Callable[[], Credentials | None]


@dataclass
class BufferedResponse:
    """Response of one buffered round, shaped as a chunk stream."""

    url: str
    method: str
    status: int
    headers: Mapping[str, str]
    body: Iterator[bytes]

    @property
    def status_message(self) -> str:
        return str(self.status)


def collect_body(body: bytes | Iterable[bytes] | None) -> bytes | None:
    """Drain a request body stream into a single buffer."""
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    return b"".join(bytes(chunk) for chunk in body)


def iter_buffer(buffer: bytes) -> Iterator[bytes]:
    """Expose a buffer as a one-chunk stream."""
    yield buffer


class BufferedHttpTransport:
    """Transport that performs each request as a single buffered call.

    Non-2xx responses are returned like any other; deciding what a 401 or a
    404 means is left to the protocol layer.
    """

    def __init__(
        self,
        credentials: CredentialsCallback | None = None,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the transport.

        Args:
            credentials: Called before every request to get basic-auth credentials
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass an httpx.MockTransport)
        """
        self._credentials = credentials
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> BufferedHttpTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: bytes | Iterable[bytes] | None = None,
    ) -> BufferedResponse:
        """Perform one request with a fully buffered body.

        Args:
            url: Request URL
            method: HTTP method
            headers: Request headers
            body: Request body as bytes or an iterator of byte chunks

        Returns:
            BufferedResponse whose body yields the whole response content once

        Raises:
            httpx.HTTPError: The request could not be completed at all
        """
        content = collect_body(body)

        auth = None
        if self._credentials is not None:
            creds = self._credentials()
            if creds is not None:
                auth = httpx.BasicAuth(creds.username, creds.password)

        start_time = time.monotonic()
        response = self._client.request(
            method,
            url,
            headers=dict(headers or {}),
            content=content,
            auth=auth,
        )
        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.debug(
            "%s %s: HTTP %d, sent %d bytes, received %d bytes (%.0fms)",
            method,
            url,
            response.status_code,
            len(content or b""),
            len(response.content),
            elapsed_ms,
        )

        return BufferedResponse(
            url=str(response.url),
            method=method,
            status=response.status_code,
            headers=response.headers,
            body=iter_buffer(response.content),
        )
