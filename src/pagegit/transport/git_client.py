"""dulwich HTTP client running over the buffered transport."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

import httpx
from dulwich.client import AbstractHttpGitClient, HTTPProxyUnauthorized, HTTPUnauthorized
from dulwich.errors import GitProtocolError, NotGitRepository

from .http import BufferedHttpTransport, BufferedResponse

logger = logging.getLogger(__name__)


class GitHttpResponse:
    """The response object dulwich's smart-HTTP code expects."""

    def __init__(self, response: BufferedResponse, request_url: str) -> None:
        self.status = response.status
        self.headers = response.headers
        self.content_type = response.headers.get("Content-Type")
        # Compare normalized forms so only real redirects count
        redirected = response.url != str(httpx.URL(request_url))
        self.redirect_location = response.url if redirected else ""
        self._body = io.BytesIO(b"".join(response.body))

    def read(self, size: int = -1) -> bytes:
        return self._body.read(size)

    def close(self) -> None:
        self._body.close()


class BufferedHttpGitClient(AbstractHttpGitClient):
    """Git smart-HTTP client whose requests go through BufferedHttpTransport.

    The transport hands back every status code untouched; this is where they
    become protocol errors.
    """

    def __init__(
        self,
        base_url: str,
        transport: BufferedHttpTransport,
        dumb: bool = False,
        **kwargs: Any,
    ) -> None:
        self._transport = transport
        super().__init__(base_url, dumb=dumb, **kwargs)

    def _http_request(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        data: bytes | Iterator[bytes] | None = None,
        raise_for_status: bool = True,
    ) -> tuple[GitHttpResponse, Callable[..., bytes]]:
        method = "GET" if data is None else "POST"
        req_headers = {"Pragma": "no-cache"}
        if headers is not None:
            req_headers.update(headers)

        try:
            response = self._transport.request(url, method, headers=req_headers, body=data)
        except httpx.HTTPError as e:
            raise GitProtocolError(f"Request to {url} failed: {e}") from e

        if raise_for_status:
            check_status(response, url)

        resp = GitHttpResponse(response, url)
        return resp, resp.read


def check_status(response: BufferedResponse, url: str) -> None:
    """Translate a non-200 status into the matching dulwich error.

    Raises:
        HTTPUnauthorized: 401, credentials missing or rejected
        HTTPProxyUnauthorized: 407
        NotGitRepository: 404
        GitProtocolError: Any other non-200 status
    """
    status = response.status
    if status == 200:
        return
    logger.error("%s %s: HTTP %d", response.method, url, status)
    if status == 401:
        raise HTTPUnauthorized(response.headers.get("WWW-Authenticate"), url)
    if status == 407:
        raise HTTPProxyUnauthorized(response.headers.get("Proxy-Authenticate"), url)
    if status == 404:
        raise NotGitRepository(f"Repository not found: {url}")
    raise GitProtocolError(f"unexpected http resp {status} for {url}")
