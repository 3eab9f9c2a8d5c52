"""Remote feed source.

Fetches the site payload from the Newsroom Toolkit API with a single
blocking GET. There is no retry: a failed fetch fails the attempt, and in
repeat mode the next scheduled attempt simply tries again.

Example:
    >>> import httpx
    >>> from nrtksync.adapter.http import HttpFeedSource
    >>> transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"{}"))
    >>> source = HttpFeedSource("https://api.example.com/site", token="t", transport=transport)
    >>> source.fetch()
    b'{}'
"""

from __future__ import annotations

import logging

import httpx

from nrtksync.core.config import DEFAULT_USER_AGENT
from nrtksync.core.exceptions import FetchError

logger = logging.getLogger(__name__)


class HttpFeedSource:
    """Feed source backed by an HTTP API.

    Attributes:
        url: Feed URL.
        timeout: Request timeout in seconds.
        user_agent: User-Agent header value.
    """

    def __init__(
        self,
        url: str,
        token: str | None = None,
        *,
        timeout: float = 2.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            url: Feed URL.
            token: API token sent as ``Authorization: Token <token>``.
            timeout: Request timeout in seconds.
            user_agent: User-Agent header.
            transport: Optional httpx transport (used by tests).
        """
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._transport = transport

    @property
    def name(self) -> str:
        return self.url

    @property
    def headers(self) -> dict[str, str]:
        """Request headers."""
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Token {self._token}"
        return headers

    def fetch(self) -> bytes:
        """Fetch the raw payload.

        Returns:
            Response body bytes, untouched.

        Raises:
            FetchError: On timeout, request failure or a non-200 status.
        """
        logger.info("Fetching data from %s", self.url)
        try:
            with httpx.Client(
                headers=self.headers,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(self.url)
        except httpx.TimeoutException as e:
            raise FetchError(f"request timeout: {e}", source=self.url, cause=e) from e
        except httpx.RequestError as e:
            raise FetchError(f"request failed: {e}", source=self.url, cause=e) from e

        if response.status_code != httpx.codes.OK:
            raise FetchError(
                f"request error: {response.status_code}",
                source=self.url,
                status_code=response.status_code,
            )
        return response.content
