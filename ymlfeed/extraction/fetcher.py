"""
HTTP Fetcher

Thin wrapper around a shared requests.Session for product page downloads.
Redirects are followed; any transport error or a terminal status outside
200-399 surfaces as FetchError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from ..common.constants import ACCEPT_LANGUAGE, MAX_REDIRECTS, USER_AGENT
from ..common.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResponse:
    """Status and decoded body of a completed request."""
    status: int
    body: str


class HttpFetcher:
    """
    HTTP GET with timeout and redirect following.

    Usage:
        with HttpFetcher() as fetcher:
            response = fetcher.get("https://shop.example/p/1", timeout=12)
    """

    def __init__(self, session: requests.Session | None = None):
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": ACCEPT_LANGUAGE,
        })
        self.session.max_redirects = MAX_REDIRECTS

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self.session.close()

    def get(self, url: str, timeout: float) -> FetchResponse:
        """
        Fetch a URL.

        Args:
            url: Absolute URL
            timeout: Connect/read timeout in seconds

        Returns:
            FetchResponse with the final status and text body

        Raises:
            FetchError: On network error, timeout, too many redirects or a bad status
        """
        try:
            response = self.session.get(url, timeout=timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise FetchError(url, f"{type(e).__name__}: {str(e)[:100]}")

        if not 200 <= response.status_code < 400:
            raise FetchError(url, f"HTTP {response.status_code}", status=response.status_code)

        return FetchResponse(status=response.status_code, body=response.text)
