"""
Cached Remote Text

Serves one externally hosted text document (the license text) from an
in-process cache with a fixed freshness window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=6)


@dataclass(frozen=True)
class CachedText:
    """A fetched document and the moment it was fetched."""
    value: str
    fetched_at: datetime

    def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.fetched_at < ttl


class RemoteTextProvider:
    """
    Fetches a text document on demand and caches it for `ttl`.

    Refreshes are not locked: concurrent misses both fetch and the last
    one stored wins.

    Usage:
        provider = RemoteTextProvider(url, fetcher=HttpFetcher())
        text = provider.get()
    """

    def __init__(
        self,
        url: str,
        fetcher,
        ttl: timedelta = DEFAULT_TTL,
        timeout: float = 10.0,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.url = url
        self.fetcher = fetcher
        self.ttl = ttl
        self.timeout = timeout
        self.clock = clock
        self._cache: Optional[CachedText] = None

    @property
    def cached(self) -> Optional[CachedText]:
        return self._cache

    def get(self) -> str:
        """
        Return the document text, fetching it when the cache is stale.

        Raises:
            FetchError: If the cache is stale and the fetch fails
        """
        now = self.clock()
        if self._cache is not None and self._cache.is_fresh(now, self.ttl):
            return self._cache.value

        logger.debug("Refreshing cached text from %s", self.url)
        response = self.fetcher.get(self.url, self.timeout)
        self._cache = CachedText(value=response.body, fetched_at=now)
        return self._cache.value
