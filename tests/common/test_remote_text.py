"""Tests for ymlfeed/common/remote_text.py"""

from datetime import datetime, timedelta

import pytest

from ymlfeed.common.errors import FetchError
from ymlfeed.common.remote_text import CachedText, RemoteTextProvider

LICENSE_URL = "https://example.org/LICENSE"


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class TestCachedText:
    def test_fresh_within_ttl(self):
        cached = CachedText("text", datetime(2026, 1, 1, 0, 0))
        assert cached.is_fresh(datetime(2026, 1, 1, 5, 59), timedelta(hours=6))

    def test_stale_at_ttl(self):
        cached = CachedText("text", datetime(2026, 1, 1, 0, 0))
        assert not cached.is_fresh(datetime(2026, 1, 1, 6, 0), timedelta(hours=6))


class TestRemoteTextProvider:
    def test_fetches_once_while_fresh(self, make_fetcher):
        fetcher = make_fetcher({LICENSE_URL: "MIT License"})
        clock = Clock(datetime(2026, 1, 1, 0, 0))
        provider = RemoteTextProvider(LICENSE_URL, fetcher, clock=clock)

        assert provider.get() == "MIT License"
        clock.now += timedelta(hours=5)
        assert provider.get() == "MIT License"
        assert len(fetcher.calls) == 1

    def test_refreshes_after_six_hours(self, make_fetcher):
        fetcher = make_fetcher({LICENSE_URL: "v1"})
        clock = Clock(datetime(2026, 1, 1, 0, 0))
        provider = RemoteTextProvider(LICENSE_URL, fetcher, clock=clock)

        provider.get()
        fetcher.pages[LICENSE_URL] = "v2"
        clock.now += timedelta(hours=6, seconds=1)

        assert provider.get() == "v2"
        assert provider.cached.fetched_at == clock.now
        assert len(fetcher.calls) == 2

    def test_fetch_error_propagates_on_miss(self, make_fetcher):
        provider = RemoteTextProvider(LICENSE_URL, make_fetcher(failures=[LICENSE_URL]))
        with pytest.raises(FetchError):
            provider.get()
        assert provider.cached is None
