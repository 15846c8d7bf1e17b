"""
Image Selector

Picks one representative ("main") image out of the scraped candidates and
the tabular fallback using a fixed scoring heuristic.
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

DISQUALIFIED_SCORE = -1_000_000
DISQUALIFIED_THRESHOLD = -100_000
MAX_WIDTH_BONUS = 1500

# Non-product imagery: logos, favicons, icons, sprites, placeholders, size charts.
# Tokens must sit between path separators so "silicone" or "catalogo" pass.
_DENYLIST_RE = re.compile(
    r'(?:^|[/_.-])(?:logos?|favicon|icons?|sprites?|placeholder|size[-_]?chart)(?=$|[/_.\d-])',
    re.IGNORECASE,
)

# w=80, h_64, width-90, /w50/ ...
_DIMENSION_RE = re.compile(
    r'(?:^|[/?&_.,-])(w|h|width|height)[=_-]?(\d+)(?=$|[^\d])',
    re.IGNORECASE,
)

# 64x64, 800x600
_PAIR_RE = re.compile(r'(?:^|[^\d])(\d+)x(\d+)(?=$|[^\d])', re.IGNORECASE)

_PRIMARY_DESIGN_RE = re.compile(
    r'/design/(?:[^/?#]+/)*(?:1a?|main|primary)\.(?:jpe?g|png|webp)(?:[?#]|$)',
    re.IGNORECASE,
)
_DESIGN_SEGMENT_RE = re.compile(r'/design/', re.IGNORECASE)
_PRIMARY_FILENAME_RE = re.compile(r'^1a?$', re.IGNORECASE)
_RASTER_EXTENSION_RE = re.compile(r'\.(?:jpe?g|png)(?:\?.*)?$', re.IGNORECASE)
_CDN_HOST_RE = re.compile(
    r'(?:^|[.-])(?:cdn|img|images|static|media)\d*(?:[.-]|$)'
    r'|cloudfront\.net$|akamaized\.net$',
    re.IGNORECASE,
)


def _is_small_dimension(value: str) -> bool:
    return len(value) == 2 and int(value) < 100


class ImageSelector:
    """
    Scores image URLs and selects the main one.

    Usage:
        selector = ImageSelector()
        main = selector.select_main(["https://x/logo.svg", "https://x/design/p/1.jpg"], "")
    """

    def score(self, url: str) -> int:
        """
        Score a single image URL.

        Rules are evaluated independently and added up.

        Args:
            url: Absolute or relative image URL

        Returns:
            Integer score; anything at or below DISQUALIFIED_THRESHOLD is unusable
        """
        score = 0
        parsed = urlparse(url)
        path = parsed.path or ""
        filename = path.rsplit('/', 1)[-1]
        stem = filename.rsplit('.', 1)[0] if '.' in filename else filename

        if _DENYLIST_RE.search(path):
            score += DISQUALIFIED_SCORE

        dimensions = _DIMENSION_RE.findall(url)
        pairs = _PAIR_RE.findall(url)
        small = any(_is_small_dimension(value) for _, value in dimensions) or any(
            _is_small_dimension(w) or _is_small_dimension(h) for w, h in pairs
        )
        if small:
            score -= 300

        if _PRIMARY_DESIGN_RE.search(path):
            score += 2000

        if _DESIGN_SEGMENT_RE.search(path):
            score += 400

        if _PRIMARY_FILENAME_RE.match(stem):
            score += 350

        widths = [int(value) for token, value in dimensions if token.lower() in ('w', 'width')]
        if widths:
            score += min(MAX_WIDTH_BONUS, widths[0])

        if parsed.hostname and _CDN_HOST_RE.search(parsed.hostname):
            score += 80

        if _RASTER_EXTENSION_RE.search(url):
            score += 30

        return score

    def candidates(self, scraped: Sequence[str], fallback: str) -> List[str]:
        """Deduplicated scraped candidates followed by the fallback."""
        seen = set()
        result = []
        for url in list(scraped or []) + [fallback or ""]:
            url = (url or "").strip()
            if url and url not in seen:
                seen.add(url)
                result.append(url)
        return result

    def select_main(self, scraped: Sequence[str], fallback: str = "") -> str:
        """
        Select the main image.

        The strictly highest score wins; ties keep the earliest candidate.
        When every candidate is disqualified, return the fallback, else the
        first scraped candidate, else an empty string.

        Args:
            scraped: Candidate URLs in page order
            fallback: Tabular picture URL

        Returns:
            Selected URL or empty string
        """
        candidates = self.candidates(scraped, fallback)
        if not candidates:
            return ""

        best_url = candidates[0]
        best_score = self.score(best_url)
        for url in candidates[1:]:
            score = self.score(url)
            if score > best_score:
                best_url, best_score = url, score

        if best_score <= DISQUALIFIED_THRESHOLD:
            fallback = (fallback or "").strip()
            if fallback:
                return fallback
            raw = [u.strip() for u in scraped or [] if u and u.strip()]
            return raw[0] if raw else ""

        logger.debug("Main image %s (score %d of %d candidates)", best_url, best_score, len(candidates))
        return best_url


def select_main(scraped: Sequence[str], fallback: str = "") -> str:
    """Module-level shortcut for ImageSelector().select_main()."""
    return ImageSelector().select_main(scraped, fallback)
