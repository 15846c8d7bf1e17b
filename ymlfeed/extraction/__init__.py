"""
Product page extraction and row enrichment.

Modules:
    price - normalize_price for scraped and tabular prices
    html_extractor - HtmlExtractor (meta tags, title, JSON-LD fallbacks)
    image_selector - ImageSelector main image heuristic
    fetcher - HttpFetcher over a shared requests.Session
    enricher - ProductEnricher bounded-concurrency row enrichment
    parsers - Specialized parsers for different data sources
"""

from .enricher import ProductEnricher, resolve_category_id
from .fetcher import FetchResponse, HttpFetcher
from .html_extractor import HtmlExtractor
from .image_selector import ImageSelector
from .parsers import MetaTagParser, StructuredDataParser
from .price import normalize_price

__all__ = [
    'ProductEnricher',
    'resolve_category_id',
    'HttpFetcher',
    'FetchResponse',
    'HtmlExtractor',
    'ImageSelector',
    'normalize_price',
    'StructuredDataParser',
    'MetaTagParser',
]
