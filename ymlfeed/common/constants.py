"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Currency used when the settings table does not declare one
DEFAULT_CURRENCY_ID = "RUB"

# Category id for products without a resolvable category
UNKNOWN_CATEGORY_ID = "0"

# Output feed naming: Feed_<sanitized name>.xml
FEED_FILENAME_PREFIX = "Feed_"
FEED_FILENAME_EXTENSION = ".xml"

# Browser-like headers for product page requests
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120 Safari/537.36"
)
ACCEPT_LANGUAGE = "ru-RU,ru;q=0.9,en;q=0.8"
MAX_REDIRECTS = 5
