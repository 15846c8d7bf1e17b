"""
Data models for the feed build pipeline.

This module contains pure data classes with no business logic.
"""

from .catalog import (
    BuildResult,
    Catalog,
    Category,
    Offer,
    ScrapedData,
    ShopSettings,
    SourceRef,
    SourceTables,
    categories_from_rows,
)

__all__ = [
    'ShopSettings',
    'Category',
    'ScrapedData',
    'Offer',
    'Catalog',
    'SourceTables',
    'SourceRef',
    'BuildResult',
    'categories_from_rows',
]
