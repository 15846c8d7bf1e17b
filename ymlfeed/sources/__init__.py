"""
Tabular sources.

Modules:
    base - TableSource and SourceCatalog interfaces
    csv_workbook - CsvWorkbookSource (one CSV directory per source)
"""

from .base import SourceCatalog, TableSource
from .csv_workbook import CsvWorkbookSource

__all__ = [
    'TableSource',
    'SourceCatalog',
    'CsvWorkbookSource',
]
