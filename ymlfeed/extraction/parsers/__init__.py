"""
Specialized parsers for product data extraction.

Each parser handles a specific data source:
- StructuredDataParser: JSON-LD structured data (schema.org)
- MetaTagParser: meta annotations, document title, microdata
"""

from .meta_parser import MetaTagParser
from .structured_data import StructuredDataParser

__all__ = [
    'StructuredDataParser',
    'MetaTagParser',
]
