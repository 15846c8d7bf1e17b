"""
YML catalog rendering.

Modules:
    builder - YmlCatalogBuilder document rendering and feed filenames
"""

from .builder import YmlCatalogBuilder, build_filename, parse_offers

__all__ = [
    'YmlCatalogBuilder',
    'build_filename',
    'parse_offers',
]
