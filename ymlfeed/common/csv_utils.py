"""
CSV Utilities

Common functions for reading CSV tables with proper configuration.
Handles large field sizes and byte-order marks from spreadsheet exports.
"""

import csv
from pathlib import Path
from typing import List


def configure_csv(field_size_limit: int = 10 * 1024 * 1024) -> None:
    """
    Configure CSV module for large fields.

    Args:
        field_size_limit: Maximum field size in bytes (default: 10MB)
    """
    csv.field_size_limit(field_size_limit)


def read_csv_rows(file_path: str | Path, encoding: str = 'utf-8-sig') -> List[List[str]]:
    """
    Read a CSV file as a list of raw rows (header included).

    Fully blank rows are dropped.

    Args:
        file_path: Path to CSV file
        encoding: File encoding (default: utf-8 with optional BOM)

    Returns:
        List of rows, each a list of cell strings
    """
    with open(file_path, 'r', encoding=encoding, newline='') as f:
        return [row for row in csv.reader(f) if any(cell.strip() for cell in row)]


# Initialize CSV configuration on module import
configure_csv()
