"""
CSV Workbook Source

Reads sources laid out as one directory per source, each holding one CSV
file per logical table:

    <root>/<source_id>/settings.csv     key,value rows after a header row
    <root>/<source_id>/categories.csv   header: id,name
    <root>/<source_id>/products.csv     header: url,name,description,price,picture,category,categoryid
"""

import csv
import logging
import os
from typing import List

from ..common.csv_utils import read_csv_rows
from ..common.errors import SourceReadError
from ..common.rows import key_value_rows, rows_to_records
from ..models import ShopSettings, SourceRef, SourceTables, categories_from_rows
from .base import SourceCatalog, TableSource

logger = logging.getLogger(__name__)


class CsvWorkbookSource(TableSource, SourceCatalog):
    """
    Local directory of CSV workbooks.

    Usage:
        source = CsvWorkbookSource("data/sources")
        for ref in source.list():
            tables = source.read(ref.id)
    """

    def __init__(
        self,
        root_dir: str,
        settings_table: str = "settings",
        categories_table: str = "categories",
        products_table: str = "products",
    ):
        self.root_dir = root_dir
        self.settings_table = settings_table
        self.categories_table = categories_table
        self.products_table = products_table

    def list(self) -> List[SourceRef]:
        """List source directories in name order, hidden ones skipped."""
        if not os.path.isdir(self.root_dir):
            logger.warning("Sources directory not found: %s", self.root_dir)
            return []

        refs = []
        for name in sorted(os.listdir(self.root_dir)):
            if name.startswith('.'):
                continue
            if os.path.isdir(os.path.join(self.root_dir, name)):
                refs.append(SourceRef(id=name, display_name=name))
        return refs

    def read(self, source_id: str) -> SourceTables:
        """
        Read settings, categories and products of one source.

        Missing category or product tables read as empty.

        Raises:
            SourceReadError: If the source or its settings table is missing or unreadable
            MissingRequiredFieldError: If a required settings field is blank
        """
        source_dir = os.path.join(self.root_dir, source_id)
        if not source_id or not os.path.isdir(source_dir):
            raise SourceReadError(source_id, f"directory not found: {source_dir}")

        settings_path = self._table_path(source_dir, self.settings_table)
        if not os.path.exists(settings_path):
            raise SourceReadError(source_id, f"settings table not found: {settings_path}")

        settings = ShopSettings.from_mapping(
            key_value_rows(self._read_table(source_id, settings_path)),
            source_id=source_id,
        )
        categories = categories_from_rows(
            rows_to_records(self._read_optional(source_id, source_dir, self.categories_table))
        )
        products = rows_to_records(self._read_optional(source_id, source_dir, self.products_table))

        logger.info("Read source %s: %d categories, %d products",
                    source_id, len(categories), len(products))
        return SourceTables(settings=settings, categories=categories, products=products)

    def _table_path(self, source_dir: str, table: str) -> str:
        return os.path.join(source_dir, f"{table}.csv")

    def _read_optional(self, source_id: str, source_dir: str, table: str) -> List[List[str]]:
        path = self._table_path(source_dir, table)
        if not os.path.exists(path):
            logger.debug("Table %s missing in source %s", table, source_id)
            return []
        return self._read_table(source_id, path)

    def _read_table(self, source_id: str, path: str) -> List[List[str]]:
        try:
            return read_csv_rows(path)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise SourceReadError(source_id, f"{os.path.basename(path)}: {e}")
