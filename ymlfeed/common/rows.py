"""
Tabular Row Accessors

Raw table rows arrive as loosely typed cells keyed by header name.
TableRow normalizes the keys once and exposes typed accessors so the
pipeline never coerces cell values ad hoc.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Mapping, Sequence


def normalize_header(header: Any) -> str:
    """Lower-case and trim a header cell."""
    if header is None:
        return ""
    return str(header).strip().lower()


def cell_to_string(value: Any) -> str:
    """
    Coerce a raw cell to text.

    None becomes an empty string; integral floats lose their ".0" suffix
    (spreadsheet exports often turn ids into floats).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class TableRow(Mapping[str, Any]):
    """
    Read-only mapping from lower-cased header name to raw cell value.

    Usage:
        row = TableRow({"URL": " https://shop/p/1 ", "Price": "1 200"})
        row.get_trimmed_string("url")   # "https://shop/p/1"
        row.get_optional_id("categoryid")  # None
    """

    def __init__(self, cells: Mapping[Any, Any] | None = None):
        self._cells = {}
        for key, value in (cells or {}).items():
            header = normalize_header(key)
            if header:
                self._cells[header] = value

    def __getitem__(self, key: str) -> Any:
        return self._cells[normalize_header(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"TableRow({self._cells!r})"

    def get_trimmed_string(self, key: str) -> str:
        """Return the cell as trimmed text, empty string when absent."""
        return cell_to_string(self._cells.get(normalize_header(key))).strip()

    def get_optional_id(self, key: str) -> str | None:
        """Return the cell as an id string, or None when absent or blank."""
        value = self.get_trimmed_string(key)
        return value or None


def rows_to_records(values: Sequence[Sequence[Any]] | None) -> List[TableRow]:
    """
    Convert a header row plus data rows into TableRow records.

    Short rows leave trailing columns absent; extra cells beyond the
    header are ignored.

    Args:
        values: Table as a list of rows, first row is the header

    Returns:
        One TableRow per data row
    """
    if not values:
        return []

    headers = [normalize_header(h) for h in values[0]]
    records = []
    for row in values[1:]:
        cells = {}
        for idx, header in enumerate(headers):
            if header and idx < len(row):
                cells[header] = row[idx]
        records.append(TableRow(cells))
    return records


def key_value_rows(values: Iterable[Sequence[Any]] | None, skip_header: bool = True) -> dict:
    """
    Read a two-column key/value table into a dict with lower-cased keys.

    Blank keys are skipped; later duplicates win.
    """
    settings = {}
    if not values:
        return settings

    rows = list(values)
    if skip_header:
        rows = rows[1:]

    for row in rows:
        if not row:
            continue
        key = normalize_header(row[0])
        if not key:
            continue
        settings[key] = row[1] if len(row) > 1 else None
    return settings
