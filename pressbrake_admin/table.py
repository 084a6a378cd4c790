"""In-memory CSV table with column typing and change notification."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence

_NUMBER_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)", re.ASCII)

_NUMERIC_HEADER_KEYS = frozenset(
    {
        "minton", "maxton", "ton", "tons",
        "length", "width", "height",
        "thickness", "radius",
        "kg", "weight",
        "power", "kw",
        "v", "volt", "voltage",
        "a", "amp", "current",
        "price", "cost",
    }
)


def _column_key(name: str) -> str:
    return name.strip().lower()


def parse_number(text: str) -> float:
    """Parse a decimal number, accepting a comma as the decimal separator.

    Accepts forms such as ``-12``, ``12.5``, ``12.`` and ``.5``; raises
    ``ValueError`` for anything else, including empty text.
    """
    normalized = text.strip().replace(",", ".")
    if not normalized or not _NUMBER_RE.fullmatch(normalized):
        raise ValueError(f"not a number: {text!r}")
    return float(normalized)


class CsvTable:
    """Headers and rows of a CSV database, every row as wide as the headers.

    ``on_change`` is called after each edit made through this table
    (cells, rows and columns); replacing or clearing the whole table does
    not call it.
    """

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self.on_change = on_change
        self._headers: list[str] = []
        self._rows: list[list[str]] = []
        self._numeric: set[str] = set()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    @property
    def headers(self) -> list[str]:
        """A copy of the column headers."""
        return list(self._headers)

    @property
    def rows(self) -> list[list[str]]:
        """A copy of the rows."""
        return [list(r) for r in self._rows]

    @property
    def numeric_columns(self) -> frozenset[str]:
        """Lower-case keys of columns explicitly typed as numeric."""
        return frozenset(self._numeric)

    def clear(self) -> None:
        """Remove all headers, rows and column types."""
        self._headers = []
        self._rows = []
        self._numeric = set()

    def set_table(self, headers: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
        """Replace the content, padding or cutting rows to the header width."""
        self._headers = list(headers)
        width = len(self._headers)
        self._rows = [self._fit(row, width) for row in rows]

    @staticmethod
    def _fit(row: Sequence[str], width: int) -> list[str]:
        fitted = list(row[:width])
        fitted.extend([""] * (width - len(fitted)))
        return fitted

    def row_count(self) -> int:
        return len(self._rows)

    def column_count(self) -> int:
        return len(self._headers)

    def _valid_cell(self, row: int, col: int) -> bool:
        return 0 <= row < len(self._rows) and 0 <= col < len(self._headers)

    def cell(self, row: int, col: int) -> str | None:
        """Return the text of a cell, or ``None`` outside the table."""
        if not self._valid_cell(row, col):
            return None
        return self._rows[row][col]

    def set_cell(self, row: int, col: int, value: object) -> bool:
        """Store a value in a cell; return whether the cell changed.

        Numeric columns accept only numbers (decimal comma becomes a dot)
        or blank text, which clears the cell. Raises ``IndexError`` outside
        the table and ``ValueError`` for a non-numeric value in a numeric
        column.
        """
        if not self._valid_cell(row, col):
            raise IndexError(f"cell ({row}, {col}) is outside the table")

        text = "" if value is None else str(value)
        if self.is_numeric_column(col):
            trimmed = text.strip()
            if trimmed:
                parse_number(trimmed)
                text = trimmed.replace(",", ".")
            else:
                text = ""

        target = self._rows[row]
        if len(target) != len(self._headers):
            target[:] = self._fit(target, len(self._headers))
        if target[col] == text:
            return False
        target[col] = text
        self._changed()
        return True

    def add_column(self, name: str, numeric: bool | None = None) -> None:
        """Append a column of empty cells.

        With ``numeric`` given, the column is marked numeric or text in the
        schema; with ``None`` the schema is left as it is.
        """
        self._headers.append(name)
        for r in self._rows:
            r.append("")
        self._changed()
        if numeric is None:
            return
        key = _column_key(name)
        if numeric:
            self._numeric.add(key)
        else:
            self._numeric.discard(key)

    def delete_column(self, col: int) -> None:
        """Remove a column and its schema entry; ignore an invalid index."""
        if not 0 <= col < len(self._headers):
            return
        self._numeric.discard(_column_key(self._headers[col]))
        del self._headers[col]
        for r in self._rows:
            if col < len(r):
                del r[col]
        self._changed()

    def add_row(self) -> None:
        """Append a row of empty cells."""
        self._rows.append([""] * len(self._headers))
        self._changed()

    def delete_row(self, row: int) -> None:
        """Remove a row; ignore an invalid index."""
        if not 0 <= row < len(self._rows):
            return
        del self._rows[row]
        self._changed()

    def set_numeric_columns(self, columns: Iterable[str]) -> None:
        """Replace the set of explicitly numeric columns."""
        self._numeric = {_column_key(c) for c in columns}

    def is_numeric_column(self, col: int) -> bool:
        """Whether a column holds numbers, by schema or by its header name."""
        if not 0 <= col < len(self._headers):
            return False
        key = _column_key(self._headers[col])
        if key in self._numeric:
            return True
        simplified = key.replace("_", "").replace("-", "").replace(" ", "")
        if key in _NUMERIC_HEADER_KEYS or simplified in _NUMERIC_HEADER_KEYS:
            return True
        return simplified.endswith(("ton", "tons"))