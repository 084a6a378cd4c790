"""Editing of the admin CSV databases: loading, saving, column schema and filtering."""

from __future__ import annotations

import contextlib
import enum
import json
import os
import warnings
from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from .backup import BackupError, make_timestamped_backup
from .csvrecord import encode_csv_record, iter_csv_records, parse_csv_record, read_csv_record
from .paths import CSV_PATHS, all_csv_paths, path_for_key
from .table import CsvTable

DEFAULT_KEEP_BACKUPS = 10


def schema_path_for(csv_path: str | PathLike[str]) -> str:
    """Return the path of the JSON sidecar that holds a CSV file's column types."""
    return f"{os.fspath(csv_path)}.schema.json"


def load_schema(csv_path: str | PathLike[str]) -> set[str]:
    """Return the lower-case numeric column keys stored beside ``csv_path``.

    A missing, unreadable or malformed schema file gives an empty set.
    """
    try:
        with open(schema_path_for(csv_path), "rb") as f:
            data = f.read()
    except OSError:
        return set()
    try:
        doc = json.loads(data)
    except ValueError:
        return set()
    if not isinstance(doc, dict):
        return set()
    numeric = doc.get("numeric")
    if not isinstance(numeric, list):
        return set()
    return {(v if isinstance(v, str) else "").strip().lower() for v in numeric}


def save_schema(csv_path: str | PathLike[str], columns: Iterable[str]) -> None:
    """Write the numeric column keys to the schema sidecar; write errors are ignored."""
    doc = {"numeric": sorted(columns)}
    with contextlib.suppress(OSError):
        with open(schema_path_for(csv_path), "w", encoding="utf-8") as f:
            f.write(json.dumps(doc, indent=4) + "\n")


def load_table(path: str | PathLike[str], table: CsvTable) -> None:
    """Fill ``table`` from a CSV file and its schema.

    A missing or empty file leaves the table empty. Blank records are
    skipped and every row is fitted to the header width. Raises ``OSError``
    if an existing file cannot be read.
    """
    table.set_numeric_columns(load_schema(path))

    source = Path(path)
    if not source.exists():
        table.clear()
        return

    with open(source, encoding="utf-8-sig", errors="replace") as stream:
        header = read_csv_record(stream)
        if not header:
            table.clear()
            return
        headers = parse_csv_record(header)
        rows = [parse_csv_record(rec) for rec in iter_csv_records(stream) if rec.strip()]

    table.set_table(headers, rows)


def save_table(
    path: str | PathLike[str],
    table: CsvTable,
    keep: int = DEFAULT_KEEP_BACKUPS,
) -> Path | None:
    """Back up ``path``, then write the table and its schema to it.

    A failed backup is reported as a ``RuntimeWarning`` and the file is
    written anyway. Returns the backup made, if any. Raises ``OSError`` if
    the CSV file cannot be written.
    """
    backup: Path | None
    try:
        backup = make_timestamped_backup(path, keep)
    except BackupError as exc:
        warnings.warn(f"Backup failed: {exc}", RuntimeWarning, stacklevel=2)
        backup = None

    with open(path, "w", encoding="utf-8") as out:
        out.write(encode_csv_record(table.headers) + "\n")
        for row in table.rows:
            out.write(encode_csv_record(row) + "\n")

    save_schema(path, table.numeric_columns)
    return backup


class UnsavedAction(enum.Enum):
    """What to do with unsaved changes when switching database."""

    SAVE = "save"
    DISCARD = "discard"
    CANCEL = "cancel"


class DbEditor:
    """Editing session over the managed CSV databases below a root directory."""

    def __init__(self, root: str | PathLike[str] = ".", key: str = "MATERIAL") -> None:
        self.root = Path(root)
        self._key = self._check_key(key)
        self.dirty = False
        self.table = CsvTable(on_change=self._mark_dirty)
        self.load()

    @staticmethod
    def _check_key(key: str) -> str:
        if path_for_key(key) is None:
            raise ValueError(f"unknown database {key!r}; choose from {', '.join(CSV_PATHS)}")
        return key

    def _mark_dirty(self) -> None:
        self.dirty = True

    @property
    def key(self) -> str:
        """The key of the database being edited."""
        return self._key

    @property
    def path(self) -> Path:
        """The CSV file of the database being edited."""
        return self.root / CSV_PATHS[self._key]

    def select_database(self, key: str, unsaved: UnsavedAction = UnsavedAction.CANCEL) -> bool:
        """Switch to another database and load it.

        With unsaved changes, ``unsaved`` decides: save them first, drop
        them, or stay on the current database. Returns whether the switch
        happened.
        """
        key = self._check_key(key)
        if self.dirty:
            if unsaved is UnsavedAction.CANCEL:
                return False
            if unsaved is UnsavedAction.SAVE:
                self.save()
        self._key = key
        self.load()
        return True

    def load(self) -> None:
        """Reload the current database from disk, dropping unsaved changes."""
        load_table(self.path, self.table)
        self.dirty = False

    def save(self) -> Path | None:
        """Save the current database with a backup; return the backup made."""
        backup = save_table(self.path, self.table)
        self.dirty = False
        return backup

    def save_all(self) -> list[Path]:
        """Save the current database, then rewrite every other one, with backups.

        The current database is reloaded afterwards. Returns the files written.
        """
        current = self.path
        save_table(current, self.table)
        written = [current]
        for rel in all_csv_paths():
            other = self.root / rel
            if other == current:
                continue
            load_table(other, self.table)
            save_table(other, self.table)
            written.append(other)
        load_table(current, self.table)
        self.dirty = False
        return written

    def filter_rows(self, text: str) -> list[int]:
        """Return the indices of rows where any cell contains ``text``, ignoring case."""
        if not text:
            return list(range(self.table.row_count()))
        needle = text.casefold()
        return [
            i
            for i, row in enumerate(self.table.rows)
            if any(needle in cell.casefold() for cell in row)
        ]

    def add_row(self) -> int:
        """Append an empty row and return its index."""
        self.table.add_row()
        return self.table.row_count() - 1

    def delete_rows(self, rows: Iterable[int]) -> int:
        """Delete the given rows, duplicates allowed; return how many were removed."""
        selected = list(rows)
        if not selected:
            raise ValueError("Select one or more rows to delete.")
        before = self.table.row_count()
        for row in sorted({r for r in selected if r >= 0}, reverse=True):
            self.table.delete_row(row)
        return before - self.table.row_count()

    def add_column(self, name: str, numeric: bool = False) -> None:
        """Append a text or numeric column; the name is trimmed and must not be blank."""
        name = name.strip()
        if not name:
            raise ValueError("column name must not be empty")
        self.table.add_column(name, numeric)

    def delete_column(self, col: int | None) -> str | None:
        """Delete a column; return its header, or ``None`` if the index is past the end."""
        if col is None or col < 0:
            raise ValueError(
                "Click a column header or select a cell in the column you want to delete."
            )
        headers = self.table.headers
        if col >= len(headers):
            return None
        self.table.delete_column(col)
        return headers[col]