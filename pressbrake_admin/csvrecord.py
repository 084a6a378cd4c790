"""Reading, parsing and encoding of CSV records with quoted fields."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TextIO


def _strip_line_end(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def read_csv_record(stream: TextIO) -> str | None:
    """Read one logical record, joining physical lines while a quote is open.

    Line terminators are removed; lines inside a record are joined with
    ``"\\n"``. Returns ``None`` when the stream is exhausted.
    """
    record: str | None = None
    in_quotes = False
    while True:
        raw = stream.readline()
        if not raw:
            break
        line = _strip_line_end(raw)
        record = line if not record else f"{record}\n{line}"
        # A doubled quote toggles twice, so only the parity of quotes matters.
        if line.count('"') % 2:
            in_quotes = not in_quotes
        if not in_quotes:
            break
    return record


def iter_csv_records(stream: TextIO) -> Iterator[str]:
    """Yield every record of the stream in turn."""
    while (record := read_csv_record(stream)) is not None:
        yield record


def parse_csv_record(record: str) -> list[str]:
    """Split a record into fields, honouring quotes and doubled quotes.

    Carriage returns outside quotes are ignored and an unquoted newline
    ends the record.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    quote_pending = False

    for ch in record:
        if quote_pending:
            quote_pending = False
            if ch == '"':
                current.append('"')
                continue
            in_quotes = False

        if in_quotes:
            if ch == '"':
                quote_pending = True
            else:
                current.append(ch)
            continue

        if ch == '"':
            in_quotes = True
        elif ch == ",":
            fields.append("".join(current))
            current = []
        elif ch == "\r":
            continue
        elif ch == "\n":
            break
        else:
            current.append(ch)

    fields.append("".join(current))
    return fields


def encode_csv_field(field: str) -> str:
    """Encode one field, quoting it when it holds a separator, quote or line break."""
    must_quote = any(c in field for c in ',"\n\r')
    escaped = field.replace('"', '""')
    return f'"{escaped}"' if must_quote else escaped


def encode_csv_record(fields: Iterable[str]) -> str:
    """Encode a sequence of fields as one comma-separated record."""
    return ",".join(encode_csv_field(f) for f in fields)