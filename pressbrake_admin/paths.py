"""Locations of the CSV databases managed by the admin tool."""

from __future__ import annotations

CSV_PATHS: dict[str, str] = {
    "MATERIAL": "data/material.csv",
    "MACHINE": "data/machine.csv",
    "MACHINES": "data/machines.csv",
    "TOOLING": "data/tooling.csv",
    "OPTIONS": "data/options.csv",
}


def all_csv_paths() -> list[str]:
    """Return the relative paths of every managed CSV file, in display order."""
    return list(CSV_PATHS.values())


def path_for_key(key: str) -> str | None:
    """Return the CSV path for a database key such as ``"MATERIAL"``.

    Keys are case-sensitive; an unknown key gives ``None``.
    """
    return CSV_PATHS.get(key)