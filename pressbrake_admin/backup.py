"""Timestamped backups of database files, keeping only the newest few."""

from __future__ import annotations

import glob
import shutil
from datetime import datetime
from os import PathLike
from pathlib import Path

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


class BackupError(OSError):
    """Raised when a backup copy cannot be created."""


def cleanup_old_backups(path: str | PathLike[str], keep: int) -> list[Path]:
    """Remove the oldest ``<name>.*.bak`` files beside ``path`` beyond ``keep``.

    Backups are ordered by file name, which sorts by timestamp. Nothing is
    removed when ``keep`` is not positive. Returns the backups removed.
    """
    if keep <= 0:
        return []

    source = Path(path).absolute()
    pattern = glob.escape(source.name) + ".*.bak"
    backups = sorted(
        (p for p in source.parent.glob(pattern) if p.is_file()),
        key=lambda p: p.name,
    )

    removed: list[Path] = []
    for old in backups[: max(0, len(backups) - keep)]:
        try:
            old.unlink()
        except OSError:
            continue
        removed.append(old)
    return removed


def make_timestamped_backup(
    path: str | PathLike[str],
    keep: int = 10,
    now: datetime | None = None,
) -> Path | None:
    """Copy ``path`` to ``<path>.<timestamp>.bak`` and prune old backups.

    Returns the backup path, or ``None`` when ``path`` is not an existing
    regular file. Raises :class:`BackupError` if the copy cannot be made,
    including when a backup with the same timestamp already exists.
    """
    source = Path(path)
    if not source.is_file():
        return None

    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    backup = Path(f"{source}.{stamp}.bak")

    if backup.exists():
        raise BackupError(f"Cannot create backup:\n{backup}")
    try:
        shutil.copy(source, backup)
    except OSError as exc:
        raise BackupError(f"Cannot create backup:\n{backup}") from exc

    cleanup_old_backups(source, keep)
    return backup