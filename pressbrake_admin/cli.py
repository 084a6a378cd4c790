"""Command-line front end: a password check followed by an interactive database editor."""

from __future__ import annotations

import argparse
import getpass
import shlex
import sys
from collections.abc import Callable, Sequence
from os import PathLike
from pathlib import Path

from .editor import DbEditor, UnsavedAction
from .paths import CSV_PATHS

TITLE = "Press Brake - ADMIN"
PASS_FILE = "data/admin.pass"

HELP = """Commands (rows and columns are numbered from 1):
  list                    show the databases
  use KEY                 switch database
  show [TEXT]             print the table, only rows containing TEXT if given
  set ROW COL [VALUE]     change a cell (no value clears it)
  addrow                  append an empty row
  delrow ROW [ROW ...]    delete rows
  addcol NAME [numeric]   append a text or numeric column
  delcol COL              delete a column
  load                    reload from disk, dropping changes
  save                    save the current database
  saveall                 save every database
  help                    show this text
  quit                    leave"""


def read_admin_pass(path: str | PathLike[str]) -> str:
    """Return the first line of the password file, trimmed, or ``""`` if unreadable."""
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.readline().strip()
    except OSError:
        return ""


def _ask(prompt: str, secret: bool = False) -> str | None:
    if secret and sys.stdin.isatty():
        try:
            return getpass.getpass(prompt)
        except EOFError:
            return None
    sys.stdout.write(prompt)
    sys.stdout.flush()
    line = sys.stdin.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def _index(text: str) -> int:
    return int(text) - 1


def _cmd_help(editor: DbEditor, args: list[str]) -> None:
    print(HELP)


def _cmd_list(editor: DbEditor, args: list[str]) -> None:
    for key, rel in CSV_PATHS.items():
        marker = "*" if key == editor.key else " "
        print(f"{marker} {key:<10} {rel}")


def _cmd_use(editor: DbEditor, args: list[str]) -> None:
    if len(args) != 1:
        raise ValueError("usage: use KEY")
    action = UnsavedAction.DISCARD
    if editor.dirty:
        answer = _ask("You have unsaved changes. Save before switching database? [y/n/c] ")
        answer = (answer or "").strip().lower()
        action = {"y": UnsavedAction.SAVE, "n": UnsavedAction.DISCARD}.get(
            answer[:1], UnsavedAction.CANCEL
        )
    if not editor.select_database(args[0].upper(), action):
        print("Switch cancelled.")


def _cmd_show(editor: DbEditor, args: list[str]) -> None:
    table = editor.table
    headers = table.headers
    rows = table.rows
    shown = editor.filter_rows(" ".join(args))
    lines = [["#", *headers]] + [[str(i + 1), *rows[i]] for i in shown]
    widths = [max(len(line[c]) for line in lines) for c in range(len(lines[0]))]
    for line in lines:
        print("  ".join(cell.ljust(w) for cell, w in zip(line, widths)).rstrip())


def _cmd_set(editor: DbEditor, args: list[str]) -> None:
    if len(args) < 2:
        raise ValueError("usage: set ROW COL [VALUE]")
    editor.table.set_cell(_index(args[0]), _index(args[1]), " ".join(args[2:]))


def _cmd_addrow(editor: DbEditor, args: list[str]) -> None:
    print(f"Added row {editor.add_row() + 1}.")


def _cmd_delrow(editor: DbEditor, args: list[str]) -> None:
    removed = editor.delete_rows(_index(a) for a in args)
    print(f"Deleted {removed} row(s).")


def _cmd_addcol(editor: DbEditor, args: list[str]) -> None:
    if not args:
        raise ValueError("usage: addcol NAME [numeric]")
    numeric = len(args) > 1 and args[-1].lower() == "numeric"
    name = " ".join(args[:-1] if numeric else args)
    editor.add_column(name, numeric)


def _cmd_delcol(editor: DbEditor, args: list[str]) -> None:
    if len(args) != 1:
        raise ValueError("usage: delcol COL")
    name = editor.delete_column(_index(args[0]))
    if name is not None:
        print(f"Deleted column '{name}'.")


def _cmd_load(editor: DbEditor, args: list[str]) -> None:
    editor.load()


def _cmd_save(editor: DbEditor, args: list[str]) -> None:
    editor.save()
    print(f"Saved {editor.path}.")


def _cmd_saveall(editor: DbEditor, args: list[str]) -> None:
    editor.save_all()
    print("All databases saved (with backups).")


_COMMANDS: dict[str, Callable[[DbEditor, list[str]], None]] = {
    "help": _cmd_help,
    "list": _cmd_list,
    "use": _cmd_use,
    "show": _cmd_show,
    "set": _cmd_set,
    "addrow": _cmd_addrow,
    "delrow": _cmd_delrow,
    "addcol": _cmd_addcol,
    "delcol": _cmd_delcol,
    "load": _cmd_load,
    "save": _cmd_save,
    "saveall": _cmd_saveall,
}


def _run(editor: DbEditor) -> int:
    while True:
        mark = " *" if editor.dirty else ""
        line = _ask(f"{editor.key}{mark}> ")
        if line is None:
            return 0
        try:
            words = shlex.split(line)
        except ValueError as exc:
            print(f"error: {exc}")
            continue
        if not words:
            continue
        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit"):
            return 0
        handler = _COMMANDS.get(command)
        if handler is None:
            print(f"unknown command: {command} (try 'help')")
            continue
        try:
            handler(editor, args)
        except (ValueError, IndexError, OSError) as exc:
            print(f"error: {exc}")


def main(argv: Sequence[str] | None = None) -> int:
    """Check the admin password, then edit the databases interactively."""
    parser = argparse.ArgumentParser(
        prog="pressbrake-admin", description="Edit the press brake CSV databases."
    )
    parser.add_argument("--root", default=".", help="directory that holds data/")
    parser.add_argument(
        "--database", default="MATERIAL", choices=list(CSV_PATHS), help="database to open first"
    )
    args = parser.parse_args(argv)
    root = Path(args.root)

    expected = read_admin_pass(root / PASS_FILE)
    if not expected:
        print(f"Error: Cannot read {PASS_FILE}", file=sys.stderr)
        return 1

    typed = _ask("Password: ", secret=True)
    if typed is None:
        return 0
    if typed != expected:
        print("Access denied: Wrong password.", file=sys.stderr)
        return 1

    print(TITLE)
    try:
        editor = DbEditor(root, args.database)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return _run(editor)


if __name__ == "__main__":
    sys.exit(main())