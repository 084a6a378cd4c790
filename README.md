# pressbrake-admin

An administration tool for the CSV databases behind a press brake setup
program. It edits the material, machine, tooling and option tables, checks
values in numeric columns before storing them, and writes a timestamped
backup of each file before it is overwritten. Only the last ten backups of
each file are kept.

## Installation

```
pip install .
```

## Running

From the directory that holds the `data/` folder:

```
pressbrake-admin
```

Options:

- `--root DIR`: directory that holds `data/` (default: the current directory)
- `--database KEY`: database to open first (default: `MATERIAL`)

The tool first reads the admin password from the first line of
`data/admin.pass` (trimmed). If that file is missing, unreadable or empty it
stops with an error and exit status 1. It then asks for the password (hidden
when typing at a terminal); a wrong password denies access with exit status 1.

After that it shows a prompt such as `MATERIAL> `, with ` *` added while there
are unsaved changes. Rows and columns are numbered from 1.

| Command                 | Effect                                              |
|-------------------------|-----------------------------------------------------|
| `list`                  | show the databases, marking the current one         |
| `use KEY`               | switch database; asks whether to save unsaved changes (`y`/`n`, anything else cancels) |
| `show [TEXT]`           | print the table; with TEXT, only rows where some cell contains it, ignoring case |
| `set ROW COL [VALUE]`   | change a cell; no value clears it                   |
| `addrow`                | append an empty row                                 |
| `delrow ROW [ROW ...]`  | delete rows                                         |
| `addcol NAME [numeric]` | append a text column, or a numeric one              |
| `delcol COL`            | delete a column                                     |
| `load`                  | reload from disk, dropping changes                  |
| `save`                  | save the current database                           |
| `saveall`               | save the current database, then rewrite every other one |
| `help`                  | list the commands                                   |
| `quit` / `exit`         | leave (end of input also leaves)                    |

Errors such as a non-numeric value in a numeric column are printed and the
prompt continues.

## Databases

| Key        | File                 |
|------------|----------------------|
| `MATERIAL` | `data/material.csv`  |
| `MACHINE`  | `data/machine.csv`   |
| `MACHINES` | `data/machines.csv`  |
| `TOOLING`  | `data/tooling.csv`   |
| `OPTIONS`  | `data/options.csv`   |

Files are read as UTF-8. Quoted fields may contain commas, doubled quotes and
line breaks. Blank records are skipped and every row is padded or cut to the
width of the header row. A missing or empty file opens as an empty table.

Each CSV file may have a sidecar `<file>.schema.json` that lists its numeric
columns by lower-case header name:

```json
{
    "numeric": ["length", "minton"]
}
```

It is rewritten on every save. Values in numeric columns must be numbers such
as `-12`, `12.5`, `12.` or `.5`; a decimal comma is accepted and stored as a
dot, and blank text clears the cell. Columns not listed in the schema are
still treated as numeric when their name is a common measurement such as
`length`, `thickness`, `price` or `kw`, or ends in `ton` or `tons`.

## Backups

Before a file is saved it is copied to `<file>.<YYYY-MM-DD_HH-MM-SS>.bak`
next to it, and the oldest backups beyond the newest ten are removed. If the
copy cannot be made, a `RuntimeWarning` is issued and the file is saved
anyway.

## Using the library

```python
from pressbrake_admin.editor import DbEditor

editor = DbEditor("/path/to/project", "MATERIAL")
editor.add_column("name")
editor.add_column("thickness", numeric=True)
row = editor.add_row()
editor.table.set_cell(row, 0, "S235")
editor.table.set_cell(row, 1, "2,5")   # stored as "2.5"
editor.save()
```

Modules:

- `pressbrake_admin.paths`: `all_csv_paths()`, `path_for_key(key)`
- `pressbrake_admin.csvrecord`: `read_csv_record`, `iter_csv_records`,
  `parse_csv_record`, `encode_csv_field`, `encode_csv_record`
- `pressbrake_admin.backup`: `make_timestamped_backup`,
  `cleanup_old_backups`, `BackupError`
- `pressbrake_admin.table`: `CsvTable`, `parse_number`
- `pressbrake_admin.editor`: `DbEditor`, `UnsavedAction`, `load_table`,
  `save_table`, `load_schema`, `save_schema`, `schema_path_for`
- `pressbrake_admin.cli`: `main`, `read_admin_pass`

## What it does not do

There is no windowed table view: editing happens at the text prompt
described above, one command at a time. The password can be read but not
changed from within the tool; edit `data/admin.pass` directly.

## Tests

```
pip install .[test]
pytest
```