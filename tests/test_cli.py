import io
import sys

import pytest

from pressbrake_admin.cli import main, read_admin_pass


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def root(tmp_path):
    password = "password"
    _write(tmp_path / "data" / "admin.pass", f"  {password}  \nignored\n")
    return tmp_path


def _run(monkeypatch, root, text):
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))
    return main(["--root", str(root)])


def test_read_admin_pass_first_line_trimmed(root):
    assert read_admin_pass(root / "data" / "admin.pass") == "password"


def test_read_admin_pass_missing(tmp_path):
    assert read_admin_pass(tmp_path / "nope.pass") == ""


def test_missing_pass_file(monkeypatch, tmp_path, capsys):
    assert _run(monkeypatch, tmp_path, "password\n") == 1
    assert "Cannot read data/admin.pass" in capsys.readouterr().err


def test_wrong_password(monkeypatch, root, capsys):
    assert _run(monkeypatch, root, "secret\n") == 1
    assert "Wrong password." in capsys.readouterr().err


def test_cancelled_password(monkeypatch, root):
    assert _run(monkeypatch, root, "") == 0
    assert not (root / "data" / "material.csv").exists()


def test_edit_session_saves(monkeypatch, root, capsys):
    script = "password\naddcol name\naddrow\nset 1 1 steel\nsave\nquit\n"
    assert _run(monkeypatch, root, script) == 0
    text = (root / "data" / "material.csv").read_text(encoding="utf-8")
    assert text == "name\nsteel\n"
    assert "Press Brake - ADMIN" in capsys.readouterr().out


def test_show_filters_rows(monkeypatch, root, capsys):
    _write(root / "data" / "material.csv", "name,thickness\nsteel,2\nalu,1.5\n")
    assert _run(monkeypatch, root, "password\nshow alu\nquit\n") == 0
    out = capsys.readouterr().out
    assert "alu" in out
    assert "steel" not in out


def test_errors_do_not_end_session(monkeypatch, root, capsys):
    script = "password\nset x 1 v\nbogus\nquit\n"
    assert _run(monkeypatch, root, script) == 0
    out = capsys.readouterr().out
    assert "error:" in out
    assert "unknown command: bogus" in out


def test_use_cancel_keeps_database(monkeypatch, root, capsys):
    script = "password\naddcol name\nuse machine\nc\nsave\nquit\n"
    assert _run(monkeypatch, root, script) == 0
    assert "Switch cancelled." in capsys.readouterr().out
    assert (root / "data" / "material.csv").read_text(encoding="utf-8") == "name\n"
    assert not (root / "data" / "machine.csv").exists()


def test_use_with_save(monkeypatch, root):
    script = "password\naddcol name\nuse machine\ny\nquit\n"
    assert _run(monkeypatch, root, script) == 0
    assert (root / "data" / "material.csv").read_text(encoding="utf-8") == "name\n"


def test_saveall_writes_every_database(monkeypatch, root, capsys):
    assert _run(monkeypatch, root, "password\nsaveall\nquit\n") == 0
    assert "All databases saved (with backups)." in capsys.readouterr().out
    names = ["material.csv", "machine.csv", "machines.csv", "tooling.csv", "options.csv"]
    assert all((root / "data" / name).exists() for name in names)