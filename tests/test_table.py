import pytest

from pressbrake_admin.table import CsvTable, parse_number


@pytest.fixture
def events():
    return []


@pytest.fixture
def table(events):
    t = CsvTable(on_change=lambda: events.append(1))
    t.set_table(["name", "length"], [["steel", "10"], ["alu", "20"]])
    return t


def test_set_table_pads_and_cuts_rows():
    t = CsvTable()
    t.set_table(["a", "b"], [["1"], ["1", "2", "3"]])
    assert t.rows == [["1", ""], ["1", "2"]]
    assert t.row_count() == 2
    assert t.column_count() == 2


def test_set_table_does_not_notify(events, table):
    table.set_table(["x"], [["1"], ["2"], ["3"]])
    assert table.row_count() == 3
    assert events == []


def test_cell_out_of_range_is_none(table):
    assert table.cell(5, 0) is None
    assert table.cell(0, -1) is None


def test_set_text_cell_keeps_value(table, events):
    assert table.set_cell(0, 0, "  stainless ") is True
    assert table.cell(0, 0) == "  stainless "
    assert events == [1]


def test_set_numeric_cell_normalizes_comma(table):
    table.set_cell(0, 1, " 12,5 ")
    assert table.cell(0, 1) == "12.5"


def test_set_numeric_cell_rejects_text(table, events):
    with pytest.raises(ValueError):
        table.set_cell(0, 1, "abc")
    assert table.cell(0, 1) == "10"
    assert events == []


def test_set_numeric_cell_blank_clears(table):
    table.set_cell(1, 1, "   ")
    assert table.cell(1, 1) == ""


def test_set_same_value_reports_no_change(table, events):
    assert table.set_cell(0, 0, "steel") is False
    assert events == []


@pytest.mark.parametrize("row,col", [(2, 0), (0, 2), (-1, 0), (0, -1)])
def test_set_cell_out_of_range_raises(table, row, col):
    with pytest.raises(IndexError):
        table.set_cell(row, col, "x")


@pytest.mark.parametrize(
    "header",
    ["Length", "max_ton", "Min Ton", "press-tons", "KW", "a", "price"],
)
def test_numeric_heuristic_headers(header):
    t = CsvTable()
    t.set_table([header], [])
    assert t.is_numeric_column(0) is True


@pytest.mark.parametrize("header", ["name", "material", "notes"])
def test_text_headers_not_numeric(header):
    t = CsvTable()
    t.set_table([header], [])
    assert t.is_numeric_column(0) is False


def test_is_numeric_column_out_of_range(table):
    assert table.is_numeric_column(9) is False


def test_explicit_schema_marks_column_numeric(table):
    table.set_numeric_columns({" Name "})
    assert table.numeric_columns == frozenset({"name"})
    assert table.is_numeric_column(0) is True
    with pytest.raises(ValueError):
        table.set_cell(0, 0, "steel x")


def test_add_numeric_column(table, events):
    table.add_column("Code", numeric=True)
    assert table.headers == ["name", "length", "Code"]
    assert all(r[2] == "" for r in table.rows)
    assert "code" in table.numeric_columns
    assert table.is_numeric_column(2) is True
    assert events == [1]


def test_add_text_column_removes_schema_entry(table):
    table.set_numeric_columns({"code"})
    table.add_column("code", numeric=False)
    assert "code" not in table.numeric_columns


def test_add_column_without_type_keeps_schema(table):
    table.set_numeric_columns({"code"})
    table.add_column("code")
    assert table.numeric_columns == frozenset({"code"})


def test_delete_column_removes_cells_and_schema(table, events):
    table.add_column("Code", numeric=True)
    table.delete_column(2)
    assert table.headers == ["name", "length"]
    assert all(len(r) == 2 for r in table.rows)
    assert table.numeric_columns == frozenset()
    assert len(events) == 2


def test_delete_column_invalid_is_ignored(table, events):
    table.delete_column(5)
    table.delete_column(-1)
    assert table.headers == ["name", "length"]
    assert events == []


def test_add_and_delete_row(table, events):
    table.add_row()
    assert table.row_count() == 3
    assert table.rows[-1] == ["", ""]
    table.delete_row(0)
    assert [r[0] for r in table.rows] == ["alu", ""]
    assert len(events) == 2


def test_delete_row_invalid_is_ignored(table, events):
    table.delete_row(7)
    assert table.row_count() == 2
    assert events == []


def test_clear_removes_everything(table):
    table.set_numeric_columns({"x"})
    table.clear()
    assert table.headers == []
    assert table.rows == []
    assert table.numeric_columns == frozenset()


def test_rows_are_copies(table):
    table.rows[0][0] = "changed"
    assert table.cell(0, 0) == "steel"


@pytest.mark.parametrize("text", ["-12", "12", "12.5", "12.", ".5", "+3", " 7 "])
def test_parse_number_accepts(text):
    assert parse_number(text) == float(text.strip())


def test_parse_number_decimal_comma_matches_dot():
    assert parse_number("12,5") == parse_number("12.5")


def test_parse_number_leading_dot():
    assert parse_number(".5") == 0.5


@pytest.mark.parametrize("text", ["", "   ", "abc", "1e5", "1.2.3", "1,2,3", "-", ".", "١٢"])
def test_parse_number_rejects(text):
    with pytest.raises(ValueError):
        parse_number(text)