import datetime
import io
import logging

from tablepyground.io import read_delimited, write_delimited
from tablepyground.table import NA, Column, ColumnType, make_table


def sample_table():
    return make_table(
        Product=["Videogame", "Laptop", NA],
        Quantity=[8, NA, 7],
        Price=[66.5, 38.72, 77.0],
        Shipped=[True, False, NA],
        Date=[datetime.date(2024, 1, 31), datetime.date(2024, 2, 1), NA],
    )


def test_header_and_rows(tmp_path):
    path = tmp_path / "out.csv"
    write_delimited(sample_table(), path)
    content = path.read_text()
    lines = content.splitlines()
    assert len(lines) == 4
    assert "Product" in lines[0] and "Date" in lines[0]
    assert content.endswith("\n")


def test_round_trip(tmp_path):
    t = sample_table()
    path = tmp_path / "out.csv"
    write_delimited(t, path)
    reread = read_delimited(path)
    assert reread.dtypes == t.dtypes
    assert reread.to_pydict() == t.to_pydict()


def test_round_trip_with_formats(tmp_path):
    level = ColumnType.categorical(["low", "high"])
    when = ColumnType.date("%d/%m/%Y")
    t = make_table(
        level=Column(["high", "low"], dtype=level),
        when=Column([datetime.date(2024, 1, 31), datetime.date(2024, 2, 1)], dtype=when),
    )
    path = tmp_path / "out.csv"
    write_delimited(t, path)
    reread = read_delimited(path, date_format="%d/%m/%Y", column_type_overrides={"level": level})
    assert reread == t


def test_delimiter_and_file_object():
    buffer = io.BytesIO()
    write_delimited(make_table(a=[1, 2], b=[1.5, NA]), buffer, delimiter=";")
    buffer.seek(0)
    reread = read_delimited(buffer, delimiter=";")
    assert reread.to_pydict() == {"a": [1, 2], "b": [1.5, None]}


def test_writing_over_a_source_warns(tmp_path, caplog):
    path = tmp_path / "data.csv"
    path.write_text("a\n1\n")
    t = read_delimited(path)
    with caplog.at_level(logging.WARNING, logger="tablepyground.io.writer"):
        write_delimited(t, path)
    assert "one of the sources" in caplog.text


def test_writing_elsewhere_does_not_warn(tmp_path, caplog):
    source = tmp_path / "data.csv"
    source.write_text("a\n1\n")
    t = read_delimited(source)
    with caplog.at_level(logging.WARNING, logger="tablepyground.io.writer"):
        write_delimited(t, tmp_path / "other.csv")
    assert caplog.text == ""
    assert source.read_text() == "a\n1\n"


def test_empty_strings_are_not_missing():
    buffer = io.BytesIO()
    write_delimited(make_table(s=["x", "", NA, "y"]), buffer)
    buffer.seek(0)
    assert read_delimited(buffer)["s"].values == ["x", "", NA, "y"]
