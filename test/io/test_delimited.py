import datetime
import io
import os

import pytest

from tablepyground.errors import (
    IOFailure,
    ShapeMismatch,
    SourceNotFound,
    TypeCoercionError,
    UnknownColumn,
)
from tablepyground.io import ReadConfig, read_delimited
from tablepyground.table import BOOLEAN, FLOAT, INTEGER, NA, STRING, ColumnType, TypeKind


@pytest.fixture
def sales_csv(tmp_path):
    path = tmp_path / "sales.csv"
    path.write_text(
        "Product,Quantity,Price,Shipped,Date\n"
        "Videogame,8,66.5,TRUE,2024-01-31\n"
        "Laptop,NA,38.72,FALSE,2024-02-01\n"
        "Laptop,7,,T,2024-02-02\n"
    )
    return path


def test_read_with_header(sales_csv):
    t = read_delimited(sales_csv)
    assert t.column_names == ["Product", "Quantity", "Price", "Shipped", "Date"]
    assert t.dtypes["Product"] == STRING
    assert t.dtypes["Quantity"] == INTEGER
    assert t.dtypes["Price"] == FLOAT
    assert t.dtypes["Shipped"] == BOOLEAN
    assert t.dtypes["Date"].kind is TypeKind.DATE
    assert t["Quantity"].values == [8, NA, 7]
    assert t["Price"].values == [66.5, 38.72, NA]
    assert t["Date"][0] == datetime.date(2024, 1, 31)


def test_lineage_is_the_absolute_path(sales_csv):
    t = read_delimited(str(sales_csv))
    assert t.lineage == frozenset({os.path.abspath(sales_csv)})


def test_read_without_header():
    t = read_delimited(io.BytesIO(b"1,a\n2,b\n"), has_header=False)
    assert t.column_names == ["X1", "X2"]
    assert t.to_pydict() == {"X1": [1, 2], "X2": ["a", "b"]}


def test_column_names_replace_header():
    t = read_delimited(io.BytesIO(b"a,b\n1,2\n"), column_names=["x", "y"])
    assert t.to_pydict() == {"x": [1], "y": [2]}


def test_column_names_without_header():
    t = read_delimited(io.BytesIO(b"1,2\n"), has_header=False, column_names=["x", "y"])
    assert t.to_pydict() == {"x": [1], "y": [2]}


def test_column_names_count_must_match():
    with pytest.raises(ShapeMismatch) as exc:
        read_delimited(io.BytesIO(b"a,b\n1,2\n"), column_names=["x"])
    assert exc.value.length == 1
    assert exc.value.expected == 2
    with pytest.raises(ShapeMismatch):
        read_delimited(io.BytesIO(b"1,2\n"), has_header=False, column_names=["x", "y", "z"])


def test_empty_header_fields_are_positional():
    t = read_delimited(io.BytesIO(b"a,,c\n1,2,3\n"))
    assert t.column_names == ["a", "X2", "c"]


def test_skip_lines():
    content = b"# exported data\n# by someone\nn,s\n1,x\n"
    t = read_delimited(io.BytesIO(content), skip_lines=2)
    assert t.to_pydict() == {"n": [1], "s": ["x"]}


def test_delimiter():
    t = read_delimited(io.BytesIO(b"a\tb\n1\t2.5\n"), delimiter="\t")
    assert t.dtypes == {"a": INTEGER, "b": FLOAT}


def test_missing_tokens():
    content = b"a,b\n-,1\nx,\n"
    t = read_delimited(io.BytesIO(content), missing_tokens=["-"])
    assert t["a"].values == [NA, "x"]
    # The empty field is no longer missing, so the column is text.
    assert t["b"].values == ["1", ""]


def test_all_missing_column_is_boolean():
    t = read_delimited(io.BytesIO(b"a,b\n1,NA\n2,\n"))
    assert t.dtypes["b"] == BOOLEAN
    assert t["b"].values == [NA, NA]


def test_type_overrides():
    content = b"level,code\nlow,001\nhigh,002\n"
    t = read_delimited(
        io.BytesIO(content),
        column_type_overrides={
            "level": ColumnType.categorical(["low", "high"]),
            "code": STRING,
        },
    )
    assert t.dtypes["level"] == ColumnType.categorical(["low", "high"])
    assert t["code"].values == ["001", "002"]


def test_type_override_failure_reports_row():
    content = b"n\n1\n2\nthree\n"
    with pytest.raises(TypeCoercionError) as exc:
        read_delimited(io.BytesIO(content), column_type_overrides={"n": INTEGER})
    assert exc.value.column == "n"
    assert exc.value.row == 2
    assert exc.value.value == "three"


def test_type_override_for_unknown_column():
    with pytest.raises(UnknownColumn):
        read_delimited(io.BytesIO(b"a\n1\n"), column_type_overrides={"b": INTEGER})


def test_date_format_override():
    content = b"when\n31/01/2024\n"
    t = read_delimited(io.BytesIO(content), date_format="%d/%m/%Y")
    assert t.dtypes["when"] == ColumnType.date("%d/%m/%Y")
    assert t["when"][0] == datetime.date(2024, 1, 31)


def test_config_and_options_merge():
    config = ReadConfig(delimiter=";", has_header=False)
    t = read_delimited(io.BytesIO(b"h1;h2\n1;2\n"), config=config, has_header=True)
    assert t.to_pydict() == {"h1": [1], "h2": [2]}
    assert config.has_header is False


def test_unknown_option():
    with pytest.raises(TypeError):
        read_delimited(io.BytesIO(b"a\n1\n"), separator=";")


def test_missing_file(tmp_path):
    with pytest.raises(SourceNotFound):
        read_delimited(tmp_path / "nope.csv")
    with pytest.raises(FileNotFoundError):
        read_delimited(tmp_path / "nope.csv")


def test_ragged_rows():
    with pytest.raises(IOFailure):
        read_delimited(io.BytesIO(b"a,b\n1,2\n3\n"))


def test_invalid_delimiter():
    with pytest.raises(ValueError):
        ReadConfig(delimiter=";;")
