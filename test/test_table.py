import pyarrow as pa
import pytest

from tablepyground.errors import (
    DuplicateColumn,
    InvalidSelector,
    ShapeMismatch,
    TableError,
    UnknownColumn,
    UnnamedColumn,
)
from tablepyground.table import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    NA,
    STRING,
    Column,
    ColumnType,
    Table,
    make_table,
)


@pytest.fixture
def vectors():
    return {
        "v1": Column([1, 2, 3, 4], name="v1"),
        "v2": Column(["a", "b", "c", "d"], name="v2"),
        "v3": Column([True, False, False, True], name="v3"),
        "v4": Column([1.1, 1.2, 3.3], name="v4"),
    }


def test_unequal_lengths_are_rejected(vectors):
    with pytest.raises(ShapeMismatch) as exc:
        make_table(vectors["v1"], vectors["v2"], vectors["v3"], vectors["v4"])
    assert exc.value.column == "v4"
    assert exc.value.length == 3
    assert exc.value.expected == 4
    assert "v4" in str(exc.value)


def test_padding_with_missing_value_makes_the_table(vectors):
    v4 = vectors["v4"].append(NA)
    t = make_table(vectors["v1"], vectors["v2"], vectors["v3"], v4)
    assert t.shape == (4, 4)
    assert len(t) == len(v4)
    assert t.dtypes == {"v1": INTEGER, "v2": STRING, "v3": BOOLEAN, "v4": FLOAT}
    assert t["v4"][3] is NA


@pytest.mark.parametrize("length", [0, 1, 5])
def test_equal_lengths_always_succeed(length):
    t = make_table(a=list(range(length)), b=["x"] * length)
    assert len(t) == length


def test_names(vectors):
    t = make_table(
        [1, 2, 3, 4],
        ("named", [5, 6, 7, 8]),
        vectors["v1"],
        renamed=vectors["v2"],
    )
    assert t.column_names == ["X1", "named", "v1", "renamed"]


def test_duplicate_names():
    with pytest.raises(DuplicateColumn):
        make_table(("a", [1]), a=[2])


def test_table_requires_named_columns():
    with pytest.raises(UnnamedColumn) as exc:
        Table([Column([1])])
    assert isinstance(exc.value, TableError)
    with pytest.raises(UnnamedColumn):
        make_table(a=[1]).with_column(Column([2]))


def test_string_pairs_are_values():
    t = make_table(("a", "b"), ("c", ["x", "y"]))
    assert t.column_names == ["X1", "c"]
    assert t["X1"].values == ["a", "b"]


def test_table_without_columns_keeps_rows():
    t = Table([], num_rows=3)
    assert t.shape == (3, 0)
    assert t.to_recordbatch().num_rows == 3
    assert t != Table([])
    with pytest.raises(ShapeMismatch):
        t.with_column(Column([1, 2], name="a"))
    assert t.with_column(Column([1, 2, 3], name="a")).shape == (3, 1)


def test_empty_table():
    t = make_table()
    assert t.shape == (0, 0)
    assert t.column_names == []


def test_getitem(vectors):
    t = make_table(vectors["v1"], vectors["v2"])
    assert t["v2"] is vectors["v2"]
    assert t[0] is vectors["v1"]
    assert t[-1] is vectors["v2"]
    with pytest.raises(UnknownColumn):
        t["nope"]
    with pytest.raises(InvalidSelector):
        t[["v1"]]


def test_rows_and_pydict():
    t = make_table(a=[1, NA], b=["x", "y"])
    assert list(t.rows()) == [{"a": 1, "b": "x"}, {"a": NA, "b": "y"}]
    assert t.to_pydict() == {"a": [1, None], "b": ["x", "y"]}


def test_rename_returns_new_table():
    t = make_table(a=[1], b=[2])
    renamed = t.rename({"a": "z"})
    assert renamed.column_names == ["z", "b"]
    assert t.column_names == ["a", "b"]
    with pytest.raises(UnknownColumn):
        t.rename({"missing": "x"})


def test_cast():
    t = make_table(level=["low", "high", "low"], n=[1, 2, 3])
    casted = t.cast({"level": ColumnType.categorical(["low", "high"]), "n": FLOAT})
    assert casted.dtypes["level"] == ColumnType.categorical(["low", "high"])
    assert casted["n"].values == [1.0, 2.0, 3.0]
    assert t.dtypes["level"] == STRING


def test_with_column():
    t = make_table(a=[1, 2])
    added = t.with_column(Column(["x", "y"]), name="b")
    assert added.column_names == ["a", "b"]
    replaced = added.with_column(Column([3, 4], name="a"))
    assert replaced["a"].values == [3, 4]
    assert replaced.column_names == ["a", "b"]
    with pytest.raises(ShapeMismatch):
        t.with_column(Column([1, 2, 3], name="c"))


def test_arrow_round_trip():
    t = make_table(
        a=[1, NA],
        level=Column(["x", "y"], dtype=ColumnType.categorical(["y", "x"])),
    )
    data = t.to_arrow()
    assert isinstance(data, pa.Table)
    assert Table.from_arrow(data) == t


def test_equality():
    assert make_table(a=[1, 2]) == make_table(a=[1, 2])
    assert make_table(a=[1, 2]) != make_table(a=[2, 1])
    assert make_table(a=[1], b=[2]) != make_table(b=[2], a=[1])


def test_str():
    t = make_table(facts=["a", "b"], numbers=[1, NA])
    assert str(t) == (
        "facts | numbers\n"
        "<chr> | <int>\n"
        "----- | -------\n"
        "a     | 1\n"
        "b     | NA"
    )
