import pyarrow as pa
import pytest

from tablepyground.compute import FilterNode, MaskExpression, TableDataSource, col, lit
from tablepyground.errors import InvalidSelector


@pytest.fixture
def source():
    return TableDataSource(
        pa.record_batch({"facts": ["a", "b", "b", "a"], "numbers": [1, 2, 3, 4]})
    )


def test_filter_expression(source):
    node = FilterNode((col("facts") == "a") & (col("numbers") > 2), source)
    assert next(node.batches()).to_pydict() == {"facts": ["a"], "numbers": [4]}


def test_filter_drops_missing_predicate():
    data = TableDataSource(pa.record_batch({"numbers": pa.array([1, None, 3])}))
    node = FilterNode(col("numbers") > 0, data)
    assert next(node.batches()).column(0).to_pylist() == [1, 3]


def test_filter_mask(source):
    node = FilterNode(MaskExpression(pa.array([True, False, None, True])), source)
    assert next(node.batches()).column(1).to_pylist() == [1, 4]


def test_filter_constant_predicate(source):
    batch = next(FilterNode(lit(False), source).batches())
    assert batch.num_rows == 0
    assert batch.schema.names == ["facts", "numbers"]


def test_filter_non_boolean_predicate(source):
    with pytest.raises(InvalidSelector):
        list(FilterNode(col("numbers") + 1, source).batches())


def test_str(source):
    node = FilterNode(col("numbers") > 2, source)
    assert str(node) == (
        "FilterNode(filter=greater(ColumnRef(numbers),2), "
        "child=TableDataSource(columns=['facts', 'numbers'], rows=4))"
    )
