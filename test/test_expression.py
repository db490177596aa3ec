import pyarrow as pa
import pyarrow.compute as pc
import pytest

from tablepyground.compute.base import ColumnRef, col, lit
from tablepyground.compute.expressions import FunctionCallExpression, MaskExpression
from tablepyground.errors import InvalidSelector, UnknownColumn
from tablepyground.table import NA


@pytest.fixture
def sample_batch():
    return pa.RecordBatch.from_arrays(
        [pa.array([1, 2, 3, 4, 5]), pa.array(["a", "b", "c", "d", "e"])],
        names=["numbers", "letters"],
    )


def test_function_call_expression_init():
    expr = FunctionCallExpression(pc.add, ColumnRef("numbers"), 1)
    assert expr.func == pc.add
    assert len(expr.args) == 2
    assert isinstance(expr.args[0], ColumnRef)
    assert expr.args[1] == 1


def test_function_call_expression_str():
    expr = FunctionCallExpression(pc.add, ColumnRef("numbers"), 1)
    assert str(expr) == "add(ColumnRef(numbers),1)"


def test_operators_build_function_calls():
    expr = (col("letters") == "a") & (col("numbers") > 2)
    assert isinstance(expr, FunctionCallExpression)
    assert str(expr) == "and_kleene(equal(ColumnRef(letters),a),greater(ColumnRef(numbers),2))"


def test_function_call_expression_apply_nested(sample_batch):
    expr = col("numbers") * 2 + 1
    result = expr.apply(sample_batch)
    assert result.equals(pa.array([3, 5, 7, 9, 11]))


def test_reflected_operators(sample_batch):
    assert (10 - col("numbers")).apply(sample_batch).to_pylist() == [9, 8, 7, 6, 5]
    assert (2 * col("numbers")).apply(sample_batch).to_pylist() == [2, 4, 6, 8, 10]


def test_true_division(sample_batch):
    result = (col("numbers") / 2).apply(sample_batch)
    assert result.to_pylist() == [0.5, 1.0, 1.5, 2.0, 2.5]


def test_comparison(sample_batch):
    result = (col("numbers") > 3).apply(sample_batch)
    assert result.equals(pa.array([False, False, False, True, True]))


def test_negation_and_or(sample_batch):
    expr = ~((col("numbers") < 2) | (col("letters") == "e"))
    assert expr.apply(sample_batch).to_pylist() == [False, True, True, True, False]


def test_isin(sample_batch):
    expr = col("letters").isin(["b", "d", "z"])
    assert expr.apply(sample_batch).to_pylist() == [False, True, False, True, False]


def test_null_handling():
    batch = pa.record_batch({"numbers": pa.array([1, None, 3])})
    assert (col("numbers") + 1).apply(batch).to_pylist() == [2, None, 4]
    assert col("numbers").is_missing().apply(batch).to_pylist() == [False, True, False]


def test_kleene_logic_with_nulls():
    batch = pa.record_batch({"flag": pa.array([None, None, True])})
    expr = (col("flag") == True) & lit(False)  # noqa: E712
    assert expr.apply(batch).to_pylist() == [False, False, False]


def test_column_ref_unknown_column():
    batch = pa.record_batch({"numbers": [1, 2, 3]})
    with pytest.raises(UnknownColumn) as exc:
        (col("non_existent") + 1).apply(batch)
    assert exc.value.name == "non_existent"
    assert exc.value.available == ["numbers"]


def test_column_ref_decodes_dictionaries():
    values = pa.array(["low", "high", "low"]).dictionary_encode()
    batch = pa.record_batch({"level": values})
    assert (col("level") == "low").apply(batch).to_pylist() == [True, False, True]


def test_type_mismatch():
    batch = pa.record_batch({"letters": ["a", "b", "c"]})
    with pytest.raises(pa.ArrowNotImplementedError):
        (col("letters") + 1).apply(batch)


def test_mask_expression(sample_batch):
    mask = pa.array([True, False, True, False, True])
    expr = MaskExpression(mask)
    assert expr.apply(sample_batch) is mask
    assert str(expr) == "MaskExpression(rows=5)"


def test_comparison_with_missing_value():
    with pytest.raises(InvalidSelector) as exc:
        col("numbers") == NA
    assert "is_missing" in str(exc.value)
    with pytest.raises(InvalidSelector):
        NA < col("numbers")
