import pyarrow as pa
import pytest

from tablepyground.compute.datasources import TableDataSource

MOCK_PYARROW_TABLE = pa.table({"col1": [1, 4, 7], "col2": [2, 5, 8], "col3": [3, 6, 9]})


@pytest.mark.parametrize(
    "data, expected_str",
    [
        (MOCK_PYARROW_TABLE, "TableDataSource(columns=['col1', 'col2', 'col3'], rows=3)"),
        (
            MOCK_PYARROW_TABLE.to_batches()[0],
            "TableDataSource(columns=['col1', 'col2', 'col3'], rows=3)",
        ),
    ],
)
def test_init_and_str(data, expected_str):
    data_source = TableDataSource(data)
    assert str(data_source) == expected_str


def test_batches_single_batch():
    data_source = TableDataSource(MOCK_PYARROW_TABLE)
    batches = list(data_source.batches())
    assert len(batches) == 1
    assert batches[0].to_pydict() == MOCK_PYARROW_TABLE.to_pydict()


def test_batches_merges_chunks():
    chunked = pa.Table.from_batches(
        [
            pa.record_batch({"values": [1, 2]}),
            pa.record_batch({"values": [3]}),
        ]
    )
    batches = list(TableDataSource(chunked).batches())
    assert len(batches) == 1
    assert batches[0].column(0).to_pylist() == [1, 2, 3]


def test_batches_empty_table():
    empty = pa.table({"values": pa.array([], pa.int64())})
    batches = list(TableDataSource(empty).batches())
    assert len(batches) == 1
    assert batches[0].num_rows == 0
    assert batches[0].schema.names == ["values"]


def test_poll_schema():
    data_source = TableDataSource(MOCK_PYARROW_TABLE)
    assert data_source.poll_schema().names == ["col1", "col2", "col3"]
