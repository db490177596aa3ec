import pyarrow as pa
import pytest

from tablepyground.compute import TableDataSource
from tablepyground.compute.selection import ProjectNode
from tablepyground.errors import UnknownColumn


@pytest.fixture
def mock_data():
    """Create a mock PyArrow Table for testing."""
    data = {"a": [1, 2, 3], "b": [4, 5, 6], "c": [7, 8, 9]}
    table = pa.table(data)
    return table


def test_init_and_str(mock_data):
    """Test the initialization and string representation of ProjectNode."""
    project_node = ProjectNode(["a", "b"], TableDataSource(mock_data))
    assert (
        str(project_node)
        == "ProjectNode(select=['a', 'b'], child=TableDataSource(columns=['a', 'b', 'c'], rows=3))"
    )


def test_select_columns(mock_data):
    """Test selecting specific columns."""
    project_node = ProjectNode(["a", "b"], TableDataSource(mock_data))
    batches = list(project_node.batches())
    assert len(batches) == 1
    batch = batches[0]
    assert batch.num_columns == 2
    assert batch.column_names == ["a", "b"]
    assert batch.column(0).to_pylist() == [1, 2, 3]
    assert batch.column(1).to_pylist() == [4, 5, 6]


def test_select_columns_reordered(mock_data):
    """Test that columns are emitted in the requested order."""
    batch = next(ProjectNode(["c", "a"], TableDataSource(mock_data)).batches())
    assert batch.column_names == ["c", "a"]
    assert batch.column(0).to_pylist() == [7, 8, 9]


def test_project_with_no_columns(mock_data):
    """Test projecting with no columns selected."""
    project_node = ProjectNode([], TableDataSource(mock_data))
    batches = list(project_node.batches())
    assert len(batches) == 1
    assert batches[0].num_columns == 0


def test_project_with_all_columns(mock_data):
    """Test projecting with all columns selected."""
    batch = next(ProjectNode(["a", "b", "c"], TableDataSource(mock_data)).batches())
    assert batch.column_names == ["a", "b", "c"]
    assert batch.num_rows == 3


def test_project_unknown_column(mock_data):
    """Test that selecting a missing column fails."""
    project_node = ProjectNode(["a", "missing"], TableDataSource(mock_data))
    with pytest.raises(UnknownColumn):
        list(project_node.batches())
