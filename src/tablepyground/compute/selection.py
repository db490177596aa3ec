"""Query plan nodes that implement projection of columns.

A common request in queries is to select specific columns.
An example is the ``SELECT`` clause in SQL queries.

This module implements the basic projection capabilities.
"""

from typing import Iterator

import pyarrow as pa

from ..errors import UnknownColumn
from .base import QueryPlanNode


class ProjectNode(QueryPlanNode):
    """Project data by selecting specific columns.

    The projection expects a list of column names to select,
    the columns are emitted in the order they were requested
    which doesn't need to be the order they have in the data.

    >>> import pyarrow as pa
    >>> from tablepyground.compute import TableDataSource
    >>> data = pa.record_batch({"a": [1, 2, 3], "b": [4, 5, 6]})
    >>> next(ProjectNode(["b", "a"], TableDataSource(data)).batches())
    pyarrow.RecordBatch
    b: int64
    a: int64
    ----
    b: [4,5,6]
    a: [1,2,3]
    """

    def __init__(self, select: list[str], child: QueryPlanNode) -> None:
        """
        :param select: The list of column names to select.
                       ``[]`` means select no columns at all.
        :param child: The node emitting the data to be projected.
        """
        self.select = list(select)
        self.child = child

    def __str__(self) -> str:
        return f"ProjectNode(select={self.select}, child={self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Apply the projection to the child node.

        For each recordbatch yielded by the child node
        select the requested columns, failing if any
        of them doesn't exist in the data.
        """
        for batch in self.child.batches():
            for name in self.select:
                if name not in batch.schema.names:
                    raise UnknownColumn(name, batch.schema.names)
            # Selecting no columns still keeps the number of rows.
            yield batch.select(self.select)
