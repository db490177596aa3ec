"""Query plan nodes that implement filtering of rows.

A common request in queries is to filter the data to
pick only the rows that respect a specific filter.
An example is the ``WHERE`` condition in SQL queries
or the ``filter`` verb of dataframe libraries.

This module implements the basic filtering capabilities.
"""

from typing import Iterator

import pyarrow as pa

from ..errors import InvalidSelector
from .base import Expression, QueryPlanNode


class FilterNode(QueryPlanNode):
    """Filter data based on a predicate expression.

    The filter expects an expression that when applied
    to the batch of data being filtered returns ``true``
    or ``false`` for each row in the data to mark which
    rows have to be preserved and which rows have to be discarded.
    Rows for which the predicate is missing are discarded too.

    >>> import pyarrow as pa
    >>> from tablepyground.compute import col, TableDataSource
    >>> data = pa.record_batch({"values": [1, 2, 3, 4, 5]})
    >>> next(FilterNode(col("values") > 3, TableDataSource(data)).batches())
    pyarrow.RecordBatch
    values: int64
    ----
    values: [4,5]
    """

    def __init__(self, expression: Expression, child: QueryPlanNode) -> None:
        """
        :param expression: The predicate expression to filter with.
        :param child: The node emitting the data to be filtered.
        """
        self.expression = expression
        self.child = child

    def __str__(self) -> str:
        return f"FilterNode(filter={self.expression}, child={self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Apply the filtering to the child node.

        For each recordbatch yielded by the child node,
        apply the expression and get back a mask
        (an array of only true/false values).

        Based on the mask filter the rows of the batch
        and return only those matching the filter.
        """
        for batch in self.child.batches():
            mask = self.expression.apply(batch)
            if not pa.types.is_boolean(mask.type):
                raise InvalidSelector(
                    f"Filter predicate {self.expression} must produce booleans, got {mask.type}"
                )
            if isinstance(mask, pa.Scalar):
                # A constant predicate keeps everything or nothing.
                mask = pa.array([mask.as_py()] * batch.num_rows, pa.bool_())
            yield batch.filter(mask, null_selection_behavior="drop")
