"""The tablepyground Compute Engine

The compute engine defines the in-memory
format for query plans and the plan nodes
supported. Every selection of rows or columns
of a :class:`tablepyground.table.Table` is executed
as a query plan.

The compute engine is tightly bound to Apache Arrow,
thus the engine will expect to always deal with
:class:`pyarrow.RecordBatch` and emit a new RecordBatch
as the result of the node execution.

This allows to easily build compute pipelines like::

    (RecordBatch)-->Node1--(RecordBatch)-->Node2--(RecordBatch)-->...

The query plan nodes themselves are in charge of their execution,
this keeps the behavior near to the node and thus makes easy to
know how a Node is actually executed without having to look around too much.

Building a query plan requires to combine the nodes that we want
to be executed starting with a ``DataSource`` node as the
leaf node of a query:

>>> import pyarrow as pa
>>> data = pa.table({
...    "animals": pa.array(["Flamingo", "Horse", "Brittle stars", "Centipede"]),
...    "n_legs": pa.array([2, 4, 5, 100])
... })
>>>
>>> from tablepyground.compute import col, TableDataSource, FilterNode
>>> query = FilterNode(col("n_legs") >= 5, child=TableDataSource(data))
>>> for data in query.batches():
...     print(data.to_pydict())
{'animals': ['Brittle stars', 'Centipede'], 'n_legs': [5, 100]}
"""

from .base import ColumnRef, Expression, Literal, QueryPlanNode, col, lit
from .datasources import TableDataSource
from .expressions import FunctionCallExpression, MaskExpression
from .filtering import FilterNode
from .pagination import PaginateNode, TakeNode
from .selection import ProjectNode

__all__ = (
    "QueryPlanNode",
    "Expression",
    "TableDataSource",
    "FilterNode",
    "FunctionCallExpression",
    "MaskExpression",
    "col",
    "lit",
    "ColumnRef",
    "Literal",
    "PaginateNode",
    "TakeNode",
    "ProjectNode",
)
