"""Selection of rows and columns of a Table.

Extracting a single column and subsetting a table are
two different operations with two different results:

* :func:`get_column_by_name` and :func:`get_column_by_position`
  return a bare :class:`Column`.
* :func:`select_columns` always returns a :class:`Table`,
  even when a single column was selected.

Rows are selected with :func:`select_rows`, which accepts
any of the following selectors:

* an expression built on columns, like ``(col("a") > 2) & (col("b") == "x")``
* a python function receiving each row as a dictionary
* a mask of booleans with one entry per row
* a position, a list of positions or a ``slice``

Positions are 0 based, and negative positions count
from the end as they do for python sequences.

Selections are executed as query plans of the compute engine::

    TableDataSource -> FilterNode|TakeNode|PaginateNode -> ProjectNode

Rows are always selected before columns, so an expression can
refer to columns that are not part of the projection.
"""

from typing import Any, Callable, Sequence

import pyarrow as pa

from ..compute.base import Expression, QueryPlanNode
from ..compute.datasources import TableDataSource
from ..compute.expressions import MaskExpression
from ..compute.filtering import FilterNode
from ..compute.pagination import PaginateNode, TakeNode
from ..compute.selection import ProjectNode
from ..errors import (
    DuplicateColumn,
    IndexOutOfRange,
    InvalidSelector,
    ShapeMismatch,
    UnknownColumn,
)
from .column import Column
from .table import Table
from .types import NA, TypeKind, is_missing


class RowPredicateExpression(Expression):
    """Evaluate a python function on every row.

    The function receives each row as a dictionary
    ``{column_name: value}`` with :data:`NA` in place
    of the missing values and must return a value whose
    truthiness tells if the row is selected.

    Like for the other predicates, a row whose result is missing
    is discarded. That is the case when the function returns
    ``NA`` or fails with :class:`TypeError` because it operated
    on ``NA``, for example comparing it to a number.

    This is far slower than building expressions out of
    columns, as the function is invoked once per row,
    but it allows arbitrary python logic.
    """

    def __init__(self, func: Callable[[dict[str, Any]], Any]) -> None:
        """
        :param func: The function invoked for each row.
        """
        self.func = func

    def __str__(self) -> str:
        func_name = getattr(self.func, "__name__", repr(self.func))
        return f"RowPredicateExpression({func_name})"

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Invoke the function on each row and collect the results."""
        names = batch.schema.names
        results = []
        for row in batch.to_pylist():
            row = {name: NA if row[name] is None else row[name] for name in names}
            results.append(self._evaluate(row))
        return pa.array(results, pa.bool_())

    def _evaluate(self, row: dict[str, Any]) -> bool | None:
        has_missing = any(value is NA for value in row.values())
        try:
            result = self.func(row)
        except TypeError:
            if not has_missing:
                raise
            return None
        if is_missing(result):
            return None
        return bool(result)


def get_column_by_position(t: Table, i: int) -> Column:
    """Extract the column at position ``i``."""
    return t.columns[_normalize_position(i, t.num_columns, "column")]


def get_column_by_name(t: Table, name: str) -> Column:
    """Extract the column named ``name``."""
    if name not in t:
        raise UnknownColumn(name, t.column_names)
    return t.columns[t.column_names.index(name)]


def select_columns(t: Table, selector: str | int | Sequence[str | int]) -> Table:
    """Get a new Table with only the selected columns.

    The selector can be a column name, a column position or
    a sequence of them, the columns of the resulting table
    will be in the order they were selected.

    The result is always a Table, with as many rows as ``t``
    and as many columns as the selector has entries.
    """
    names = _resolve_column_names(t, selector)
    plan = ProjectNode(names, TableDataSource(t.to_recordbatch()))
    return _collect(plan, t)


def select_rows(t: Table, selector: Any, columns: Any = None) -> Table:
    """Get a new Table with only the selected rows.

    See the module documentation for the accepted selectors.
    ``None`` selects all the rows.

    Selecting no rows is not an error, the result will be
    a Table with the same columns and zero rows.

    :param t: The table to select the rows of.
    :param selector: Which rows to keep.
    :param columns: Optionally which columns to keep, with the same
                    semantic of :func:`select_columns`. The projection
                    is applied after the rows are selected.
    """
    plan: QueryPlanNode = TableDataSource(t.to_recordbatch())
    if selector is not None:
        plan = _row_selection_node(t, selector, plan)
    if columns is not None:
        plan = ProjectNode(_resolve_column_names(t, columns), plan)
    return _collect(plan, t)


def select(t: Table, rows: Any = None, cols: Any = None) -> Table:
    """Select rows and columns at once.

    Equivalent to ``select_columns(select_rows(t, rows), cols)``,
    ``None`` for any of the two means "all of them".
    """
    return select_rows(t, rows, cols)


def head(t: Table, n: int = 6) -> Table:
    """Get a new Table with the first ``n`` rows of ``t``."""
    if n < 0:
        n = max(0, t.num_rows + n)
    return _collect(PaginateNode(0, n, TableDataSource(t.to_recordbatch())), t)


def _row_selection_node(t: Table, selector: Any, child: QueryPlanNode) -> QueryPlanNode:
    if isinstance(selector, Expression):
        return FilterNode(selector, child)

    if isinstance(selector, slice):
        return TakeNode(range(t.num_rows)[selector], child)

    if isinstance(selector, bool):
        raise InvalidSelector("A single boolean is not a valid row selector, use a mask")

    if isinstance(selector, int):
        return TakeNode([_normalize_position(selector, t.num_rows, "row")], child)

    if isinstance(selector, Column):
        if selector.dtype.kind is not TypeKind.BOOLEAN:
            raise InvalidSelector(f"Only boolean columns can select rows, got {selector.dtype}")
        return FilterNode(MaskExpression(_check_mask(t, selector.array)), child)

    if isinstance(selector, (pa.Array, pa.ChunkedArray)):
        if not pa.types.is_boolean(selector.type):
            raise InvalidSelector(f"Only boolean arrays can select rows, got {selector.type}")
        if isinstance(selector, pa.ChunkedArray):
            selector = selector.combine_chunks()
        return FilterNode(MaskExpression(_check_mask(t, selector)), child)

    if callable(selector):
        return FilterNode(RowPredicateExpression(selector), child)

    if isinstance(selector, Sequence) and not isinstance(selector, str):
        selector = list(selector)
        if selector and all(isinstance(v, bool) for v in selector):
            return FilterNode(MaskExpression(_check_mask(t, pa.array(selector, pa.bool_()))), child)
        if all(isinstance(v, int) and not isinstance(v, bool) for v in selector):
            return TakeNode([_normalize_position(v, t.num_rows, "row") for v in selector], child)
        raise InvalidSelector(
            "Row selectors must be all booleans or all positions, "
            f"got {[type(v).__name__ for v in selector]}"
        )

    raise InvalidSelector(f"Unsupported row selector {selector!r}")


def _check_mask(t: Table, mask: pa.Array) -> pa.Array:
    if len(mask) != t.num_rows:
        raise ShapeMismatch(
            f"Mask has {len(mask)} entries, but the table has {t.num_rows} rows",
            length=len(mask),
            expected=t.num_rows,
        )
    return mask


def _resolve_column_names(t: Table, selector: Any) -> list[str]:
    if isinstance(selector, (str, int)):
        selector = [selector]
    elif not isinstance(selector, Sequence):
        raise InvalidSelector(f"Unsupported column selector {selector!r}")

    names = []
    for item in selector:
        if isinstance(item, bool):
            raise InvalidSelector("Booleans are not valid column selectors")
        if isinstance(item, int):
            name = t.column_names[_normalize_position(item, t.num_columns, "column")]
        elif isinstance(item, str):
            if item not in t:
                raise UnknownColumn(item, t.column_names)
            name = item
        else:
            raise InvalidSelector(f"Columns are selected by name or position, got {item!r}")
        if name in names:
            raise DuplicateColumn(name)
        names.append(name)
    return names


def _normalize_position(position: int, size: int, axis: str) -> int:
    if not -size <= position < size:
        raise IndexOutOfRange(position, size, axis)
    return position % size


def _collect(plan: QueryPlanNode, source: Table) -> Table:
    """Run a query plan and wrap its result back into a Table.

    The columns keep the types they had in the source table,
    as the compute engine only reorders or drops data.
    """
    batches = list(plan.batches())
    data = pa.Table.from_batches(batches)
    dtypes = source.dtypes
    columns = [
        Column._from_arrow(data.column(name).combine_chunks(), dtypes[name], name)
        for name in data.schema.names
    ]
    return Table(
        columns,
        lineage=source.lineage,
        num_rows=sum(batch.num_rows for batch in batches),
    )
