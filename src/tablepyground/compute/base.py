"""Base classes and interfaces for Compute Engine

This module defines the base components that are
necessary to represent a query plan and execute it.
"""

import abc
from typing import Any, Iterable, Iterator

import pyarrow as pa
import pyarrow.compute as pc

from ..errors import InvalidSelector, UnknownColumn


class QueryPlanNode(abc.ABC):
    """A node of a query execution plan.

    The Query plan is represented as a tree
    of nodes. Each node is a step in the execution
    and all previous steps are children of the
    last one.

    For example selecting some rows of a table
    and then only some of its columns is the plan::

        TableDataSource -> FilterNode(predicate) -> ProjectNode(columns)

    That would be a plan where the last step
    is the projection, and the FilterNode is a child
    of the projection node.

    Each Node accepts :class:`pyarrow.RecordBatch`
    data as its input and emits a new
    :class:`pyarrow.RecordBatch` as its output.

    The base `QueryPlanNode` class does nothing
    and purely acts as the interface that all nodes
    must implement. Actual work will be done
    in the subclasses.
    """

    @abc.abstractmethod
    def batches(self) -> Iterator[pa.RecordBatch]:
        """Emits the batches for the next node.

        Each QueryPlan node is expected to be able to
        generate data that has to be provided to the next
        node in the plan.

        Usually this happens by consuming data from its
        child nodes, transforming it somehow, and yielding
        it back to the next consumer.
        """
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the node."""
        ...


class Expression(abc.ABC):
    """Expression to apply to a RecordBatch.

    Expressions are some form of operation that
    has to be applied to the data of a :class:`pyarrow.RecordBatch`
    to create new data.

    Typical example of expressions are: ``A > 2``
    which is expected to compare each value of column A
    of the RecordBatch with 2 and return the result.

    As our engine is Column Major, applying an expression
    always results in a new column, thus in a
    :class:`pyarrow.Array` that contains the data
    for that column.

    Expressions can be combined with the python operators,
    each operator builds a new expression that calls
    the matching :mod:`pyarrow.compute` function::

        (col("facts") == "a") & (col("numbers") > 2)

    Comparisons involving missing values are missing themselves
    and ``&``, ``|`` follow the Kleene logic, so ``false & NA`` is ``false``.
    """

    @abc.abstractmethod
    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Apply the expression to a RecordBatch.

        Expression classes must implement this method
        to dictate what will happen when an expression
        is applied.
        """
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the expression."""
        ...

    def _call(self, func: callable, *args: Any) -> "Expression":
        from .expressions import FunctionCallExpression

        _reject_missing(func, args)
        return FunctionCallExpression(func, self, *args)

    def _rcall(self, func: callable, other: Any) -> "Expression":
        from .expressions import FunctionCallExpression

        _reject_missing(func, (other,))
        return FunctionCallExpression(func, other, self)

    def __eq__(self, other: Any) -> "Expression":  # type: ignore[override]
        return self._call(pc.equal, other)

    def __ne__(self, other: Any) -> "Expression":  # type: ignore[override]
        return self._call(pc.not_equal, other)

    def __lt__(self, other: Any) -> "Expression":
        return self._call(pc.less, other)

    def __le__(self, other: Any) -> "Expression":
        return self._call(pc.less_equal, other)

    def __gt__(self, other: Any) -> "Expression":
        return self._call(pc.greater, other)

    def __ge__(self, other: Any) -> "Expression":
        return self._call(pc.greater_equal, other)

    def __and__(self, other: Any) -> "Expression":
        return self._call(pc.and_kleene, other)

    def __rand__(self, other: Any) -> "Expression":
        return self._rcall(pc.and_kleene, other)

    def __or__(self, other: Any) -> "Expression":
        return self._call(pc.or_kleene, other)

    def __ror__(self, other: Any) -> "Expression":
        return self._rcall(pc.or_kleene, other)

    def __invert__(self) -> "Expression":
        return self._call(pc.invert)

    def __add__(self, other: Any) -> "Expression":
        return self._call(pc.add, other)

    def __radd__(self, other: Any) -> "Expression":
        return self._rcall(pc.add, other)

    def __sub__(self, other: Any) -> "Expression":
        return self._call(pc.subtract, other)

    def __rsub__(self, other: Any) -> "Expression":
        return self._rcall(pc.subtract, other)

    def __mul__(self, other: Any) -> "Expression":
        return self._call(pc.multiply, other)

    def __rmul__(self, other: Any) -> "Expression":
        return self._rcall(pc.multiply, other)

    def __truediv__(self, other: Any) -> "Expression":
        return self._call(_true_divide, other)

    def isin(self, values: Iterable[Any]) -> "Expression":
        """True for the rows whose value is one of ``values``."""
        from .expressions import FunctionCallExpression

        value_set = pa.array(list(values))
        return FunctionCallExpression(_is_in, self, value_set)

    def is_missing(self) -> "Expression":
        """True for the rows whose value is missing."""
        return self._call(pc.is_null)

    __hash__ = object.__hash__


def _reject_missing(func: callable, args: tuple[Any, ...]) -> None:
    from ..table.types import NA

    if any(arg is NA for arg in args):
        raise InvalidSelector(
            f"Can not apply {func.__name__} to NA, the result would be missing for every row, "
            "use .is_missing() to select the rows with missing values"
        )


def _true_divide(left: pa.Array, right: Any) -> pa.Array:
    return pc.divide(pc.cast(left, pa.float64()), right)


def _is_in(values: pa.Array, value_set: pa.Array) -> pa.Array:
    return pc.is_in(values, value_set=value_set)


class ColumnRef(Expression):
    """References a column in a record batch.

    When another expression or the engine need
    to operate on a specific column, we will
    need a way to reference that column and its data.

    This expression is aware of the column and when
    applied to a record batch returns the data for
    that column. Categorical columns are returned
    as their labels, so they can be compared to strings.
    """

    def __init__(self, name: str) -> None:
        """
        :param name: The name of the column being referenced.
        """
        self.name = name

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Get the data for the column."""
        if self.name not in batch.schema.names:
            raise UnknownColumn(self.name, batch.schema.names)
        data = batch.column(self.name)
        if pa.types.is_dictionary(data.type):
            data = data.dictionary_decode()
        return data

    def __str__(self) -> str:
        return f"ColumnRef({self.name})"


class Literal(Expression):
    """A constant value, the same for every row."""

    def __init__(self, value: Any) -> None:
        """
        :param value: The python value of the literal.
        """
        self.value = value

    def apply(self, batch: pa.RecordBatch) -> pa.Scalar:
        """Get the value as a pyarrow scalar."""
        return pa.scalar(self.value)

    def __str__(self) -> str:
        return repr(self.value)


col = ColumnRef
lit = Literal
