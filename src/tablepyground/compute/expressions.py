"""Expressions executed by compute engine nodes.

The Compute Engine will sometimes need to filter data
or emit new data. This will be performed by nodes that
need to know how the data must be filtered or emitted.

Filters will need a ``predicate``, so an expression that
returns ``true`` or ``false`` for each row that has to be
filtered.

Predicates are usually built combining column references
with the python operators, which produces nested
:class:`FunctionCallExpression` objects, but they can
also be a precomputed mask (:class:`MaskExpression`).
"""

from typing import Any, Callable

import pyarrow as pa

from .base import Expression


def apply_expression_if_needed(batch: pa.RecordBatch, o: Expression | Any) -> Any:
    """Invoke Apply on expressions when needed

    If the provided object is an Expression,
    it will be applied to the target batch.

    Otherwise it will treat it as if it's
    already the result of an expression
    or a literal value.

    This allows us to apply all arguments
    we receive without having to care if
    they are the data we need or if they
    are the expression resulting in that data.
    """
    if isinstance(o, Expression):
        o = o.apply(batch)
    return o


class FunctionCallExpression(Expression):
    """Call a compute function on its arguments.

    Given a compute function, and a set of arguments
    (other expressions, literals or data), execute
    the function on the provided arguments and return
    the resulting data.

    For example to check that a column is above a threshold::

        FunctionCallExpression(pyarrow.compute.greater, ColumnRef("A"), 3)

    which is what ``col("A") > 3`` builds.
    """

    def __init__(self, func: Callable[..., Any], *args: Any) -> None:
        """
        :param func: The function accepting the arguments.
        :param *args: The arguments for the function.
        """
        self.func = func
        self.args = args

    def __str__(self) -> str:
        func_name = getattr(self.func, "__name__", repr(self.func))
        return f"{func_name}({','.join(map(str, self.args))})"

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Invoke the function resolving all arguments on the recordbatch.

        When the function arguments are expressions themselves,
        this will apply the expressions on the provided recordbatch
        and the resulting data will be used as the arguments for the
        function.
        """
        args = tuple(apply_expression_if_needed(batch, arg) for arg in self.args)
        return self.func(*args)


class MaskExpression(Expression):
    """A precomputed list of booleans, one for each row.

    Applying it to a batch just returns the mask,
    it's up to the caller to ensure that the mask
    has as many entries as the batch has rows.
    """

    def __init__(self, mask: pa.Array) -> None:
        """
        :param mask: The boolean array selecting the rows.
        """
        self.mask = mask

    def __str__(self) -> str:
        return f"MaskExpression(rows={len(self.mask)})"

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Return the mask itself."""
        return self.mask

