"""The Table object itself."""

from typing import Any, Iterable, Iterator, Mapping, Self

import pyarrow as pa

from ..errors import (
    DuplicateColumn,
    InvalidSelector,
    ShapeMismatch,
    UnknownColumn,
    UnnamedColumn,
)
from .column import Column
from .types import NA, ColumnType


class Table:
    """Data structure that handles data in rows and columns.

    A Table is an ordered collection of named :class:`Column`
    objects, all of the same length. The row at position *i*
    of each column refers to the same observation.

    Tables are immutable, every transformation
    (selecting rows or columns, renaming, casting)
    returns a new Table and leaves the original one untouched.

    Tables are usually created through :func:`make_table`
    or read from files with :mod:`tablepyground.io`.
    """

    __slots__ = ("_columns", "_num_rows", "_lineage")

    def __init__(
        self,
        columns: Iterable[Column] = (),
        lineage: Iterable[str] = (),
        num_rows: int | None = None,
    ) -> None:
        """
        :param columns: The named columns of the table.
        :param lineage: The paths of the files the data was read from.
        :param num_rows: The number of rows, required only for tables
                         with no columns, otherwise taken from the columns.
        """
        self._columns: dict[str, Column] = {}
        self._num_rows = num_rows or 0
        self._lineage = frozenset(lineage)

        for idx, column in enumerate(columns):
            if not isinstance(column, Column):
                raise InvalidSelector(f"Tables are made of Column objects, got {type(column)}")
            if not column.name:
                raise UnnamedColumn(idx)
            if column.name in self._columns:
                raise DuplicateColumn(column.name)
            if idx == 0 and num_rows is None:
                self._num_rows = len(column)
            elif len(column) != self._num_rows:
                raise ShapeMismatch(
                    f"Column {column.name!r} has {len(column)} rows, "
                    f"while the table has {self._num_rows}",
                    column=column.name,
                    length=len(column),
                    expected=self._num_rows,
                )
            self._columns[column.name] = column

    @classmethod
    def from_arrow(
        cls,
        data: pa.Table | pa.RecordBatch,
        dtypes: Mapping[str, ColumnType] | None = None,
        lineage: Iterable[str] = (),
    ) -> Self:
        """Create a Table out of pyarrow data.

        :param data: The pyarrow data to wrap.
        :param dtypes: Types of the columns, when the pyarrow data
                       is already known to match them.
                       Missing columns will have their type detected.
        :param lineage: The paths of the files the data was read from.
        """
        dtypes = dtypes or {}
        columns = []
        for name, array in zip(data.schema.names, data.columns):
            if isinstance(array, pa.ChunkedArray):
                array = array.combine_chunks()
            if name in dtypes:
                columns.append(Column._from_arrow(array, dtypes[name], name))
            else:
                columns.append(Column(array, name=name))
        return cls(columns, lineage=lineage, num_rows=data.num_rows)

    def to_arrow(self) -> pa.Table:
        """Get the data of the table as a pyarrow.Table"""
        return pa.Table.from_batches([self.to_recordbatch()])

    def to_recordbatch(self) -> pa.RecordBatch:
        """Get the data of the table as a single pyarrow.RecordBatch"""
        if not self._columns:
            # A batch can only know its rows through a column, drop it once sized.
            return pa.RecordBatch.from_arrays(
                [pa.nulls(self._num_rows)], names=["_"]
            ).select([])
        return pa.RecordBatch.from_arrays(
            [c.array for c in self._columns.values()],
            schema=pa.schema(
                [pa.field(name, c.array.type) for name, c in self._columns.items()]
            ),
        )

    @property
    def column_names(self) -> list[str]:
        """Names of the columns, in order."""
        return list(self._columns)

    @property
    def columns(self) -> list[Column]:
        """The columns of the table, in order."""
        return list(self._columns.values())

    @property
    def dtypes(self) -> dict[str, ColumnType]:
        """Type of each column, by column name."""
        return {name: c.dtype for name, c in self._columns.items()}

    @property
    def lineage(self) -> frozenset[str]:
        """Paths of the files whose data ended up in this table."""
        return self._lineage

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_columns(self) -> int:
        return len(self._columns)

    @property
    def shape(self) -> tuple[int, int]:
        """``(rows, columns)``"""
        return self._num_rows, len(self._columns)

    def __len__(self) -> int:
        return self._num_rows

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __getitem__(self, key: str | int) -> Column:
        """Extract a single column by name or position.

        To get a Table out of one or more columns use
        :meth:`select_columns` instead, which always returns a Table.
        """
        from .indexing import get_column_by_name, get_column_by_position

        if isinstance(key, str):
            return get_column_by_name(self, key)
        if isinstance(key, int) and not isinstance(key, bool):
            return get_column_by_position(self, key)
        raise InvalidSelector(
            f"Tables can only be indexed by column name or position, got {key!r}, "
            "use select_rows/select_columns for subsets"
        )

    def column(self, key: str | int) -> Column:
        """Same as ``table[key]``"""
        return self[key]

    def rows(self) -> Iterator[dict[str, Any]]:
        """Iterate over the rows as ``{column_name: value}`` dictionaries."""
        names = self.column_names
        for values in zip(*(c.to_pylist() for c in self._columns.values())):
            yield {name: NA if v is None else v for name, v in zip(names, values)}

    def to_pydict(self) -> dict[str, list[Any]]:
        """Get the data as a ``{column_name: values}`` dictionary.

        Missing values are reported as ``None``.
        """
        return {name: c.to_pylist() for name, c in self._columns.items()}

    def _replace(self, columns: Iterable[Column]) -> Self:
        return self.__class__(columns, lineage=self._lineage, num_rows=self._num_rows)

    def rename(self, names: Mapping[str, str]) -> Self:
        """Get a new table with some columns renamed.

        :param names: Mapping of ``{old_name: new_name}``.
        """
        for old in names:
            if old not in self._columns:
                raise UnknownColumn(old, self.column_names)
        return self._replace(
            c.rename(names.get(name, name)) for name, c in self._columns.items()
        )

    def cast(self, dtypes: Mapping[str, ColumnType]) -> Self:
        """Get a new table where some columns are converted to a different type.

        :param dtypes: Mapping of ``{column_name: new_type}``.
        """
        for name in dtypes:
            if name not in self._columns:
                raise UnknownColumn(name, self.column_names)
        return self._replace(
            c.cast(dtypes[name]) if name in dtypes else c
            for name, c in self._columns.items()
        )

    def with_column(self, column: Column, name: str | None = None) -> Self:
        """Get a new table with a column added, or replaced if it has the same name."""
        if name is not None:
            column = column.rename(name)
        if not column.name:
            raise UnnamedColumn()
        columns = dict(self._columns)
        columns[column.name] = column
        return self._replace(columns.values())

    def select_columns(self, selector: Any) -> Self:
        """See :func:`tablepyground.table.indexing.select_columns`"""
        from .indexing import select_columns

        return select_columns(self, selector)

    def select_rows(self, selector: Any, columns: Any = None) -> Self:
        """See :func:`tablepyground.table.indexing.select_rows`"""
        from .indexing import select_rows

        return select_rows(self, selector, columns)

    def select(self, rows: Any = None, cols: Any = None) -> Self:
        """See :func:`tablepyground.table.indexing.select`"""
        from .indexing import select

        return select(self, rows, cols)

    def head(self, n: int = 6) -> Self:
        """Get a new table with only the first ``n`` rows."""
        from .indexing import head

        return head(self, n)

    def equals(self, other: "Table") -> bool:
        """Tables are equal when they have the same columns in the same order."""
        return (
            self._num_rows == other._num_rows
            and self.column_names == other.column_names
            and all(a.equals(b) for a, b in zip(self.columns, other.columns))
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __str__(self) -> str:
        from ..utils.tabulate import tabulate

        return tabulate(self)

    def __repr__(self) -> str:
        return f"<Table {self._num_rows} x {len(self._columns)}>\n{self}"


def make_table(*columns: Any, **named_columns: Any) -> Table:
    """Build a Table out of columns.

    Positional arguments can be :class:`Column` objects,
    ``(name, values)`` pairs or plain sequences of values.
    A tuple is taken as a pair only when its first item is a string
    and its second is a sequence other than a string, so
    ``("a", "b")`` is a column of two values, not a column named ``a``.
    Keyword arguments are ``name=values`` pairs and
    give their name to the column, even when it already had one.

    Columns without a name are named after their position
    as ``X1``, ``X2``, etc...

    >>> t = make_table(Column([1, 2], name="a"), ("b", ["x", "y"]), c=[True, False])
    >>> t.column_names
    ['a', 'b', 'c']

    All columns must have the same length, otherwise
    :class:`tablepyground.errors.ShapeMismatch` is raised.
    """
    built = []
    for position, item in enumerate(columns, start=1):
        if _is_named_pair(item):
            name, values = item
            built.append(Column(values).rename(name))
            continue
        column = item if isinstance(item, Column) else Column(item)
        if not column.name:
            column = column.rename(f"X{position}")
        built.append(column)

    for name, values in named_columns.items():
        built.append(Column(values).rename(name))

    return Table(built)


def _is_named_pair(item: Any) -> bool:
    if not (isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str)):
        return False
    return isinstance(item[1], Iterable) and not isinstance(item[1], str)
