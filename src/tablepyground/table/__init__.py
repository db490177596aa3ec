"""Tables of typed columns.

A table library is a tool designed to handle and manipulate structured data,
in the form of rows and columns. It allows users to load data from
various sources (like CSV files or spreadsheets), explore it,
select parts of it and save the results.

The central object is the :class:`Table`, an ordered collection
of named :class:`Column` objects of the same length. Each column
holds values of a single :class:`ColumnType` and marks the values that
were not observed with :data:`NA`.

>>> from tablepyground.table import make_table, NA
>>> t = make_table(facts=["a", "b", "b", "a"], numbers=[1, 2, 3, NA])
>>> t.shape
(4, 2)

Tables and columns never change once created, selecting
rows or columns produces new tables. See :mod:`tablepyground.table.indexing`.
"""

from .column import Column
from .indexing import (
    get_column_by_name,
    get_column_by_position,
    head,
    select,
    select_columns,
    select_rows,
)
from .table import Table, make_table
from .types import (
    BOOLEAN,
    DATE,
    FLOAT,
    INTEGER,
    NA,
    STRING,
    ColumnType,
    TypeKind,
)

__all__ = (
    "Column",
    "Table",
    "make_table",
    "get_column_by_name",
    "get_column_by_position",
    "select",
    "select_columns",
    "select_rows",
    "head",
    "ColumnType",
    "TypeKind",
    "NA",
    "INTEGER",
    "FLOAT",
    "STRING",
    "BOOLEAN",
    "DATE",
)
