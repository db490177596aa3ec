"""tablepyground

Tables of typed columns built from scratch on top of Apache Arrow,
for learning and teaching purposes.

tablepyground covers the first steps of any data analysis:
building tables out of vectors, picking rows and columns out of them,
importing delimited text and spreadsheet files, and saving
the result of a filter back to disk.

The library is constituted by multiple components, each isolated
within its own package:

* The Table API (:mod:`tablepyground.table`), columns, tables and their indexing.
* The Compute Engine (:mod:`tablepyground.compute`), which executes row
  and column selections as query plans over Arrow data.
* The I/O layer (:mod:`tablepyground.io`), readers and writers of files.

>>> from tablepyground import make_table, col, select_rows
>>> t = make_table(facts=["a", "b", "b", "a"], numbers=[1, 2, 3, 4])
>>> select_rows(t, (col("facts") == "a") & (col("numbers") > 2)).to_pydict()
{'facts': ['a'], 'numbers': [4]}
"""

from . import compute, errors, io, table
from .compute import col, lit
from .errors import (
    DuplicateColumn,
    IndexOutOfRange,
    InvalidSelector,
    IOFailure,
    ShapeMismatch,
    SourceNotFound,
    TableError,
    TypeCoercionError,
    UnnamedColumn,
    UnknownColumn,
    UnknownSheet,
)
from .io import ReadConfig, list_sheets, read_delimited, read_spreadsheet, write_delimited
from .pipeline import filter_select_write
from .table import (
    BOOLEAN,
    DATE,
    FLOAT,
    INTEGER,
    NA,
    STRING,
    Column,
    ColumnType,
    Table,
    get_column_by_name,
    get_column_by_position,
    make_table,
    select,
    select_columns,
    select_rows,
)

__all__ = (
    "compute",
    "errors",
    "io",
    "table",
    "col",
    "lit",
    "Column",
    "ColumnType",
    "Table",
    "make_table",
    "get_column_by_name",
    "get_column_by_position",
    "select",
    "select_columns",
    "select_rows",
    "NA",
    "INTEGER",
    "FLOAT",
    "STRING",
    "BOOLEAN",
    "DATE",
    "ReadConfig",
    "read_delimited",
    "read_spreadsheet",
    "list_sheets",
    "write_delimited",
    "filter_select_write",
    "TableError",
    "ShapeMismatch",
    "DuplicateColumn",
    "UnknownColumn",
    "UnknownSheet",
    "IndexOutOfRange",
    "TypeCoercionError",
    "UnnamedColumn",
    "InvalidSelector",
    "SourceNotFound",
    "IOFailure",
)
