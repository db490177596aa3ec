"""Turn the text of the cells of a file into a Table.

All readers end up with the same intermediate representation:
a list of column names and, for each column, the text of its
cells with missing cells already replaced by nulls.

From there on, applying the type overrides and inferring
the types of the remaining columns is the same for every format.
"""

import logging
from typing import Iterable, Sequence

import pyarrow as pa

from ..errors import ShapeMismatch, UnknownColumn
from ..table.column import Column
from ..table.conversion import convert_text, infer_text
from ..table.table import Table
from .config import ReadConfig

logger = logging.getLogger(__name__)


def positional_names(count: int) -> list[str]:
    """Names given to columns when the data has no header: X1, X2, ..."""
    return [f"X{idx}" for idx in range(1, count + 1)]


def header_names(cells: Sequence[str | None]) -> list[str]:
    """Names of the columns found in a header row.

    Empty header cells get the same positional name
    they would have if the data had no header at all.
    """
    return [
        cell if cell else f"X{idx}" for idx, cell in enumerate(cells, start=1)
    ]


def table_from_text(
    names: Sequence[str],
    texts: Sequence[pa.Array],
    config: ReadConfig,
    lineage: Iterable[str] = (),
) -> Table:
    """Build a Table from the text of each column.

    :param names: The names of the columns as found in the source,
                  replaced by ``config.column_names`` when provided.
    :param texts: For each column, an array of strings with nulls
                  in place of missing values.
    :param config: The configuration of the read.
    :param lineage: The files the text comes from.
    """
    if config.column_names is not None:
        if len(config.column_names) != len(texts):
            raise ShapeMismatch(
                f"{len(config.column_names)} column names provided, "
                f"but the data has {len(texts)} columns",
                length=len(config.column_names),
                expected=len(texts),
            )
        names = config.column_names

    overrides = config.column_type_overrides
    for name in overrides:
        if name not in names:
            raise UnknownColumn(name, list(names))

    parse_options = config.parse_options
    columns = []
    for name, text in zip(names, texts):
        if name in overrides:
            dtype = overrides[name]
            data = convert_text(text, dtype, column=name, options=parse_options)
        else:
            dtype, data = infer_text(text, config.inference_order, parse_options)
        columns.append(Column(data, dtype=dtype, name=name))

    table = Table(columns, lineage=lineage)
    logger.debug(
        "Built table %d x %d with types %s",
        table.num_rows,
        table.num_columns,
        {name: str(dtype) for name, dtype in table.dtypes.items()},
    )
    return table
