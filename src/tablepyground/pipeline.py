"""Chain a filter, a projection and a write.

The typical analysis reads some data, keeps only
the interesting rows and columns and saves the result
for later, without ever touching the source file::

    sales = read_delimited("sales.csv")
    filter_select_write(
        sales,
        (col("Product") == "Laptop") & (col("Quantity") > 5),
        ["Product", "Quantity", "Price"],
        "laptops.csv",
    )

The steps always run in the order they are declared,
so the predicate can refer to columns that are not projected.
"""

import logging
from typing import Any

from .io.writer import Destination, write_delimited
from .table.indexing import select_columns, select_rows
from .table.table import Table

logger = logging.getLogger(__name__)


def filter_select_write(t: Table, predicate: Any, columns: Any, destination: Destination) -> Table:
    """Filter the rows of a table, select its columns and write the result.

    :param t: The source table, which is left untouched.
    :param predicate: Any row selector accepted by :func:`select_rows`.
    :param columns: Any column selector accepted by :func:`select_columns`.
    :param destination: Where to write the result, see :func:`write_delimited`.
                        Should not be one of the files ``t`` was read from.
    :return: The table that was written.
    """
    filtered = select_rows(t, predicate)
    result = select_columns(filtered, columns)
    logger.debug(
        "Selected %d of %d rows and %d of %d columns",
        result.num_rows,
        t.num_rows,
        result.num_columns,
        t.num_columns,
    )
    write_delimited(result, destination)
    return result
