"""Write Tables to delimited text files.

The output always has a header row, followed by one line
for each row of the table. Missing values are written as
empty fields, dates use the format of their column and
categorical values are written as their labels, so that
reading the file back with the same configuration
leads to a table with the same types.

Serialization is delegated to :func:`pyarrow.csv.write_csv`.
"""

import contextlib
import logging
import os
from typing import IO, Iterator

import pyarrow as pa
import pyarrow.csv

from ..errors import IOFailure
from ..table.conversion import format_text
from ..table.table import Table
from ..table.types import TypeKind

logger = logging.getLogger(__name__)

Destination = str | os.PathLike | IO[bytes]


@contextlib.contextmanager
def open_destination(destination: Destination) -> Iterator[IO[bytes]]:
    """Open a file for writing, or pass through an already open one."""
    if hasattr(destination, "write"):
        yield destination
        return

    try:
        handle = open(destination, "wb")
    except OSError as err:
        raise IOFailure(f"Unable to open {os.fspath(destination)} for writing: {err}") from err
    with handle:
        yield handle


def write_delimited(t: Table, destination: Destination, delimiter: str = ",") -> None:
    """Write a Table as delimited text.

    :param t: The table to write.
    :param destination: The path of the file to write or a binary file object.
                        An existing file is replaced.
    :param delimiter: The character separating the fields.
    """
    if not hasattr(destination, "write"):
        path = os.path.abspath(os.fspath(destination))
        if path in t.lineage:
            logger.warning(
                "Writing to %s, which is one of the sources of the data being written", path
            )

    batch = _to_text_batch(t)
    write_options = pa.csv.WriteOptions(include_header=True, delimiter=delimiter)
    with open_destination(destination) as handle:
        try:
            pa.csv.write_csv(batch, handle, write_options=write_options)
        except (OSError, pa.ArrowException) as err:
            raise IOFailure(f"Unable to write {destination}: {err}") from err
    logger.debug("Wrote %s rows to %s", t.num_rows, destination)


def _to_text_batch(t: Table) -> pa.RecordBatch:
    """Render the columns whose text depends on their type."""
    arrays = []
    for column in t.columns:
        if column.dtype.kind is TypeKind.FLOAT:
            # Keep a decimal point on integral values, so they read back as floats.
            arrays.append(
                pa.array([None if v is None else repr(v) for v in column.to_pylist()], pa.string())
            )
        else:
            arrays.append(format_text(column.array, column.dtype))
    return pa.RecordBatch.from_arrays(arrays, names=t.column_names)
