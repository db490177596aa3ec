"""Query plan nodes that load data

The datasource nodes are expected to fetch the data from some source,
convert it into the format accepted by the compute engine and forward it
to the next node in the plan.

Files are read eagerly by :mod:`tablepyground.io` into Tables,
so the only source a query plan needs is the in-memory data.
"""

from abc import abstractmethod
from typing import Iterator

import pyarrow as pa

from .base import QueryPlanNode


class DataSourceNode(QueryPlanNode):
    """Base class for nodes that load data from a source."""

    @abstractmethod
    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the data source without loading its content."""
        ...


class TableDataSource(DataSourceNode):
    """Load data from an in-memory pyarrow.Table or pyarrow.RecordBatch.

    Given a :class:`pyarrow.Table` or :class:`pyarrow.RecordBatch` object,
    allow to use its data in a query plan.

    The data is always emitted as a single batch, even when
    it has no rows, so that positions and masks computed over
    the whole data line up with the emitted rows.
    """

    def __init__(self, table: pa.Table | pa.RecordBatch) -> None:
        """
        :param table: The table or recordbatch with the data to read.
        """
        if isinstance(table, pa.Table):
            table = table.combine_chunks()
            batches = table.to_batches()
            table = (
                batches[0]
                if len(batches) == 1
                else pa.RecordBatch.from_arrays(
                    [column.combine_chunks() for column in table.columns],
                    schema=table.schema,
                )
            )
        self.table = table

    def __str__(self) -> str:
        return f"TableDataSource(columns={self.table.schema.names}, rows={self.table.num_rows})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Emit the data contained in the Table for consumption by other node."""
        yield self.table

    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the Table."""
        return self.table.schema
