"""Support picking rows by their position in a query plan.

Implements nodes whose purpose is to slice the data
emitted by a query plan. Discarding the rows that
are not part of the selected slice of data.
"""

from typing import Iterator, Sequence

import pyarrow as pa

from .base import QueryPlanNode


class PaginateNode(QueryPlanNode):
    """Emit only one page of the received data.

    Given a starting index and a length, only emit
    length rows after the starting index is reached.

    For example if ``offset=1`` and ``length=1``
    only the second row will be emitted::

        0: skip because < offset
        1: emit
        2: skip because > length=1 and one row was already emitted.
    """

    def __init__(self, offset: int, length: int, child: QueryPlanNode) -> None:
        """
        :param offset: From which row to take data, first row is 0.
        :param length: How many rows to take after offset was reached.
        :param child: the node from which to consume the rows.
        """
        self.offset = offset
        self.length = length
        self.end = offset + length
        self.child = child

    def __str__(self) -> str:
        return f"PaginateNode({self.offset}:{self.end}, {self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Apply the pagination to the child node and emit the rows.

        Consume rows from the child node skipping those until we
        reach offset. Once offset is reached start yielding rows
        until length is reached.

        Subsequent rows are never consumed, so the child might
        not get exhausted. An empty slice is emitted when no
        row falls in the page, so that consumers still get
        to know the columns of the data.
        """
        consumed_rows = 0  # keep track of how many rows we have already seen
        emitted = False
        last_batch = None

        batches_generator = self.child.batches()
        for batch in batches_generator:
            last_batch = batch
            batch_size = batch.num_rows

            # Keep discarding batches until we get to the batch that
            # has the rows _after_ offset.
            if consumed_rows + batch_size <= self.offset:
                consumed_rows += batch_size
                continue

            # The rows we care about might be further on inside the batch.
            start_in_batch = max(0, self.offset - consumed_rows)

            # The batch might contain fewer rows than length
            # so we might have to keep picking rows from subsequent batches.
            remaining_rows = self.end - consumed_rows - start_in_batch
            rows_in_this_batch = min(batch_size - start_in_batch, remaining_rows)
            if rows_in_this_batch > 0:
                yield batch.slice(start_in_batch, rows_in_this_batch)
                emitted = True
            consumed_rows += batch_size
            if consumed_rows >= self.end:
                batches_generator.close()
                break

        if not emitted and last_batch is not None:
            yield last_batch.slice(0, 0)


class TakeNode(QueryPlanNode):
    """Emit the rows at specific positions.

    The positions refer to the whole data emitted by the
    child node, so the first row of the second batch
    has position equal to the size of the first batch.
    Rows are emitted in the order of the positions,
    and the same position can be requested more than once.
    """

    def __init__(self, indices: Sequence[int], child: QueryPlanNode) -> None:
        """
        :param indices: The non negative positions of the rows to emit.
        :param child: the node from which to consume the rows.
        """
        self.indices = list(indices)
        self.child = child

    def __str__(self) -> str:
        return f"TakeNode({self.indices}, {self.child})"

    def batches(self) -> Iterator[pa.RecordBatch]:
        """Collect the data of the child and emit the requested rows."""
        data = pa.Table.from_batches(list(self.child.batches()))
        taken = data.take(pa.array(self.indices, pa.int64())).combine_chunks()
        batches = taken.to_batches()
        if not batches:
            batches = [pa.RecordBatch.from_pylist([], schema=taken.schema)]
        yield from batches
