"""Read delimited text files, like CSV or TSV, into Tables.

Tokenizing the text is delegated to :mod:`pyarrow.csv`,
which is asked to return every column as plain text.
The types of the columns are then decided by
:func:`tablepyground.io.text.table_from_text`, so that
inference follows the configured order and overrides
can report exactly which value didn't fit its column.

>>> import io
>>> from tablepyground.io import read_delimited
>>> t = read_delimited(io.BytesIO(b"name;age\\nAnna;31\\nLuca;NA\\n"), delimiter=";")
>>> t.dtypes
{'name': STRING, 'age': INTEGER}
"""

import contextlib
import logging
import os
from typing import IO, Any, Iterator

import pyarrow as pa
import pyarrow.csv

from ..errors import IOFailure, SourceNotFound
from ..table.table import Table
from .config import ReadConfig, resolve_config
from .text import header_names, positional_names, table_from_text

logger = logging.getLogger(__name__)

Source = str | os.PathLike | IO[bytes]


@contextlib.contextmanager
def open_source(source: Source) -> Iterator[IO[bytes]]:
    """Open a file for reading, or pass through an already open one.

    Files opened here are always closed when the block exits,
    already open files are left for the caller to close.
    """
    if hasattr(source, "read"):
        yield source
        return

    try:
        handle = open(source, "rb")
    except FileNotFoundError as err:
        raise SourceNotFound(f"No such file: {os.fspath(source)}") from err
    except OSError as err:
        raise IOFailure(f"Unable to open {os.fspath(source)}: {err}") from err
    with handle:
        yield handle


def source_lineage(source: Source) -> tuple[str, ...]:
    """The paths a Table read from ``source`` depends on."""
    if hasattr(source, "read"):
        name = getattr(source, "name", None)
        return (os.path.abspath(name),) if isinstance(name, str) else ()
    return (os.path.abspath(os.fspath(source)),)


def read_delimited(source: Source, config: ReadConfig | None = None, **options: Any) -> Table:
    """Read a delimited text file into a Table.

    :param source: The path of the file or a binary file object.
    :param config: The :class:`ReadConfig` of the read.
    :param options: Any of the :class:`ReadConfig` options,
                    override those of ``config``.

    The most common options are ``delimiter``, ``has_header``,
    ``skip_lines``, ``column_names``, ``column_type_overrides``
    and ``missing_tokens``.

    Rows with a number of fields different from the header,
    or any other malformed content, lead to :class:`IOFailure`.
    """
    config = resolve_config(config, options)
    with open_source(source) as handle:
        try:
            content = handle.read()
        except OSError as err:
            raise IOFailure(f"Unable to read {source}: {err}") from err

    names, texts = _tokenize(pa.py_buffer(content), config, source)
    table = table_from_text(names, texts, config, lineage=source_lineage(source))
    logger.debug("Read %s rows from %s", table.num_rows, source)
    return table


def _tokenize(
    content: pa.Buffer, config: ReadConfig, source: Source
) -> tuple[list[str], list[pa.Array]]:
    """Split the content in columns of text, with nulls for missing values."""
    # Provided column_names are applied by table_from_text,
    # after checking they match the number of columns.
    autogenerate = not config.has_header
    read_options = pa.csv.ReadOptions(
        skip_rows=config.skip_lines,
        autogenerate_column_names=autogenerate,
        encoding=config.encoding,
    )
    parse_options = pa.csv.ParseOptions(delimiter=config.delimiter)

    try:
        # A first pass only to learn the column names,
        # so that every column can be requested as text.
        with pa.csv.open_csv(
            pa.BufferReader(content),
            read_options=read_options,
            parse_options=parse_options,
        ) as reader:
            names = reader.schema.names

        convert_options = pa.csv.ConvertOptions(
            column_types={name: pa.string() for name in names},
            null_values=list(config.missing_tokens),
            strings_can_be_null=True,
            quoted_strings_can_be_null=False,
        )
        data = pa.csv.read_csv(
            pa.BufferReader(content),
            read_options=read_options,
            parse_options=parse_options,
            convert_options=convert_options,
        )
    except (pa.ArrowInvalid, pa.ArrowTypeError) as err:
        raise IOFailure(f"Malformed delimited text in {source}: {err}") from err

    texts = [column.combine_chunks() for column in data.columns]
    if autogenerate:
        names = positional_names(len(texts))
    else:
        names = header_names(names)
    return names, texts
