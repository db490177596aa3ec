"""Read a sheet of an Excel workbook into a Table.

Decoding the ``.xlsx`` container is delegated to :mod:`openpyxl`.
The cells of the selected sheet are rendered to text and
then go through the same header, missing values and type inference
rules applied to delimited text files, so the same sheet exported
to CSV and read with :func:`read_delimited` leads to the same Table.
"""

import datetime
import logging
import zipfile
from typing import Any, Iterable

import openpyxl
import pyarrow as pa
from openpyxl.utils.exceptions import InvalidFileException

from ..errors import IOFailure, UnknownSheet
from ..table.table import Table
from .config import ReadConfig, resolve_config
from .delimited import Source, open_source, source_lineage
from .text import header_names, positional_names, table_from_text

logger = logging.getLogger(__name__)

_WORKBOOK_ERRORS = (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError)


def list_sheets(source: Source) -> list[str]:
    """Names of the sheets of a workbook, in order."""
    with open_source(source) as handle:
        workbook = _load_workbook(handle, source)
        try:
            return list(workbook.sheetnames)
        finally:
            workbook.close()


def read_spreadsheet(
    source: Source,
    sheet: str | int = 0,
    config: ReadConfig | None = None,
    **options: Any,
) -> Table:
    """Read one sheet of a workbook into a Table.

    :param source: The path of the ``.xlsx`` file or a binary file object.
    :param sheet: The name of the sheet, or its 0 based position.
                  Defaults to the first sheet.
    :param config: The :class:`ReadConfig` of the read,
                   the ``delimiter`` and ``encoding`` options have no effect.
    :param options: Any of the :class:`ReadConfig` options,
                    override those of ``config``.
    """
    config = resolve_config(config, options)
    with open_source(source) as handle:
        workbook = _load_workbook(handle, source)
        try:
            worksheet = _select_sheet(workbook, sheet)
            rows = [list(row) for row in worksheet.iter_rows(values_only=True)]
        finally:
            workbook.close()

    names, texts = _rows_to_text(rows, config)
    table = table_from_text(names, texts, config, lineage=source_lineage(source))
    logger.debug("Read %s rows from sheet %r of %s", table.num_rows, sheet, source)
    return table


def _load_workbook(handle: Any, source: Source) -> Any:
    try:
        return openpyxl.load_workbook(handle, read_only=True, data_only=True)
    except _WORKBOOK_ERRORS as err:
        raise IOFailure(f"Unable to read workbook {source}: {err}") from err


def _select_sheet(workbook: Any, sheet: str | int) -> Any:
    sheetnames = list(workbook.sheetnames)
    if isinstance(sheet, str):
        if sheet not in sheetnames:
            raise UnknownSheet(sheet, sheetnames)
        return workbook[sheet]
    if not 0 <= sheet < len(sheetnames):
        raise UnknownSheet(sheet, sheetnames)
    return workbook[sheetnames[sheet]]


def _rows_to_text(
    rows: list[list[Any]], config: ReadConfig
) -> tuple[list[str], list[pa.Array]]:
    """Turn the cells of the sheet into the names and text of its columns."""
    rows = rows[config.skip_lines :]
    while rows and _is_blank(rows[-1]):
        rows.pop()

    width = max((len(row) for row in rows), default=0)
    rows = [row + [None] * (width - len(row)) for row in rows]

    header = None
    if config.has_header and rows:
        header, rows = rows[0], rows[1:]

    # Empty trailing columns are only part of the sheet dimensions.
    while width and all(row[width - 1] is None for row in rows) and (
        header is None or header[width - 1] is None
    ):
        width -= 1

    if header is not None and config.column_names is None:
        names = header_names([None if cell is None else str(cell) for cell in header[:width]])
    else:
        names = positional_names(width)

    missing = set(config.missing_tokens)
    texts = []
    for idx in range(width):
        cells = (_cell_text(row[idx], config.date_format) for row in rows)
        texts.append(pa.array([None if c in missing else c for c in cells], pa.string()))
    return names, texts


def _cell_text(value: Any, date_format: str) -> str | None:
    """Render a cell the way it would look in a delimited text file."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, datetime.datetime):
        if value.time() == datetime.time(0):
            return value.strftime(date_format)
        return value.isoformat(sep=" ")
    if isinstance(value, datetime.date):
        return value.strftime(date_format)
    return str(value)


def _is_blank(cells: Iterable[Any]) -> bool:
    return all(cell is None for cell in cells)
