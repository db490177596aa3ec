"""Reading and writing Tables from and to files.

Readers load the whole content of a file into a :class:`tablepyground.table.Table`:

* :func:`read_delimited` for CSV, TSV and any other delimited text.
* :func:`read_spreadsheet` for a sheet of an ``.xlsx`` workbook.

Both share the same configuration, :class:`ReadConfig`, and the same rules
to name the columns and infer their types. Tables can be saved back
as delimited text with :func:`write_delimited`.

Files are opened only for the duration of a single read or write,
and a failed read never returns a partial table.
"""

from .config import DEFAULT_MISSING_TOKENS, ReadConfig
from .delimited import read_delimited
from .spreadsheet import list_sheets, read_spreadsheet
from .writer import write_delimited

__all__ = (
    "ReadConfig",
    "DEFAULT_MISSING_TOKENS",
    "read_delimited",
    "read_spreadsheet",
    "list_sheets",
    "write_delimited",
)
