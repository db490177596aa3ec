"""Format tables into text for print.

the `tabulate` function takes a :class:`tablepyground.table.Table` and formats
it into a text table, with the type of each column below its name.
It will truncate long strings, format floats to 2 decimal places,
and limit the number of rows to display.

Example:

    >>> from tablepyground.table import make_table, NA
    >>> t = make_table(
    ...     Product=["Videogame", "Laptop", "Laptop"],
    ...     Quantity=[8, NA, 7],
    ...     Price=[66.5, 38.72, 77.46],
    ... )
    >>> print(tabulate(t))
    Product   | Quantity | Price
    <chr>     | <int>    | <dbl>
    --------- | -------- | -----
    Videogame | 8        | 66.50
    Laptop    | NA       | 38.72
    Laptop    | 7        | 77.46
"""

from typing import Any


def tabulate(table: Any, max_rows: int = 20) -> str:
    """Format a Table into a text table.

    Only the first ``max_rows`` rows are formatted,
    a final line reports how many more rows were left out.
    """
    cols = table.column_names
    types = [f"<{c.dtype.abbreviation}>" for c in table.columns]
    rows = [
        [format_value(row[c]) for c in cols]
        for row in table.head(max_rows).rows()
    ]

    colsizes = compute_max_colsize(cols, [types] + rows)
    header = [
        maketablerow(cols, colsizes=colsizes),
        maketablerow(types, colsizes=colsizes),
    ]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    text = "\n".join(header + separator + textrows)
    if table.num_rows > max_rows:
        text += f"\n... and {table.num_rows - max_rows} more rows"
    return text


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    ).rstrip()


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    This function will format floats to 2 decimal places,
    print booleans as ``TRUE`` and ``FALSE``
    and truncate long strings.
    """
    if isinstance(v, bool):
        return "TRUE" if v else "FALSE"
    elif isinstance(v, float):
        return f"{v:.2f}"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
