from tablepyground.table import NA, make_table
from tablepyground.utils.tabulate import format_value, tabulate


def test_format_value():
    assert format_value(True) == "TRUE"
    assert format_value(1.0) == "1.00"
    assert format_value(NA) == "NA"
    assert format_value("x" * 40) == "x" * 27 + "..."


def test_tabulate_truncates_rows():
    t = make_table(n=list(range(5)))
    text = tabulate(t, max_rows=2)
    assert text.splitlines() == [
        "n",
        "<int>",
        "-----",
        "0",
        "1",
        "... and 3 more rows",
    ]
