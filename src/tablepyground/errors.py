"""Exceptions raised by tablepyground.

Every error derives from :class:`TableError` and from the builtin
exception that best describes it, so callers can catch either
``TableError`` or, for example, ``KeyError`` for a missing column.

Errors are always raised immediately: readers and constructors are
all-or-nothing and never return a partially built Table.
"""


class TableError(Exception):
    """Base class for all the errors raised by tablepyground."""

    pass


class ShapeMismatch(TableError, ValueError):
    """Columns or masks have a length different from the expected one."""

    def __init__(
        self,
        message: str,
        column: str | None = None,
        length: int | None = None,
        expected: int | None = None,
    ) -> None:
        super().__init__(message)
        self.column = column
        self.length = length
        self.expected = expected


class UnnamedColumn(TableError, ValueError):
    """A column without a name was added to a Table."""

    def __init__(self, position: int | None = None) -> None:
        where = "Added column" if position is None else f"Column at position {position}"
        super().__init__(f"{where} has no name")
        self.position = position


class DuplicateColumn(TableError, ValueError):
    """The same column name would appear more than once in a Table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Column {name!r} appears more than once")
        self.name = name


class UnknownColumn(TableError, KeyError):
    """A column name was requested that the Table does not have."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        super().__init__(name)
        self.name = name
        self.available = list(available or [])

    def __str__(self) -> str:
        return f"Unknown column {self.name!r}, available columns: {self.available}"


class UnknownSheet(TableError, KeyError):
    """The requested sheet is not part of the workbook."""

    def __init__(self, sheet: str | int, available: list[str] | None = None) -> None:
        super().__init__(sheet)
        self.sheet = sheet
        self.available = list(available or [])

    def __str__(self) -> str:
        return f"Unknown sheet {self.sheet!r}, available sheets: {self.available}"


class IndexOutOfRange(TableError, IndexError):
    """A positional selector points outside of the Table."""

    def __init__(self, position: int, size: int, axis: str = "column") -> None:
        super().__init__(
            f"{axis.capitalize()} position {position} out of range for {size} {axis}s"
        )
        self.position = position
        self.size = size
        self.axis = axis


class TypeCoercionError(TableError, ValueError):
    """A value could not be converted to the type of its column."""

    def __init__(
        self,
        column: str | None,
        target: object,
        row: int | None = None,
        value: object = None,
        reason: str | None = None,
    ) -> None:
        where = f"column {column!r}"
        if row is not None:
            where = f"row {row} of {where}"
        message = f"Cannot coerce {value!r} at {where} to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.column = column
        self.target = target
        self.row = row
        self.value = value


class InvalidSelector(TableError, TypeError):
    """A row or column selector of an unsupported kind was provided."""

    pass


class SourceNotFound(TableError, FileNotFoundError):
    """The file to read does not exist."""

    pass


class IOFailure(TableError, OSError):
    """Reading or writing a file failed, or its content is malformed."""

    pass
