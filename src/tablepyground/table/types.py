"""Column types and the missing value marker.

Each column of a Table has exactly one :class:`ColumnType`,
which is a tagged variant over the kinds of data that
tablepyground knows how to store::

    INTEGER                  -> pyarrow int64
    FLOAT                    -> pyarrow float64
    STRING                   -> pyarrow string
    BOOLEAN                  -> pyarrow bool
    DATE(format)             -> pyarrow date32
    CATEGORICAL(labels)      -> pyarrow dictionary<int32, string>

The ``DATE`` kind remembers the format used to parse and write
its values, while ``CATEGORICAL`` remembers the fixed set of
labels its values can be drawn from. Two categorical types are
the same type only when they have the same labels in the same order.

>>> ColumnType.categorical(["low", "high"])
ColumnType.categorical(['low', 'high'])
>>> INTEGER.arrow_type
DataType(int64)
"""

import enum
from typing import Iterable

import pyarrow as pa

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


class _MissingType:
    """The type of :data:`NA`, there is only one instance of it."""

    _instance = None

    def __new__(cls) -> "_MissingType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NA"

    def __bool__(self) -> bool:
        raise TypeError("NA has no truth value, check for it with `value is NA`")

    def __reduce__(self) -> str:
        return "NA"


NA = _MissingType()
"""Marker of a value that was not observed.

It's independent from the type of the column, a column of integers
and a column of strings both use ``NA`` for their missing values.

As it is unknown if a missing value is true or not,
``NA`` can not be used in conditions, compare it by identity instead.
"""


def is_missing(value: object) -> bool:
    """Tell if a python value represents a missing value."""
    return value is None or value is NA


class TypeKind(enum.Enum):
    """The kinds of values a column can hold."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    DATE = "date"
    CATEGORICAL = "categorical"


class ColumnType:
    """The type of the values in a column.

    Use the module constants for the simple types
    and the :meth:`date` and :meth:`categorical` constructors
    for the types that need additional information.
    """

    __slots__ = ("kind", "date_format", "labels")

    def __init__(
        self,
        kind: TypeKind,
        date_format: str | None = None,
        labels: Iterable[str] | None = None,
    ) -> None:
        """
        :param kind: Which kind of values the column holds.
        :param date_format: The ``strptime`` format of ``DATE`` columns.
        :param labels: The allowed labels of ``CATEGORICAL`` columns,
                       ``None`` means the labels will be derived from
                       the data when the type is applied.
        """
        kind = TypeKind(kind)
        if kind is TypeKind.DATE:
            date_format = date_format or DEFAULT_DATE_FORMAT
        elif date_format is not None:
            raise ValueError("Only date columns can have a date format")

        if labels is not None:
            if kind is not TypeKind.CATEGORICAL:
                raise ValueError("Only categorical columns can have labels")
            labels = tuple(labels)
            if len(set(labels)) != len(labels):
                raise ValueError(f"Categorical labels must be unique, got {labels}")

        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "date_format", date_format)
        object.__setattr__(self, "labels", labels)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ColumnType is immutable")

    @classmethod
    def date(cls, format: str = DEFAULT_DATE_FORMAT) -> "ColumnType":
        """A date column whose text representation follows ``format``."""
        return cls(TypeKind.DATE, date_format=format)

    @classmethod
    def categorical(cls, labels: Iterable[str] | None = None) -> "ColumnType":
        """A column whose values are restricted to ``labels``."""
        return cls(TypeKind.CATEGORICAL, labels=labels)

    @property
    def arrow_type(self) -> pa.DataType:
        """The pyarrow type used to store the values."""
        return _ARROW_TYPES[self.kind]

    @property
    def abbreviation(self) -> str:
        """Short name used when printing a table header."""
        return _ABBREVIATIONS[self.kind]

    @classmethod
    def from_arrow(cls, array: pa.Array) -> "ColumnType":
        """Detect the type of an existing pyarrow array.

        Any integer width maps to ``INTEGER``, any floating
        point width to ``FLOAT``, dictionary arrays of strings
        become ``CATEGORICAL`` with the dictionary as labels.
        """
        arrow_type = array.type
        if pa.types.is_dictionary(arrow_type):
            if not pa.types.is_string(arrow_type.value_type):
                raise TypeError(f"Only dictionaries of strings are supported, got {arrow_type}")
            return cls.categorical(array.dictionary.to_pylist())
        if pa.types.is_integer(arrow_type):
            return INTEGER
        if pa.types.is_floating(arrow_type):
            return FLOAT
        if pa.types.is_string(arrow_type) or pa.types.is_large_string(arrow_type):
            return STRING
        if pa.types.is_boolean(arrow_type) or pa.types.is_null(arrow_type):
            return BOOLEAN
        if pa.types.is_date(arrow_type):
            return DATE
        raise TypeError(f"Unsupported column type {arrow_type}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnType):
            return NotImplemented
        return (self.kind, self.date_format, self.labels) == (
            other.kind,
            other.date_format,
            other.labels,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.date_format, self.labels))

    def __repr__(self) -> str:
        if self.kind is TypeKind.DATE:
            return f"ColumnType.date({self.date_format!r})"
        if self.kind is TypeKind.CATEGORICAL:
            labels = list(self.labels) if self.labels is not None else None
            return f"ColumnType.categorical({labels!r})"
        return self.kind.name

    def __str__(self) -> str:
        return self.kind.value


_ARROW_TYPES = {
    TypeKind.INTEGER: pa.int64(),
    TypeKind.FLOAT: pa.float64(),
    TypeKind.STRING: pa.string(),
    TypeKind.BOOLEAN: pa.bool_(),
    TypeKind.DATE: pa.date32(),
    TypeKind.CATEGORICAL: pa.dictionary(pa.int32(), pa.string()),
}

_ABBREVIATIONS = {
    TypeKind.INTEGER: "int",
    TypeKind.FLOAT: "dbl",
    TypeKind.STRING: "chr",
    TypeKind.BOOLEAN: "lgl",
    TypeKind.DATE: "date",
    TypeKind.CATEGORICAL: "fct",
}

INTEGER = ColumnType(TypeKind.INTEGER)
FLOAT = ColumnType(TypeKind.FLOAT)
STRING = ColumnType(TypeKind.STRING)
BOOLEAN = ColumnType(TypeKind.BOOLEAN)
DATE = ColumnType(TypeKind.DATE)
