"""A single, homogeneously typed, column of data."""

from typing import Any, Iterable, Iterator, Self

import pyarrow as pa

from ..errors import TypeCoercionError
from .conversion import cast_array
from .types import BOOLEAN, NA, ColumnType, TypeKind, is_missing

_ARROW_ERRORS = (pa.ArrowInvalid, pa.ArrowTypeError, pa.ArrowNotImplementedError)


class Column:
    """An ordered sequence of values all of the same :class:`ColumnType`.

    Values are stored in a :class:`pyarrow.Array`, missing values
    are stored as nulls and are exposed to python as :data:`NA`::

        >>> c = Column([1, 2, 3]).append(NA)
        >>> len(c), c[3], c.dtype
        (4, NA, INTEGER)

    Columns are immutable, all the methods that change
    something return a new column.
    """

    __slots__ = ("_name", "_dtype", "_array")

    def __init__(
        self,
        values: Iterable[Any] | pa.Array | pa.ChunkedArray | Self = (),
        dtype: ColumnType | None = None,
        name: str | None = None,
    ) -> None:
        """
        :param values: The values of the column, python values
                       (``NA`` or ``None`` for missing ones) or a pyarrow array.
        :param dtype: The type of the column, guessed from the values when omitted.
                      Values that can't be represented by the type are an error.
        :param name: The name of the column, can be assigned later with :meth:`rename`.
        """
        if isinstance(values, Column):
            name = values.name if name is None else name
            array, source = values.array, values.dtype
        elif isinstance(values, (pa.Array, pa.ChunkedArray)):
            if isinstance(values, pa.ChunkedArray):
                values = values.combine_chunks()
            array, source = self._normalize(values, name)
        else:
            array, source = self._from_pylist(list(values), name)

        derived_labels = (
            dtype is not None
            and dtype.kind is TypeKind.CATEGORICAL
            and dtype.labels is None
        )
        if derived_labels and source.kind is not TypeKind.CATEGORICAL:
            array = cast_array(array, source, dtype, column=name)
            source = ColumnType.from_arrow(array)
        elif dtype is not None and not derived_labels and dtype != source:
            array = cast_array(array, source, dtype, column=name)
            source = dtype

        self._name = name
        self._dtype = source
        self._array = array

    @classmethod
    def _from_arrow(cls, array: pa.Array, dtype: ColumnType, name: str | None) -> Self:
        # Data already known to match dtype, skip detection and conversion.
        column = cls.__new__(cls)
        column._name = name
        column._dtype = dtype
        column._array = array
        return column

    @staticmethod
    def _normalize(array: pa.Array, name: str | None) -> tuple[pa.Array, ColumnType]:
        try:
            dtype = ColumnType.from_arrow(array)
        except TypeError as err:
            raise TypeCoercionError(name, "a supported type", reason=str(err)) from err
        if dtype.kind is not TypeKind.CATEGORICAL and array.type != dtype.arrow_type:
            array = array.cast(dtype.arrow_type)
        elif dtype.kind is TypeKind.CATEGORICAL and array.type != dtype.arrow_type:
            array = pa.DictionaryArray.from_arrays(
                array.indices.cast(pa.int32()), array.dictionary.cast(pa.string())
            )
        return array, dtype

    @classmethod
    def _from_pylist(cls, values: list[Any], name: str | None) -> tuple[pa.Array, ColumnType]:
        values = [None if is_missing(v) else v for v in values]
        try:
            array = pa.array(values)
        except _ARROW_ERRORS as err:
            row, value = cls._first_mismatch(values)
            raise TypeCoercionError(
                name, "a single type", row=row, value=value, reason=str(err)
            ) from err

        if pa.types.is_null(array.type):
            # Only missing values, like a bare NA they are logical.
            array = array.cast(BOOLEAN.arrow_type)
        return cls._normalize(array, name)

    @staticmethod
    def _first_mismatch(values: list[Any]) -> tuple[int | None, Any]:
        # The first value dictates the type of the column.
        first = next((v for v in values if v is not None), None)
        arrow_type = pa.array([first]).type
        for row, value in enumerate(values):
            try:
                pa.array([value], arrow_type)
            except _ARROW_ERRORS:
                return row, value
        return None, None

    @property
    def name(self) -> str | None:
        """The name of the column."""
        return self._name

    @property
    def dtype(self) -> ColumnType:
        """The type of the values in the column."""
        return self._dtype

    @property
    def array(self) -> pa.Array:
        """The pyarrow array storing the values."""
        return self._array

    @property
    def null_count(self) -> int:
        """How many values are missing."""
        return self._array.null_count

    @property
    def missing_mask(self) -> frozenset[int]:
        """Positions of the missing values."""
        if not self._array.null_count:
            return frozenset()
        return frozenset(i for i, v in enumerate(self._array.is_null().to_pylist()) if v)

    def is_missing(self, position: int) -> bool:
        """Tell if the value at ``position`` is missing."""
        return not self._array[position].is_valid

    def __len__(self) -> int:
        return len(self._array)

    def __getitem__(self, position: int) -> Any:
        value = self._array[position].as_py()
        return NA if value is None else value

    def __iter__(self) -> Iterator[Any]:
        for value in self._array.to_pylist():
            yield NA if value is None else value

    @property
    def values(self) -> list[Any]:
        """The values of the column, with ``NA`` for missing values."""
        return list(self)

    def to_pylist(self) -> list[Any]:
        """The values of the column, with ``None`` for missing values."""
        return self._array.to_pylist()

    def rename(self, name: str) -> Self:
        """Get the same column with a different name."""
        return self._from_arrow(self._array, self._dtype, name)

    def cast(self, dtype: ColumnType) -> Self:
        """Convert the column to a different type.

        Fails with :class:`TypeCoercionError` when any value
        can't be represented in the new type.
        """
        return self.__class__(self, dtype=dtype)

    def append(self, *values: Any) -> Self:
        """Get a new column with ``values`` added at the end."""
        return self.__class__(self.to_pylist() + list(values), dtype=self._dtype, name=self._name)

    def equals(self, other: "Column") -> bool:
        """Columns are equal when they have same name, type and values."""
        return (
            self._name == other._name
            and self._dtype == other._dtype
            and self._array.equals(other._array)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Column):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self) -> str:
        preview = ", ".join(repr(v) for v in list(self)[:10])
        if len(self) > 10:
            preview += ", ..."
        return f"Column({self._name!r}, <{self._dtype.abbreviation}>, [{preview}])"
