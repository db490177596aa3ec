"""Conversion of text and arrays into typed column data.

Data read from files always arrives as text, one string per cell,
with missing cells already mapped to nulls.
This module is in charge of turning that text into data of a
specific :class:`ColumnType` or, when no type was requested,
guessing which type fits the text best.

Type inference tries each kind of the inference order in turn
and picks the first one that is able to parse **all** the
non missing values of the column::

    ["1", "2", null]      -> INTEGER  [1, 2, null]
    ["1", "2.5", null]    -> FLOAT    [1.0, 2.5, null]
    ["T", "false"]        -> BOOLEAN  [true, false]
    ["2024-01-31"]        -> DATE     [2024-01-31]
    ["1", "x"]            -> STRING   ["1", "x"]

A single value that does not parse demotes the whole column
to the next kind, until ``STRING`` which accepts anything.

All the parsing work is done by :mod:`pyarrow.compute` kernels,
the python level loop in :func:`find_unparseable` only runs
once a conversion already failed, to report which value caused it.
"""

from typing import Iterable, Sequence

import pyarrow as pa
import pyarrow.compute as pc

from ..errors import TypeCoercionError
from .types import (
    BOOLEAN,
    DEFAULT_DATE_FORMAT,
    STRING,
    ColumnType,
    TypeKind,
)

DEFAULT_INFERENCE_ORDER = (
    TypeKind.INTEGER,
    TypeKind.FLOAT,
    TypeKind.BOOLEAN,
    TypeKind.DATE,
    TypeKind.STRING,
)
DEFAULT_TRUE_VALUES = ("TRUE", "True", "true", "T")
DEFAULT_FALSE_VALUES = ("FALSE", "False", "false", "F")

_CONVERSION_ERRORS = (pa.ArrowInvalid, pa.ArrowTypeError, pa.ArrowNotImplementedError)


class ParseOptions:
    """How text is interpreted when converting it to typed values."""

    def __init__(
        self,
        date_format: str = DEFAULT_DATE_FORMAT,
        true_values: Iterable[str] = DEFAULT_TRUE_VALUES,
        false_values: Iterable[str] = DEFAULT_FALSE_VALUES,
    ) -> None:
        """
        :param date_format: Format of dates when inferring ``DATE`` columns.
        :param true_values: Text accepted as a ``true`` boolean.
        :param false_values: Text accepted as a ``false`` boolean.
        """
        self.date_format = date_format
        self.true_values = tuple(true_values)
        self.false_values = tuple(false_values)


def parse_text(
    text: pa.Array, ctype: ColumnType, options: ParseOptions | None = None
) -> pa.Array:
    """Parse an array of strings into an array of ``ctype``.

    Raises one of the pyarrow errors (usually :class:`pyarrow.ArrowInvalid`)
    when any of the non-null values cannot be parsed.
    """
    options = options or ParseOptions()
    kind = ctype.kind

    if kind is TypeKind.STRING:
        return text
    if kind is TypeKind.CATEGORICAL:
        return _to_categorical(text, ctype.labels)

    trimmed = pc.utf8_trim_whitespace(text)
    if kind is TypeKind.INTEGER:
        return pc.cast(trimmed, pa.int64())
    if kind is TypeKind.FLOAT:
        return pc.cast(trimmed, pa.float64())
    if kind is TypeKind.BOOLEAN:
        return _to_boolean(trimmed, options.true_values, options.false_values)
    if kind is TypeKind.DATE:
        timestamps = pc.strptime(trimmed, format=ctype.date_format, unit="s")
        return pc.cast(timestamps, pa.date32())
    raise NotImplementedError(f"Parsing of {kind} is not supported")


def _to_boolean(
    text: pa.Array, true_values: Sequence[str], false_values: Sequence[str]
) -> pa.Array:
    is_true = pc.is_in(text, value_set=pa.array(true_values, pa.string()))
    is_false = pc.is_in(text, value_set=pa.array(false_values, pa.string()))
    unknown = pc.and_(pc.is_valid(text), pc.invert(pc.or_(is_true, is_false)))
    if pc.any(unknown).as_py():
        raise pa.ArrowInvalid("Value is not a recognized boolean")
    return pc.if_else(pc.is_valid(text), is_true, pa.scalar(None, pa.bool_()))


def _to_categorical(text: pa.Array, labels: Sequence[str] | None) -> pa.Array:
    if labels is None:
        labels = sorted(v for v in pc.unique(text).to_pylist() if v is not None)
    dictionary = pa.array(labels, pa.string())
    indices = pc.index_in(text, value_set=dictionary)
    unknown = pc.and_(pc.is_valid(text), pc.is_null(indices))
    if pc.any(unknown).as_py():
        raise pa.ArrowInvalid(f"Value is not one of the labels {list(labels)}")
    return pa.DictionaryArray.from_arrays(pc.cast(indices, pa.int32()), dictionary)


def convert_text(
    text: pa.Array,
    ctype: ColumnType,
    column: str | None = None,
    options: ParseOptions | None = None,
) -> pa.Array:
    """Parse text into ``ctype``, reporting failures as :class:`TypeCoercionError`.

    The error identifies the first row whose value could not be converted.
    """
    try:
        return parse_text(text, ctype, options)
    except _CONVERSION_ERRORS as err:
        row, value = find_unparseable(text, ctype, options)
        raise TypeCoercionError(column, ctype, row=row, value=value, reason=str(err)) from err


def find_unparseable(
    text: pa.Array, ctype: ColumnType, options: ParseOptions | None = None
) -> tuple[int | None, str | None]:
    """Find the first row of ``text`` that can't be parsed as ``ctype``.

    Returns ``(None, None)`` if every value parses on its own.
    """
    if ctype.kind is TypeKind.CATEGORICAL and ctype.labels is None:
        # Derived labels accept any value.
        return None, None

    for row, value in enumerate(text.to_pylist()):
        if value is None:
            continue
        try:
            parse_text(pa.array([value], pa.string()), ctype, options)
        except _CONVERSION_ERRORS:
            return row, value
    return None, None


def infer_text(
    text: pa.Array,
    order: Sequence[TypeKind] = DEFAULT_INFERENCE_ORDER,
    options: ParseOptions | None = None,
) -> tuple[ColumnType, pa.Array]:
    """Guess the type of a column of text and parse it.

    Returns the first type of ``order`` able to parse every
    non missing value together with the parsed data.
    Falls back to ``STRING`` when none of them does.
    A column with no values at all is ``BOOLEAN``, the same
    type given to a column made only of missing values.
    """
    options = options or ParseOptions()
    if text.null_count == len(text):
        return BOOLEAN, pa.nulls(len(text), pa.bool_())

    for kind in order:
        if kind is TypeKind.DATE:
            ctype = ColumnType.date(options.date_format)
        else:
            ctype = ColumnType(kind)
        try:
            return ctype, parse_text(text, ctype, options)
        except _CONVERSION_ERRORS:
            continue
    return STRING, text


def format_text(array: pa.Array, ctype: ColumnType) -> pa.Array:
    """Render the values of a column as text.

    This is the inverse of :func:`parse_text` for the types
    that have a textual representation depending on the column type,
    dates use the format of their type and categoricals their labels.
    Other types are left untouched.
    """
    if ctype.kind is TypeKind.CATEGORICAL:
        return array.dictionary_decode()
    if ctype.kind is TypeKind.DATE:
        if ctype.date_format == DEFAULT_DATE_FORMAT:
            return pc.cast(array, pa.string())
        return pc.strftime(pc.cast(array, pa.timestamp("s")), format=ctype.date_format)
    return array


def cast_array(
    array: pa.Array,
    source: ColumnType,
    target: ColumnType,
    column: str | None = None,
    options: ParseOptions | None = None,
) -> pa.Array:
    """Convert data of type ``source`` to data of type ``target``.

    Text is parsed as :func:`convert_text` would do,
    everything else goes through a safe pyarrow cast, so
    a lossy conversion like ``1.5`` to integer is an error.
    """
    if source == target:
        return array

    if source.kind in (TypeKind.CATEGORICAL, TypeKind.DATE) and target.kind in (
        TypeKind.STRING,
        TypeKind.CATEGORICAL,
    ):
        array, source = format_text(array, source), STRING
    elif source.kind is TypeKind.CATEGORICAL:
        array, source = array.dictionary_decode(), STRING

    if source.kind is TypeKind.STRING:
        return convert_text(array, target, column, options)
    if target.kind is TypeKind.CATEGORICAL:
        return convert_text(pc.cast(array, pa.string()), target, column, options)

    try:
        return pc.cast(array, target.arrow_type)
    except _CONVERSION_ERRORS as err:
        row, value = None, None
        for idx, item in enumerate(array.to_pylist()):
            try:
                pc.cast(pa.array([item], array.type), target.arrow_type)
            except _CONVERSION_ERRORS:
                row, value = idx, item
                break
        raise TypeCoercionError(column, target, row=row, value=value, reason=str(err)) from err
