"""Configuration of the readers.

Both the delimited text and the spreadsheet readers
share the same set of options, collected in :class:`ReadConfig`.
Readers accept the options as keyword arguments, or a whole
``ReadConfig`` which can be reused across multiple reads::

    config = ReadConfig(delimiter=";", missing_tokens=("", "-"))
    sales = read_delimited("sales.csv", config=config)
    shops = read_delimited("shops.csv", config=config, skip_lines=2)

Keyword arguments always take precedence over the provided config.
"""

from typing import Any, Iterable, Mapping, Self, Sequence

from ..table.conversion import (
    DEFAULT_FALSE_VALUES,
    DEFAULT_INFERENCE_ORDER,
    DEFAULT_TRUE_VALUES,
    ParseOptions,
)
from ..table.types import DEFAULT_DATE_FORMAT, ColumnType, TypeKind

DEFAULT_MISSING_TOKENS = ("", "NA")


class ReadConfig:
    """Options that drive how a file is read into a Table."""

    _OPTIONS = (
        "delimiter",
        "has_header",
        "skip_lines",
        "column_names",
        "column_type_overrides",
        "missing_tokens",
        "date_format",
        "true_values",
        "false_values",
        "inference_order",
        "encoding",
    )

    def __init__(
        self,
        delimiter: str = ",",
        has_header: bool = True,
        skip_lines: int = 0,
        column_names: Sequence[str] | None = None,
        column_type_overrides: Mapping[str, ColumnType] | None = None,
        missing_tokens: Iterable[str] = DEFAULT_MISSING_TOKENS,
        date_format: str = DEFAULT_DATE_FORMAT,
        true_values: Iterable[str] = DEFAULT_TRUE_VALUES,
        false_values: Iterable[str] = DEFAULT_FALSE_VALUES,
        inference_order: Sequence[TypeKind | str] = DEFAULT_INFERENCE_ORDER,
        encoding: str = "utf8",
    ) -> None:
        """
        :param delimiter: The character separating the fields (delimited text only).
        :param has_header: If the first line read holds the column names.
        :param skip_lines: How many lines to discard before the header or data.
        :param column_names: Names of the columns, replace those of the header.
        :param column_type_overrides: ``{column_name: ColumnType}`` for the columns
                                      whose type must not be inferred.
        :param missing_tokens: Text that represents a missing value.
        :param date_format: The ``strptime`` format tried when inferring dates.
        :param true_values: Text accepted as ``true`` by boolean columns.
        :param false_values: Text accepted as ``false`` by boolean columns.
        :param inference_order: Types tried, in order, when inferring the type
                                of a column. ``STRING`` is always the last resort.
        :param encoding: Encoding of the text (delimited text only).
        """
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        if skip_lines < 0:
            raise ValueError(f"skip_lines must not be negative, got {skip_lines}")

        self.delimiter = delimiter
        self.has_header = has_header
        self.skip_lines = skip_lines
        self.column_names = list(column_names) if column_names is not None else None
        self.column_type_overrides = dict(column_type_overrides or {})
        self.missing_tokens = tuple(missing_tokens)
        self.date_format = date_format
        self.true_values = tuple(true_values)
        self.false_values = tuple(false_values)
        self.inference_order = tuple(TypeKind(kind) for kind in inference_order)
        self.encoding = encoding

    def replace(self, **options: Any) -> Self:
        """Get a copy of the configuration with some options changed."""
        for name in options:
            if name not in self._OPTIONS:
                raise TypeError(f"Unknown read option {name!r}")
        current = {name: getattr(self, name) for name in self._OPTIONS}
        current.update(options)
        return self.__class__(**current)

    @property
    def parse_options(self) -> ParseOptions:
        """How the text of the cells gets parsed into values."""
        return ParseOptions(
            date_format=self.date_format,
            true_values=self.true_values,
            false_values=self.false_values,
        )

    def __repr__(self) -> str:
        options = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._OPTIONS)
        return f"ReadConfig({options})"


def resolve_config(config: ReadConfig | None, options: Mapping[str, Any]) -> ReadConfig:
    """Merge the keyword options of a reader into its config."""
    config = config or ReadConfig()
    if options:
        config = config.replace(**options)
    return config
