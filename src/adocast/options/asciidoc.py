#  Copyright (c) 2025 Tom Villani, Ph.D.

# adocast/options/asciidoc.py
"""Configuration options for reading AsciiDoc and converting it to a spanned AST.

``ReaderOptions`` controls how the block reader builds the element tree;
``ConverterOptions`` controls location recovery and nests a ``ReaderOptions``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from adocast.constants import (
    DEFAULT_ADMONITION_PARAGRAPHS,
    DEFAULT_COMMENT_MARKER,
    DEFAULT_INCLUDE_TABLE_HEADER,
    DEFAULT_PARSE_ADMONITIONS,
    DEFAULT_SKIP_COMMENTS,
    DEFAULT_TABLE_HEADER_DETECTION,
    TableHeaderDetection,
)
from adocast.exceptions import ConfigError
from adocast.options.base import BaseOptions

_TABLE_HEADER_MODES = ("implicit", "attribute-based", "none")


@dataclass(frozen=True)
class ReaderOptions(BaseOptions):
    """Configuration options for the AsciiDoc block reader.

    Parameters
    ----------
    parse_admonitions : bool, default True
        Whether ``[NOTE]``-style block attributes turn the following block
        into an admonition. When False the block keeps its own kind.
    admonition_paragraphs : bool, default True
        Whether ``NOTE: text`` paragraphs become admonitions wrapping a
        paragraph of the text after the label.
    table_header_detection : {"implicit", "attribute-based", "none"}, default "implicit"
        How the first table row is recognized as a header row:
        - "implicit": header when the first line holds the whole row and is
          followed by a blank line, or when ``%header`` / ``options=header``
          is set
        - "attribute-based": only ``%header`` / ``options=header``
        - "none": never

    """

    parse_admonitions: bool = field(
        default=DEFAULT_PARSE_ADMONITIONS,
        metadata={"help": "Treat [NOTE]-style block attributes as admonitions", "cli_name": "no-parse-admonitions"},
    )
    admonition_paragraphs: bool = field(
        default=DEFAULT_ADMONITION_PARAGRAPHS,
        metadata={"help": "Treat 'NOTE: text' paragraphs as admonitions", "cli_name": "no-admonition-paragraphs"},
    )
    table_header_detection: TableHeaderDetection = field(
        default=DEFAULT_TABLE_HEADER_DETECTION,
        metadata={
            "help": "How to detect table header rows",
            "cli_name": "table-header-detection",
            "choices": list(_TABLE_HEADER_MODES),
        },
    )

    def __post_init__(self) -> None:
        """Validate the table header mode.

        Raises
        ------
        ValueError
            If ``table_header_detection`` is not a known mode.

        """
        super().__post_init__()
        if self.table_header_detection not in _TABLE_HEADER_MODES:
            raise ValueError(
                f"table_header_detection must be one of {_TABLE_HEADER_MODES}, got {self.table_header_detection!r}"
            )


@dataclass(frozen=True)
class ConverterOptions(BaseOptions):
    """Configuration options for element-tree to AST conversion.

    Parameters
    ----------
    skip_comments : bool, default True
        Whether location search steps over comment lines outside listing
        blocks. Listing blocks always treat comment-like lines as content.
    comment_marker : str, default "//"
        Prefix identifying a comment line, both for the block reader and
        for location search.
    include_table_header : bool, default False
        Whether table header rows are converted in addition to body rows.
    reader : ReaderOptions
        Options passed to the block reader.

    """

    skip_comments: bool = field(
        default=DEFAULT_SKIP_COMMENTS,
        metadata={"help": "Skip comment lines while locating text", "cli_name": "no-skip-comments"},
    )
    comment_marker: str = field(
        default=DEFAULT_COMMENT_MARKER,
        metadata={"help": "Prefix that marks a comment line"},
    )
    include_table_header: bool = field(
        default=DEFAULT_INCLUDE_TABLE_HEADER,
        metadata={"help": "Convert table header rows as well as body rows", "cli_name": "include-table-header"},
    )
    reader: ReaderOptions = field(
        default_factory=ReaderOptions,
        metadata={"help": "Block reader options"},
    )

    def __post_init__(self) -> None:
        """Validate the comment marker and nested reader options.

        Raises
        ------
        ValueError
            If ``comment_marker`` is empty or ``reader`` is not a ReaderOptions.

        """
        super().__post_init__()
        if not self.comment_marker:
            raise ValueError("comment_marker must be a non-empty string")
        if not isinstance(self.reader, ReaderOptions):
            raise ValueError(f"reader must be ReaderOptions, got {type(self.reader).__name__}")


def options_from_dict(data: Mapping[str, Any], source: Optional[str] = None) -> ConverterOptions:
    """Build ConverterOptions from a configuration mapping.

    Keys may use dashes or underscores. Reader settings go in a nested
    ``reader`` table.

    Parameters
    ----------
    data : Mapping
        Configuration values, e.g. loaded from ``.adocast.toml``
    source : str or None, default = None
        Where the mapping came from, used in error messages

    Returns
    -------
    ConverterOptions
        The validated options

    Raises
    ------
    ConfigError
        If a key is unknown, a value has the wrong type or fails validation

    Examples
    --------
        >>> options_from_dict({"skip-comments": False, "reader": {"table_header_detection": "none"}})
        ConverterOptions(skip_comments=False, ...)

    """
    values = _normalize_section(data, ConverterOptions, source)
    reader_data = values.pop("reader", None)
    if reader_data is not None and not isinstance(reader_data, Mapping):
        raise ConfigError(f"'reader' must be a table, got {type(reader_data).__name__}", config_path=source)
    reader_values = _normalize_section(reader_data or {}, ReaderOptions, source)

    try:
        return ConverterOptions(reader=ReaderOptions(**reader_values), **values)
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}", config_path=source, original_error=e) from e


def _normalize_section(data: Mapping[str, Any], options_class: type[BaseOptions], source: Optional[str]) -> dict[str, Any]:
    known = options_class.option_fields()
    values: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).replace("-", "_")
        if key not in known:
            raise ConfigError(
                f"Unknown {options_class.__name__} setting '{raw_key}'. Expected one of: {', '.join(sorted(known))}",
                config_path=source,
            )
        if known[key].type in ("bool", bool) and not isinstance(value, bool):
            raise ConfigError(f"Setting '{raw_key}' must be true or false, got {value!r}", config_path=source)
        values[key] = value
    return values
