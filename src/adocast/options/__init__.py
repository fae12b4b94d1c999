#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for the adocast reader and converter."""

from adocast.options.asciidoc import ConverterOptions, ReaderOptions, options_from_dict
from adocast.options.base import BaseOptions, CloneFrozenMixin

__all__ = [
    "BaseOptions",
    "CloneFrozenMixin",
    "ConverterOptions",
    "ReaderOptions",
    "options_from_dict",
]
