"""adocast - AsciiDoc to spanned AST conversion for linting tools.

adocast reads AsciiDoc text and produces an AST in which every node carries
its exact source span: ``loc`` (1-based line, 0-based column), ``range``
(absolute character offsets) and ``raw`` (the covered source text). Linting
hosts use the spans to report diagnostics at the right place and to apply
fixes to the original text.

Examples
--------
Parse a document:

    >>> from adocast import parse
    >>> doc = parse("= Title\\n\\nSome *bold* text.")
    >>> [node.type for node in doc.children]
    ['Header', 'Paragraph']
    >>> doc.children[1].raw
    'Some *bold* text.'

Use the processor plugin boundary:

    >>> from adocast import AsciiDocProcessor
    >>> AsciiDocProcessor.available_extensions()
    ('.adoc', '.asciidoc', '.asc', '.asciidoctor')

"""

from __future__ import annotations

from adocast.ast import Document, Location, Position, TxtNode, ast_to_dict, ast_to_json, check_spans
from adocast.converter import Converter, parse
from adocast.exceptions import AdocAstError, ConfigError, FileError, InvalidOptionsError, ValidationError
from adocast.options import ConverterOptions, ReaderOptions, options_from_dict
from adocast.processor import AsciiDocFileProcessor, AsciiDocProcessor

__version__ = "1.0.0"

__all__ = [
    "AdocAstError",
    "AsciiDocFileProcessor",
    "AsciiDocProcessor",
    "ConfigError",
    "Converter",
    "ConverterOptions",
    "Document",
    "FileError",
    "InvalidOptionsError",
    "Location",
    "Position",
    "ReaderOptions",
    "TxtNode",
    "ValidationError",
    "__version__",
    "ast_to_dict",
    "ast_to_json",
    "check_spans",
    "options_from_dict",
    "parse",
]
