#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/ast/__init__.py
"""Spanned AST for AsciiDoc documents.

Every node produced by the converter carries ``loc`` (line/column), ``range``
(absolute offsets) and ``raw`` (the covered source text), which lets linting
tools point at, and rewrite, the exact source characters.

Examples
--------
    >>> from adocast import parse
    >>> doc = parse("= Title\\n\\nSome text.")
    >>> [child.type for child in doc.children]
    ['Header', 'Paragraph']
    >>> doc.children[1].range
    (9, 19)

"""

from adocast.ast.nodes import (
    CONTAINER_TYPES,
    NODE_CLASSES,
    BlockQuote,
    CodeBlock,
    Document,
    Header,
    List,
    ListItem,
    Location,
    Paragraph,
    Position,
    Str,
    Table,
    TableCell,
    TableRow,
    TxtNode,
    empty_document,
)
from adocast.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from adocast.ast.utils import check_spans, extract_text, find_nodes, walk
from adocast.ast.visitors import NodeVisitor, SpanValidationVisitor

__all__ = [
    "CONTAINER_TYPES",
    "NODE_CLASSES",
    "BlockQuote",
    "CodeBlock",
    "Document",
    "Header",
    "List",
    "ListItem",
    "Location",
    "NodeVisitor",
    "Paragraph",
    "Position",
    "SpanValidationVisitor",
    "Str",
    "Table",
    "TableCell",
    "TableRow",
    "TxtNode",
    "ast_to_dict",
    "ast_to_json",
    "check_spans",
    "dict_to_ast",
    "empty_document",
    "extract_text",
    "find_nodes",
    "json_to_ast",
    "walk",
]
