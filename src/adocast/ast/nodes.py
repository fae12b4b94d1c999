#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/ast/nodes.py
"""AST node classes for spanned AsciiDoc documents.

This module defines the node hierarchy produced by the converter. Every node
carries an exact source span so that linting tools can report diagnostics and
apply fixes against the original text.

Node Hierarchy
--------------
All nodes inherit from ``TxtNode`` and support the visitor pattern.

Block-level nodes:
    - Document, Header, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell

Inline nodes:
    - Str

Spans
-----
``loc`` holds 1-based lines and 0-based columns, with ``end`` pointing at the
character after the node. ``range`` holds the equivalent absolute offsets.
``raw`` is the source text covered by ``range``; synthetic containers that
have no contiguous source form of their own (List, ListItem, BlockQuote,
Table, TableRow) use ``None``.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class Position:
    """A point in the source text.

    Parameters
    ----------
    line : int
        1-based line number
    column : int
        0-based column within the line

    """

    line: int
    column: int


@dataclass(frozen=True)
class Location:
    """A half-open source region between two positions."""

    start: Position
    end: Position

    @classmethod
    def between(cls, first: "TxtNode", last: "TxtNode") -> "Location":
        """Build the location running from ``first``'s start to ``last``'s end."""
        return cls(start=first.loc.start, end=last.loc.end)


@dataclass
class TxtNode(ABC):
    """Base class for all AST nodes.

    Parameters
    ----------
    loc : Location
        Line/column span of the node
    range : tuple of int
        Absolute ``(start, end)`` character offsets equivalent to ``loc``
    raw : str or None, default = None
        Source text covered by ``range``, or None for synthetic containers
    children : list of TxtNode, default = empty list
        Child nodes in source order

    """

    type: ClassVar[str] = "TxtNode"

    loc: Location
    range: tuple[int, int]
    raw: Optional[str] = None
    children: list[TxtNode] = field(default_factory=list)

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """


@dataclass
class Document(TxtNode):
    """Root node of a converted document.

    The span runs from the start of the first child to the end of the last
    child; ``raw`` is that slice, not the full source text. The empty-document
    sentinel has no children and an empty span at offset 0.
    """

    type: ClassVar[str] = "Document"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Header(TxtNode):
    """Section or document title.

    Parameters
    ----------
    depth : int, default = 1
        1-based heading level; the document title has depth 1

    """

    type: ClassVar[str] = "Header"

    depth: int = 1

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_header``."""
        return visitor.visit_header(self)


@dataclass
class Paragraph(TxtNode):
    """Paragraph wrapping a single Str."""

    type: ClassVar[str] = "Paragraph"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass
class List(TxtNode):
    """Ordered, unordered or description list."""

    type: ClassVar[str] = "List"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass
class ListItem(TxtNode):
    """List item; its first child is the item's own text when it has any."""

    type: ClassVar[str] = "ListItem"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list_item``."""
        return visitor.visit_list_item(self)


@dataclass
class BlockQuote(TxtNode):
    """Quote block wrapping converted blocks."""

    type: ClassVar[str] = "BlockQuote"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_block_quote``."""
        return visitor.visit_block_quote(self)


@dataclass
class CodeBlock(TxtNode):
    """Listing block.

    Parameters
    ----------
    lang : str or None, default = None
        Language from ``[source,lang]`` or a fenced block's info string
    value : str, default = ""
        The listing content, lines joined with ``\\n``

    """

    type: ClassVar[str] = "CodeBlock"

    lang: Optional[str] = None
    value: str = ""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code_block``."""
        return visitor.visit_code_block(self)


@dataclass
class Table(TxtNode):
    """Table of rows."""

    type: ClassVar[str] = "Table"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table``."""
        return visitor.visit_table(self)


@dataclass
class TableRow(TxtNode):
    """Table row of cells."""

    type: ClassVar[str] = "TableRow"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_row``."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(TxtNode):
    """Table cell wrapping a Str, or converted blocks for AsciiDoc-style cells."""

    type: ClassVar[str] = "TableCell"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table_cell``."""
        return visitor.visit_table_cell(self)


@dataclass
class Str(TxtNode):
    """Text leaf.

    Parameters
    ----------
    value : str, default = ""
        Text content as the document reader reports it. Comment lines that
        sit inside a paragraph appear in ``raw`` but not in ``value``.

    """

    type: ClassVar[str] = "Str"

    value: str = ""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_str``."""
        return visitor.visit_str(self)


NODE_CLASSES: dict[str, type[TxtNode]] = {
    cls.type: cls
    for cls in (Document, Header, Paragraph, List, ListItem, BlockQuote, CodeBlock, Table, TableRow, TableCell, Str)
}

CONTAINER_TYPES = frozenset({"List", "ListItem", "BlockQuote", "Table", "TableRow"})


def empty_document() -> Document:
    """Return the sentinel produced when nothing in the input converts.

    Returns
    -------
    Document
        Childless document spanning the empty range at line 1, column 0

    """
    origin = Position(line=1, column=0)
    return Document(loc=Location(start=origin, end=origin), range=(0, 0), raw="", children=[])
