#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class used to process converted
documents, plus a validating visitor that checks span invariants against the
source text.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from adocast.ast.nodes import (
    BlockQuote,
    CodeBlock,
    Document,
    Header,
    List,
    ListItem,
    Paragraph,
    Str,
    Table,
    TableCell,
    TableRow,
    TxtNode,
)
from adocast.source_index import SourceIndex


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node kind. Visitors that
    only care about a few kinds can route the rest to ``generic_visit``.

    Examples
    --------
    Count the Str leaves of a document:

        >>> class StrCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def generic_visit(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...
        ...     def visit_str(self, node):
        ...         self.count += 1
        ...
        ...     visit_document = visit_header = visit_paragraph = generic_visit
        ...     visit_list = visit_list_item = visit_block_quote = generic_visit
        ...     visit_code_block = visit_table = visit_table_row = generic_visit
        ...     visit_table_cell = generic_visit

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """

    @abstractmethod
    def visit_header(self, node: Header) -> Any:
        """Visit a Header node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""

    @abstractmethod
    def visit_str(self, node: Str) -> Any:
        """Visit a Str node."""

    def generic_visit(self, node: TxtNode) -> Any:
        """Fallback for visitors that handle several kinds the same way.

        Parameters
        ----------
        node : TxtNode
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class SpanValidationVisitor(NodeVisitor):
    """Visitor that checks span invariants of a converted document.

    The following properties are checked for every node:

    - ``range`` is ordered and lies inside the source text
    - ``range`` is the offset pair of ``loc`` under the source index
    - a non-empty ``raw`` equals the source slice of ``range``
    - a container starts at its first child and ends at its last child
    - children lie inside their parent and do not overlap each other

    Parameters
    ----------
    text : str
        The source text the document was converted from
    strict : bool, default = False
        Raise ValueError on the first violation instead of collecting them

    Examples
    --------
        >>> validator = SpanValidationVisitor(text)
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(self, text: str, strict: bool = False):
        """Initialize the validator for ``text``."""
        self.text = text
        self.index = SourceIndex(text)
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _check_node(self, node: TxtNode) -> None:
        start, end = node.range
        label = f"{node.type} {list(node.range)}"
        if not 0 <= start <= end <= len(self.text):
            self._add_error(f"{label}: range outside source text of length {len(self.text)}")
            return
        if self.index.location_to_range(node.loc) != (start, end):
            self._add_error(f"{label}: range does not match loc {node.loc}")
        if node.raw and self.text[start:end] != node.raw:
            self._add_error(f"{label}: raw does not match source slice")

    def _check_children(self, node: TxtNode) -> None:
        if not node.children:
            return
        first, last = node.children[0], node.children[-1]
        if node.loc.start != first.loc.start or node.loc.end != last.loc.end:
            self._add_error(f"{node.type} {list(node.range)}: span differs from its children")
        previous_end = node.range[0]
        for child in node.children:
            if child.range[0] < node.range[0] or child.range[1] > node.range[1]:
                self._add_error(f"{child.type} {list(child.range)}: outside parent {node.type}")
            if child.range[0] < previous_end:
                self._add_error(f"{child.type} {list(child.range)}: overlaps its previous sibling")
            previous_end = max(previous_end, child.range[1])
        for child in node.children:
            child.accept(self)

    def generic_visit(self, node: TxtNode) -> None:
        """Check a node and recurse into its children."""
        self._check_node(node)
        self._check_children(node)

    def visit_header(self, node: Header) -> None:
        """Validate a Header node and its depth."""
        if node.depth < 1:
            self._add_error(f"Header {list(node.range)}: invalid depth {node.depth}")
        self.generic_visit(node)

    def visit_str(self, node: Str) -> None:
        """Validate a Str node."""
        if node.children:
            self._add_error(f"Str {list(node.range)}: Str nodes cannot have children")
        self._check_node(node)

    visit_document = visit_paragraph = visit_list = visit_list_item = generic_visit
    visit_block_quote = visit_code_block = visit_table = visit_table_row = visit_table_cell = generic_visit
