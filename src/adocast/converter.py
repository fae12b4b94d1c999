#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/converter.py
"""Convert an AsciiDoc element tree into a spanned AST.

The block reader reports each element's text and an approximate starting
line, but not where the text sits in the source. ``Converter`` walks the
element tree top-down, asks a ``LocationFinder`` where each element's text
occurs, and assembles the output nodes from the recovered spans.

Search windows
--------------
Every element is searched for inside a ``SearchWindow``. In any run of
siblings, whether section blocks, list items, description list terms, quoted
blocks or the blocks of a spliced compound, each sibling's window starts at
its own line hint and ends at the next sibling's line hint. Repeated or empty
text therefore resolves to the occurrence belonging to that sibling, and
siblings come out in source order.

Dropping
--------
An element whose text cannot be found produces no output, together with its
whole subtree. A container left without children is dropped as well. Both
cases are logged at DEBUG level; conversion never raises for content.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from adocast.ast.nodes import (
    BlockQuote,
    CodeBlock,
    Document,
    Header,
    List,
    ListItem,
    Location,
    Paragraph,
    Str,
    Table,
    TableCell,
    TableRow,
    TxtNode,
    empty_document,
)
from adocast.document.model import (
    CompoundElement,
    DescriptionListElement,
    DocumentElement,
    Element,
    ListElement,
    ListingElement,
    ListItemElement,
    ParagraphElement,
    QuoteElement,
    SectionElement,
    TableCellElement,
    TableElement,
    TableRowElement,
)
from adocast.document.reader import load
from adocast.exceptions import InvalidOptionsError
from adocast.location import LocationFinder, SearchWindow
from adocast.options.asciidoc import ConverterOptions
from adocast.source_index import SourceIndex

logger = logging.getLogger(__name__)

ConvertFunction = Callable[[Any, SearchWindow], list[TxtNode]]


class Converter:
    """Convert one AsciiDoc text into a spanned AST.

    A converter owns the source index of a single text and is meant to be
    used for one conversion; ``parse`` creates a fresh one per call.

    Parameters
    ----------
    text : str
        The complete AsciiDoc source
    options : ConverterOptions or None, default = None
        Conversion options

    """

    def __init__(self, text: str, options: Optional[ConverterOptions] = None):
        """Index ``text`` and set up the dispatch table."""
        if options is None:
            options = ConverterOptions()
        elif not isinstance(options, ConverterOptions):
            raise InvalidOptionsError(
                converter_name="asciidoc",
                expected_type=ConverterOptions,
                received_type=type(options),
            )
        self.text = text
        self.options = options
        self.index = SourceIndex(text)
        self.finder = LocationFinder(self.index, comment_marker=options.comment_marker)

        # Looked up along the element's MRO, so subclasses (literal
        # paragraphs, ordered lists, example blocks, ...) share a handler.
        self._handlers: dict[type, ConvertFunction] = {
            DocumentElement: self._convert_document,
            SectionElement: self._convert_section,
            ParagraphElement: self._convert_paragraph,
            ListingElement: self._convert_listing,
            ListElement: self._convert_list,
            ListItemElement: self._convert_list_item,
            DescriptionListElement: self._convert_description_list,
            QuoteElement: self._convert_quote,
            CompoundElement: self._convert_compound,
            TableElement: self._convert_table,
        }

    def convert(self, document: Optional[DocumentElement] = None) -> Document:
        """Convert the text, or an element tree already read from it.

        Parameters
        ----------
        document : DocumentElement or None, default = None
            Element tree of ``self.text``; read with the configured reader
            options when omitted

        Returns
        -------
        Document
            The root node, or the empty-document sentinel when nothing in the
            text could be converted

        """
        if document is None:
            document = load(self.text, self.options.reader, comment_marker=self.options.comment_marker)

        window = SearchWindow(min_line=1, max_line=len(self.index), skip_comments=self.options.skip_comments)
        nodes = self.convert_element(document, window)
        root = nodes[0] if nodes else None
        if not isinstance(root, Document):
            return empty_document()
        return root

    def convert_element(self, element: Element, window: SearchWindow) -> list[TxtNode]:
        """Convert one element into zero or more nodes.

        Parameters
        ----------
        element : Element
            Element to convert
        window : SearchWindow
            Window in which the element's text is searched

        Returns
        -------
        list[TxtNode]
            Converted nodes; empty when the element has no mapping or its text
            cannot be located

        """
        for element_class in type(element).__mro__:
            handler = self._handlers.get(element_class)
            if handler is not None:
                return handler(element, window)

        logger.debug(f"No conversion for {self._describe(element)}")
        return []

    def convert_element_list(self, elements: Sequence[Element], window: SearchWindow) -> list[TxtNode]:
        """Convert a run of sibling elements, concatenating their output.

        Parameters
        ----------
        elements : sequence of Element
            Siblings in source order
        window : SearchWindow
            The parent's window; each sibling searches from its own line
            hint up to the next sibling's

        Returns
        -------
        list[TxtNode]
            Converted nodes in sibling order

        """
        children: list[TxtNode] = []
        for position, element in enumerate(elements):
            following = elements[position + 1] if position + 1 < len(elements) else None
            child_window = window.narrowed(
                min_line=element.lineno,
                max_line=following.lineno if following is not None else None,
            )
            children.extend(self.convert_element(element, child_window))
        return children

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def _span(self, loc: Location) -> tuple[tuple[int, int], str]:
        span = self.index.location_to_range(loc)
        return span, self.index.slice(span)

    def _container(self, node_class: type[TxtNode], children: list[TxtNode], synthetic: bool = True) -> TxtNode:
        """Build a node spanning from its first child's start to its last child's end."""
        loc = Location.between(children[0], children[-1])
        span, raw = self._span(loc)
        return node_class(loc=loc, range=span, raw=None if synthetic else raw, children=children)

    def _locate(self, element: Element, lines: Sequence[str], window: SearchWindow) -> Optional[Location]:
        loc = self.finder.find_location(lines, window)
        if loc is None:
            logger.debug(
                f"Dropping {self._describe(element)}: text not found in lines {window.min_line}-{window.max_line}"
            )
        return loc

    @staticmethod
    def _describe(element: Any) -> str:
        kind = getattr(element, "kind", None) or getattr(element, "context", type(element).__name__)
        lineno = getattr(element, "lineno", None)
        return f"{kind} element on line {lineno}" if lineno is not None else f"{kind} element"

    def _text_paragraph(self, element: Element, text: str, window: SearchWindow) -> list[TxtNode]:
        """Build a Paragraph wrapping one Str from text that may span several lines."""
        loc = self._locate(element, text.split("\n"), window)
        if loc is None:
            return []
        span, raw = self._span(loc)
        leaf = Str(value=text, loc=loc, range=span, raw=raw)
        return [Paragraph(loc=loc, range=span, raw=raw, children=[leaf])]

    # ------------------------------------------------------------------
    # Element handlers
    # ------------------------------------------------------------------

    def _convert_document(self, element: DocumentElement, window: SearchWindow) -> list[TxtNode]:
        """Emit the Document node, spanning from its first child to its last.

        Blank lines, attribute entries and comments before the first child or
        after the last one fall outside ``Document.range``, so ``Document.raw``
        is that slice of the text rather than the whole input.
        """
        children: list[TxtNode] = []
        if element.header is not None:
            children.extend(
                self._header(element.header, element.header.title, 1, window.narrowed(min_line=element.header.lineno))
            )
        children.extend(self.convert_element_list(element.blocks, window))
        if not children:
            return []
        loc = Location.between(children[0], children[-1])
        span, raw = self._span(loc)
        return [Document(loc=loc, range=span, raw=raw, children=children)]

    def _header(self, element: Element, title: str, depth: int, window: SearchWindow) -> list[TxtNode]:
        loc = self._locate(element, [title], window)
        if loc is None:
            return []
        span, raw = self._span(loc)
        leaf = Str(value=title, loc=loc, range=span, raw=raw)
        return [Header(depth=depth, loc=loc, range=span, raw=raw, children=[leaf])]

    def _convert_section(self, element: SectionElement, window: SearchWindow) -> list[TxtNode]:
        """Emit the section's Header followed, flat, by its converted blocks."""
        header = self._header(element, element.title, element.level + 1, window)
        if not header:
            return []
        return header + self.convert_element_list(element.blocks, window)

    def _convert_paragraph(self, element: ParagraphElement, window: SearchWindow) -> list[TxtNode]:
        if not element.lines:
            return []
        return self._text_paragraph(element, element.source, window)

    def _convert_listing(self, element: ListingElement, window: SearchWindow) -> list[TxtNode]:
        # Comment-like lines are content inside listings.
        loc = self._locate(element, element.lines, window.create_updated(skip_comments=False))
        if loc is None:
            return []
        span, raw = self._span(loc)
        return [CodeBlock(lang=element.language, value=element.source, loc=loc, range=span, raw=raw)]

    def _convert_list(self, element: ListElement, window: SearchWindow) -> list[TxtNode]:
        children = self.convert_element_list(element.items, window)
        if not children:
            return []
        return [self._container(List, children)]

    def _convert_list_item(self, element: ListItemElement, window: SearchWindow) -> list[TxtNode]:
        children: list[TxtNode] = []
        if element.text:
            children.extend(self._text_paragraph(element, element.text, window))
        children.extend(self.convert_element_list(element.blocks, window))
        if not children:
            return []
        # Nested blocks located before the item text would otherwise invert the span.
        children.sort(key=lambda node: node.range[0])
        return [self._container(ListItem, children)]

    def _convert_description_list(self, element: DescriptionListElement, window: SearchWindow) -> list[TxtNode]:
        """Emit a List of the entries' terms and descriptions, interleaved."""
        items: list[Element] = []
        for entry in element.entries:
            items.extend(entry.terms)
            if entry.description is not None:
                items.append(entry.description)
        children = self.convert_element_list(items, window)
        if not children:
            return []
        return [self._container(List, children)]

    def _convert_quote(self, element: QuoteElement, window: SearchWindow) -> list[TxtNode]:
        children = self.convert_element_list(element.blocks, window)
        if not children:
            return []
        return [self._container(BlockQuote, children)]

    def _convert_compound(self, element: CompoundElement, window: SearchWindow) -> list[TxtNode]:
        """Splice the converted blocks of admonitions, examples, sidebars and open blocks into the parent."""
        return self.convert_element_list(element.blocks, window)

    def _convert_table(self, element: TableElement, window: SearchWindow) -> list[TxtNode]:
        rows = list(element.body_rows)
        if self.options.include_table_header:
            rows = list(element.header_rows) + rows

        children: list[TxtNode] = []
        for row in rows:
            if not row:
                continue
            # Pinning min to the row's line keeps its cells from matching text in earlier rows.
            children.extend(self._convert_table_row(row, window.narrowed(min_line=row[0].lineno)))
        if not children:
            return []
        return [self._container(Table, children)]

    def _convert_table_row(self, row: TableRowElement, window: SearchWindow) -> list[TxtNode]:
        children: list[TxtNode] = []
        for cell in row:
            cell_window = window.narrowed(min_line=cell.lineno)
            start_idx = 0
            if children and children[-1].loc.end.line == cell_window.min_line:
                start_idx = children[-1].loc.end.column
            children.extend(self._convert_table_cell(cell, cell_window.create_updated(start_idx=start_idx)))
        if not children:
            return []
        return [self._container(TableRow, children)]

    def _convert_table_cell(self, element: TableCellElement, window: SearchWindow) -> list[TxtNode]:
        if element.style == "asciidoc":
            blocks = element.inner.blocks if element.inner is not None else []
            children = self.convert_element_list(blocks, window.create_updated(start_idx=0))
            if not children:
                logger.debug(f"Dropping {self._describe(element)}: no located content")
                return []
            return [self._container(TableCell, children, synthetic=False)]

        loc = self._locate(element, element.text.split("\n"), window)
        if loc is None:
            return []
        span, raw = self._span(loc)
        leaf = Str(value=element.text, loc=loc, range=span, raw=raw)
        return [TableCell(loc=loc, range=span, raw=raw, children=[leaf])]


def parse(text: str, options: Optional[ConverterOptions] = None) -> Document:
    """Parse AsciiDoc text into a spanned AST.

    Parameters
    ----------
    text : str
        AsciiDoc source
    options : ConverterOptions or None, default = None
        Conversion options

    Returns
    -------
    Document
        Root node; a childless Document spanning ``(0, 0)`` when nothing in the
        text could be converted

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a ConverterOptions instance

    Examples
    --------
        >>> doc = parse("text")
        >>> doc.children[0].type, doc.children[0].range
        ('Paragraph', (0, 4))

    """
    return Converter(text, options).convert()
