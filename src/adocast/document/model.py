#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/document/model.py
"""Element tree produced by the AsciiDoc block reader.

The tree mirrors the shape of an Asciidoctor document model: every element
has a ``context`` kind tag and a best-effort 1-based ``lineno`` hint, and
carries only the fields its kind exposes. Text is reported the way the reader
sees it, without list markers, checkboxes, admonition labels or comment lines,
so it does not always line up with the source; recovering exact positions is
the converter's job.

The set of element classes is closed. The converter dispatches on the class
and treats any other object as producing no output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union


@dataclass
class Element:
    """Base class of all elements.

    Parameters
    ----------
    lineno : int or None, default = None
        1-based line on which the element starts, if known

    """

    context: ClassVar[str] = "element"

    lineno: Optional[int] = None


@dataclass
class DocumentHeader(Element):
    """Document title line (``= Title``)."""

    context: ClassVar[str] = "header"

    title: str = ""
    level: int = 0


@dataclass
class SectionElement(Element):
    """Section: a title plus the blocks (and subsections) that follow it.

    Parameters
    ----------
    title : str
        Title text without the ``=`` markers
    level : int
        Section level; ``==`` is level 1, ``=`` used past the header is level 0
    blocks : list of Element
        Child blocks and subsections in source order

    """

    context: ClassVar[str] = "section"

    title: str = ""
    level: int = 1
    blocks: list[Element] = field(default_factory=list)


@dataclass
class ParagraphElement(Element):
    """Paragraph; ``lines`` excludes comment lines found inside it."""

    context: ClassVar[str] = "paragraph"

    lines: list[str] = field(default_factory=list)

    @property
    def source(self) -> str:
        """Return the paragraph lines joined with newlines."""
        return "\n".join(self.lines)


@dataclass
class LiteralElement(ParagraphElement):
    """Literal paragraph or ``....`` literal block."""

    context: ClassVar[str] = "literal"


@dataclass
class ListingElement(Element):
    """Listing (``----``) or fenced code block; ``lines`` are verbatim."""

    context: ClassVar[str] = "listing"

    lines: list[str] = field(default_factory=list)
    language: Optional[str] = None

    @property
    def source(self) -> str:
        """Return the listing lines joined with newlines."""
        return "\n".join(self.lines)


@dataclass
class ListItemElement(Element):
    """List item or description-list term/description.

    Parameters
    ----------
    text : str or None
        Item text without its marker or checkbox; None when the item has none
    blocks : list of Element
        Nested blocks (attached with ``+`` or nested lists)
    checked : bool or None
        Checkbox state for checklist items, None for ordinary items

    """

    context: ClassVar[str] = "list_item"

    text: Optional[str] = None
    blocks: list[Element] = field(default_factory=list)
    checked: Optional[bool] = None


@dataclass
class ListElement(Element):
    """Base class of ordered and unordered lists."""

    marker: str = "*"
    items: list[ListItemElement] = field(default_factory=list)


@dataclass
class UnorderedListElement(ListElement):
    """Unordered list (``*``, ``-``)."""

    context: ClassVar[str] = "ulist"


@dataclass
class OrderedListElement(ListElement):
    """Ordered list (``.``, ``1.``)."""

    context: ClassVar[str] = "olist"


@dataclass
class DescriptionEntry:
    """One description-list entry: one or more terms and an optional description."""

    terms: list[ListItemElement] = field(default_factory=list)
    description: Optional[ListItemElement] = None


@dataclass
class DescriptionListElement(Element):
    """Description list (``term:: description``)."""

    context: ClassVar[str] = "dlist"

    delimiter: str = "::"
    entries: list[DescriptionEntry] = field(default_factory=list)


@dataclass
class QuoteElement(Element):
    """Quote block wrapping child blocks."""

    context: ClassVar[str] = "quote"

    blocks: list[Element] = field(default_factory=list)


@dataclass
class CompoundElement(Element):
    """Block whose children are spliced into its parent during conversion."""

    context: ClassVar[str] = "compound"

    blocks: list[Element] = field(default_factory=list)


@dataclass
class AdmonitionElement(CompoundElement):
    """Admonition (``NOTE: text`` paragraphs or ``[NOTE]`` blocks)."""

    context: ClassVar[str] = "admonition"

    label: str = "NOTE"


@dataclass
class ExampleElement(CompoundElement):
    """Example block (``====``)."""

    context: ClassVar[str] = "example"


@dataclass
class SidebarElement(CompoundElement):
    """Sidebar block (``****``)."""

    context: ClassVar[str] = "sidebar"


@dataclass
class OpenElement(CompoundElement):
    """Open block (``--``)."""

    context: ClassVar[str] = "open"


@dataclass
class TableCellElement(Element):
    """Table cell.

    Parameters
    ----------
    text : str
        Cell text as written in the source, lines joined with newlines
    style : str or None
        ``"asciidoc"`` for ``a|`` cells, other style names or None otherwise
    inner : DocumentElement or None
        Parsed content of ``asciidoc`` cells
    colspan : int
        Number of columns the cell occupies

    """

    context: ClassVar[str] = "table_cell"

    text: str = ""
    style: Optional[str] = None
    inner: Optional[DocumentElement] = None
    colspan: int = 1


TableRowElement = list[TableCellElement]


@dataclass
class TableElement(Element):
    """Table (``|===``) split into header and body rows."""

    context: ClassVar[str] = "table"

    header_rows: list[TableRowElement] = field(default_factory=list)
    body_rows: list[TableRowElement] = field(default_factory=list)


@dataclass
class UnsupportedElement(Element):
    """Block kind the converter has no mapping for (breaks, images, passthrough)."""

    context: ClassVar[str] = "unsupported"

    kind: str = "unknown"


@dataclass
class DocumentElement(Element):
    """Root of the element tree.

    Parameters
    ----------
    header : DocumentHeader or None
        The document title, if the document starts with one
    blocks : list of Element
        Top-level blocks and sections
    attributes : dict
        Document attribute entries (``:name: value``)
    source : str
        The text the tree was read from

    """

    context: ClassVar[str] = "document"

    header: Optional[DocumentHeader] = None
    blocks: list[Element] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)
    source: str = ""


Block = Union[
    SectionElement,
    ParagraphElement,
    ListingElement,
    ListElement,
    ListItemElement,
    DescriptionListElement,
    QuoteElement,
    CompoundElement,
    TableElement,
    UnsupportedElement,
]
