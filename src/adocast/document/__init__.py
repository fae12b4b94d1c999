#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/document/__init__.py
"""AsciiDoc element tree and the block reader that builds it."""

from adocast.document.model import (
    AdmonitionElement,
    CompoundElement,
    DescriptionEntry,
    DescriptionListElement,
    DocumentElement,
    DocumentHeader,
    Element,
    ExampleElement,
    ListElement,
    ListingElement,
    ListItemElement,
    LiteralElement,
    OpenElement,
    OrderedListElement,
    ParagraphElement,
    QuoteElement,
    SectionElement,
    SidebarElement,
    TableCellElement,
    TableElement,
    UnorderedListElement,
    UnsupportedElement,
)
from adocast.document.reader import AsciiDocBlockReader, AsciiDocLexer, Token, TokenType, load

__all__ = [
    "AdmonitionElement",
    "AsciiDocBlockReader",
    "AsciiDocLexer",
    "CompoundElement",
    "DescriptionEntry",
    "DescriptionListElement",
    "DocumentElement",
    "DocumentHeader",
    "Element",
    "ExampleElement",
    "ListElement",
    "ListItemElement",
    "ListingElement",
    "LiteralElement",
    "OpenElement",
    "OrderedListElement",
    "ParagraphElement",
    "QuoteElement",
    "SectionElement",
    "SidebarElement",
    "TableCellElement",
    "TableElement",
    "Token",
    "TokenType",
    "UnorderedListElement",
    "UnsupportedElement",
    "load",
]
