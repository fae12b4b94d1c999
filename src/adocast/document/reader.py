#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/document/reader.py
"""Line-oriented AsciiDoc block reader.

This module turns AsciiDoc text into the element tree of
``adocast.document.model``. It works at block level only: inline markup is
left in the text untouched, so element text can be searched for in the
source.

The reader runs in two stages, the way most hand-written markup readers do:

1. ``AsciiDocLexer`` classifies every physical line into a ``Token``.
2. ``AsciiDocBlockReader`` walks the tokens with a cursor and builds
   elements, collecting pending block attributes (``[source,python]``,
   ``[NOTE]``, ``[%header]``, ...) until the block they apply to.

Line numbers are 1-based and count ``\\n``-separated lines, the same way the
converter's source index does. Nested readers for ``a|`` table cells are
given the absolute line numbers of the cell content.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional, Sequence

from adocast.constants import ADMONITION_LABELS, DEFAULT_COMMENT_MARKER, DELIMITED_BLOCK_CONTEXTS
from adocast.document.model import (
    AdmonitionElement,
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
    TableRowElement,
    UnorderedListElement,
    UnsupportedElement,
)
from adocast.options.asciidoc import ReaderOptions

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for the AsciiDoc lexer."""

    # Structure
    HEADING = auto()
    BLOCK_DELIMITER = auto()
    OPEN_DELIMITER = auto()
    FENCE = auto()
    TABLE_DELIMITER = auto()
    THEMATIC_BREAK = auto()
    PAGE_BREAK = auto()
    BLOCK_IMAGE = auto()

    # List markers
    UNORDERED_LIST = auto()
    ORDERED_LIST = auto()
    DESCRIPTION_TERM = auto()
    LIST_CONTINUATION = auto()

    # Attributes and metadata
    ATTRIBUTE = auto()
    BLOCK_ATTRIBUTE = auto()
    ANCHOR = auto()
    BLOCK_TITLE = auto()

    # Special
    COMMENT = auto()
    BLANK_LINE = auto()
    TEXT_LINE = auto()
    EOF = auto()


@dataclass
class Token:
    """A classified source line.

    Parameters
    ----------
    type : TokenType
        Type of the token
    content : str
        Token value (title, item text, stripped line, ...)
    line_num : int
        1-based line number in the source
    text : str
        The physical line without its terminator
    indent : int
        Number of leading whitespace characters
    metadata : dict
        Additional token metadata

    """

    type: TokenType
    content: str
    line_num: int
    text: str = ""
    indent: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)


_DELIMITER_TYPES = frozenset({TokenType.BLOCK_DELIMITER, TokenType.OPEN_DELIMITER})
_LIST_TYPES = frozenset({TokenType.UNORDERED_LIST, TokenType.ORDERED_LIST})
_PARAGRAPH_BREAKS = frozenset(
    {
        TokenType.BLANK_LINE,
        TokenType.EOF,
        TokenType.BLOCK_DELIMITER,
        TokenType.OPEN_DELIMITER,
        TokenType.FENCE,
        TokenType.TABLE_DELIMITER,
    }
)
_LIST_PARAGRAPH_BREAKS = _PARAGRAPH_BREAKS | _LIST_TYPES | {TokenType.LIST_CONTINUATION, TokenType.DESCRIPTION_TERM}


class AsciiDocLexer:
    """Tokenizer for AsciiDoc content.

    The lexer classifies each line on its own, without context; the block
    reader decides, for example, that a list-marker line inside a listing
    block is plain content.

    Parameters
    ----------
    lines : sequence of (int, str)
        Line numbers paired with physical line text
    comment_marker : str, default = "//"
        Prefix of single-line comments

    """

    heading_pattern = re.compile(r"^(={1,6}|#{1,6})\s+(\S.*?)(?:\s+\1)?\s*$")
    ul_pattern = re.compile(r"^(\*{1,5}|-)\s+(\S.*)$")
    ol_pattern = re.compile(r"^(\.{1,5}|\d+\.|[a-zA-Z]\.)\s+(\S.*)$")
    checkbox_pattern = re.compile(r"^\[([ xX*])\]\s+(\S.*)$")
    desc_pattern = re.compile(r"^(.*?\S)(:{2,4}|;;)(?:\s+(.*?))?\s*$")
    attribute_pattern = re.compile(r"^:(!)?([A-Za-z0-9_][A-Za-z0-9_-]*)(!)?:(?:\s+(.*?))?\s*$")
    block_attr_pattern = re.compile(r"^\[([^\[\]]*)\]$")
    anchor_pattern = re.compile(r"^\[\[([^\]]+)\]\]$")
    block_title_pattern = re.compile(r"^\.([^.\s].*)$")
    image_pattern = re.compile(r"^image::(\S+?)\[(.*)\]$")

    def __init__(self, lines: Sequence[tuple[int, str]], comment_marker: str = DEFAULT_COMMENT_MARKER):
        """Initialize the lexer with numbered lines."""
        self.lines = lines
        self.comment_marker = comment_marker
        self.tokens: list[Token] = []

    @classmethod
    def from_text(cls, text: str, comment_marker: str = DEFAULT_COMMENT_MARKER) -> AsciiDocLexer:
        """Create a lexer over ``text`` split on ``\\n``."""
        return cls([(number, line) for number, line in enumerate(text.split("\n"), start=1)], comment_marker)

    def tokenize(self) -> list[Token]:
        """Tokenize the content into a list of tokens ending with EOF.

        Returns
        -------
        list[Token]
            List of tokens

        """
        self.tokens = [self._tokenize_line(line.rstrip("\r"), number) for number, line in self.lines]
        last_line = self.lines[-1][0] if self.lines else 0
        self.tokens.append(Token(TokenType.EOF, "", last_line + 1))
        return self.tokens

    def _tokenize_line(self, line: str, line_num: int) -> Token:
        """Classify a single line.

        Parameters
        ----------
        line : str
            Line content
        line_num : int
            Line number

        Returns
        -------
        Token
            Token for this line

        """
        stripped = line.strip()
        indent = len(line) - len(line.lstrip())

        def token(token_type: TokenType, content: str, **metadata: Any) -> Token:
            return Token(token_type, content, line_num, text=line, indent=indent, metadata=metadata)

        if not stripped:
            return token(TokenType.BLANK_LINE, "")

        # Comment block delimiters come before single-line comments
        if line.startswith("////") and set(stripped) == {"/"}:
            return token(TokenType.BLOCK_DELIMITER, stripped, context="comment")
        if line.startswith(self.comment_marker):
            return token(TokenType.COMMENT, line[len(self.comment_marker) :].strip())

        if re.match(r"^\|={3,}$", stripped):
            return token(TokenType.TABLE_DELIMITER, stripped)

        if len(stripped) >= 4 and stripped[0] in DELIMITED_BLOCK_CONTEXTS and set(stripped) == {stripped[0]}:
            return token(TokenType.BLOCK_DELIMITER, stripped, context=DELIMITED_BLOCK_CONTEXTS[stripped[0]])

        if stripped == "--":
            return token(TokenType.OPEN_DELIMITER, stripped, context="open")

        if stripped.startswith("```"):
            language = stripped[3:].strip()
            return token(TokenType.FENCE, stripped, language=language or None)

        if re.match(r"^'{3,}$", stripped) or stripped in ("---", "***", "___", "- - -", "* * *"):
            return token(TokenType.THEMATIC_BREAK, stripped)

        if re.match(r"^<{3,}$", stripped):
            return token(TokenType.PAGE_BREAK, stripped)

        if indent == 0:
            heading_match = self.heading_pattern.match(line)
            if heading_match:
                level = len(heading_match.group(1)) - 1
                return token(TokenType.HEADING, heading_match.group(2), level=level)

            anchor_match = self.anchor_pattern.match(stripped)
            if anchor_match:
                return token(TokenType.ANCHOR, anchor_match.group(1))

            block_attr_match = self.block_attr_pattern.match(stripped)
            if block_attr_match:
                return token(TokenType.BLOCK_ATTRIBUTE, block_attr_match.group(1))

            attr_match = self.attribute_pattern.match(line)
            if attr_match:
                unset = attr_match.group(1) is not None or attr_match.group(3) is not None
                return token(TokenType.ATTRIBUTE, attr_match.group(2), value=attr_match.group(4) or "", unset=unset)

            image_match = self.image_pattern.match(stripped)
            if image_match:
                return token(TokenType.BLOCK_IMAGE, image_match.group(1))

        if stripped == "+":
            return token(TokenType.LIST_CONTINUATION, stripped)

        ul_match = self.ul_pattern.match(stripped)
        if ul_match:
            text = ul_match.group(2)
            checked: Optional[bool] = None
            checkbox_match = self.checkbox_pattern.match(text)
            if checkbox_match:
                checked = checkbox_match.group(1) != " "
                text = checkbox_match.group(2)
            return token(TokenType.UNORDERED_LIST, text, marker=ul_match.group(1), checked=checked)

        ol_match = self.ol_pattern.match(stripped)
        if ol_match:
            return token(TokenType.ORDERED_LIST, ol_match.group(2), marker=self._marker_style(ol_match.group(1)))

        if indent == 0:
            title_match = self.block_title_pattern.match(stripped)
            if title_match:
                return token(TokenType.BLOCK_TITLE, title_match.group(1))

        desc_match = self.desc_pattern.match(stripped)
        if desc_match:
            return token(
                TokenType.DESCRIPTION_TERM,
                desc_match.group(1),
                delimiter=desc_match.group(2),
                description=desc_match.group(3) or "",
            )

        return token(TokenType.TEXT_LINE, stripped)

    @staticmethod
    def _marker_style(marker: str) -> str:
        """Normalize explicit ordered-list numerals so all items of one style share a marker."""
        if marker[0].isdigit():
            return "1."
        if marker[0].isalpha():
            return "a." if marker[0].islower() else "A."
        return marker


_CELL_SPEC = r"(?:\d+(?:\.\d+)?[*+]|\.\d+\+)?(?:[<^>](?:\.[<^>])?)?[adehlmsv]?"
# A cell spec either fills the text before the first separator of a line or
# follows whitespace at the end of the previous cell's text.
_CELL_SPEC_START_PATTERN = re.compile(rf"^\s*({_CELL_SPEC})$")
_CELL_SPEC_END_PATTERN = re.compile(rf"\s({_CELL_SPEC})$")
_CELL_SEPARATOR_PATTERN = re.compile(r"(?<!\\)\|")
_ADMONITION_PARAGRAPH_PATTERN = re.compile(r"^([A-Z]+):\s+(\S.*)$")
_ATTRIBUTE_SPLIT_PATTERN = re.compile(r'(?:[^,"]|"[^"]*")+')


@dataclass
class _PendingCell:
    """Table cell under construction."""

    lineno: int
    spec: str
    lines: list[tuple[int, str]] = field(default_factory=list)

    @property
    def style(self) -> Optional[str]:
        styles = {"a": "asciidoc", "d": "default", "e": "emphasis", "h": "header", "l": "literal", "m": "monospaced"}
        return styles.get(self.spec[-1:]) if self.spec else None

    @property
    def colspan(self) -> int:
        span_match = re.match(r"^(\d+)[*+]", self.spec)
        return int(span_match.group(1)) if span_match else 1


class AsciiDocBlockReader:
    """Build an element tree from lexer tokens.

    Parameters
    ----------
    tokens : list of Token
        Tokens produced by ``AsciiDocLexer.tokenize``, ending with EOF
    options : ReaderOptions or None, default = None
        Reader configuration
    attributes : dict or None, default = None
        Document attributes inherited from an enclosing document
    comment_marker : str, default = "//"
        Prefix of single-line comments, used when re-reading AsciiDoc cells

    """

    def __init__(
        self,
        tokens: list[Token],
        options: Optional[ReaderOptions] = None,
        attributes: Optional[dict[str, str]] = None,
        comment_marker: str = DEFAULT_COMMENT_MARKER,
    ):
        """Initialize the reader with its tokens."""
        self.tokens = tokens
        self.comment_marker = comment_marker
        self.options = options or ReaderOptions()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.current_token_index = 0
        self.pending_block_attrs: dict[str, Any] = {}
        self._list_depth = 0

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def _current_token(self) -> Token:
        if self.current_token_index < len(self.tokens):
            return self.tokens[self.current_token_index]
        return self.tokens[-1]

    def _peek_token(self, offset: int = 1) -> Token:
        index = self.current_token_index + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]

    def _advance(self) -> Token:
        """Advance to the next token and return the previous one."""
        token = self._current_token()
        if token.type != TokenType.EOF:
            self.current_token_index += 1
        return token

    def _skip_blank_lines(self) -> None:
        """Skip over blank lines and comment lines."""
        while self._current_token().type in (TokenType.BLANK_LINE, TokenType.COMMENT):
            self._advance()

    # ------------------------------------------------------------------
    # Block attributes
    # ------------------------------------------------------------------

    def _parse_block_attribute(self, attr_content: str) -> None:
        """Parse a block attribute line into the pending attributes.

        Handles ``[source,python]``, ``[NOTE]``, ``[quote,author]``,
        ``[%header%autowidth]``, ``[cols="1,2",options="header"]``,
        ``[#id]`` and ``[.role]``.

        Parameters
        ----------
        attr_content : str
            Content inside the brackets

        """
        parts = [part.strip() for part in _ATTRIBUTE_SPLIT_PATTERN.findall(attr_content)]
        positional: list[str] = []

        for index, part in enumerate(parts):
            if "=" in part:
                key, value = part.split("=", 1)
                key = key.strip()
                value = value.strip().strip("\"'")
                if key in ("opts", "options"):
                    self.pending_block_attrs.setdefault("options", set()).update(
                        option.strip() for option in value.split(",") if option.strip()
                    )
                else:
                    self.pending_block_attrs[key] = value
                continue

            if index == 0:
                style, *options = part.split("%")
                for shorthand in re.findall(r"[#.][^#.%]+", style):
                    self.pending_block_attrs["id" if shorthand[0] == "#" else "role"] = shorthand[1:]
                style = re.sub(r"[#.].*$", "", style)
                if style:
                    self.pending_block_attrs["style"] = style
                if options:
                    self.pending_block_attrs.setdefault("options", set()).update(options)
            else:
                positional.append(part)

        if positional:
            self.pending_block_attrs.setdefault("positional", []).extend(positional)

    def _consume_pending_attrs(self) -> dict[str, Any]:
        """Consume and clear pending block attributes."""
        attrs = self.pending_block_attrs
        self.pending_block_attrs = {}
        return attrs

    def _admonition_label(self, attrs: dict[str, Any]) -> Optional[str]:
        style = str(attrs.get("style", "")).upper()
        if self.options.parse_admonitions and style in ADMONITION_LABELS:
            return style
        return None

    # ------------------------------------------------------------------
    # Document and sections
    # ------------------------------------------------------------------

    def parse_document(self, allow_header: bool = True, source: str = "") -> DocumentElement:
        """Read the whole token stream.

        Parameters
        ----------
        allow_header : bool, default = True
            Whether a leading ``= Title`` line is read as the document header
        source : str, default = ""
            Source text recorded on the document element

        Returns
        -------
        DocumentElement
            Root of the element tree

        """
        document = DocumentElement(lineno=1, source=source)

        if allow_header:
            document.header = self._parse_document_header()

        document.blocks = self._parse_blocks(level=-1)
        document.attributes = self.attributes
        return document

    def _parse_document_header(self) -> Optional[DocumentHeader]:
        """Read the header: leading attribute entries, ``= Title``, author and revision lines."""
        while True:
            self._skip_blank_lines()
            token = self._current_token()
            if token.type != TokenType.ATTRIBUTE:
                break
            self._record_attribute(self._advance())

        token = self._current_token()
        if token.type != TokenType.HEADING or token.metadata["level"] != 0:
            return None

        self._advance()
        header = DocumentHeader(lineno=token.line_num, title=token.content, level=0)

        # Author and revision lines directly follow the title
        for _ in range(2):
            if self._current_token().type != TokenType.TEXT_LINE:
                break
            self._advance()

        while self._current_token().type in (TokenType.ATTRIBUTE, TokenType.COMMENT):
            next_token = self._advance()
            if next_token.type == TokenType.ATTRIBUTE:
                self._record_attribute(next_token)

        return header

    def _record_attribute(self, token: Token) -> None:
        if token.metadata.get("unset"):
            self.attributes.pop(token.content, None)
        else:
            self.attributes[token.content] = token.metadata.get("value", "")

    def _parse_blocks(self, level: int = -1, until: Optional[str] = None) -> list[Element]:
        """Read blocks until EOF, a closing delimiter or a sibling section.

        Parameters
        ----------
        level : int, default = -1
            Level of the enclosing section; a heading at or above it ends the run
        until : str or None, default = None
            Delimiter line that closes the enclosing block. Headings inside a
            delimited block never start sections.

        Returns
        -------
        list[Element]
            Blocks in source order

        """
        blocks: list[Element] = []

        while True:
            self._skip_blank_lines()
            token = self._current_token()

            if token.type == TokenType.EOF:
                if until is not None:
                    logger.debug(f"Unterminated delimited block {until!r} ends at end of input")
                break

            if until is not None and token.type in _DELIMITER_TYPES and token.content == until:
                self._advance()
                break

            if until is None and token.type == TokenType.HEADING and token.metadata["level"] <= level:
                break

            block = self._parse_block(in_delimited=until is not None)
            if block is not None:
                blocks.append(block)

        return blocks

    def _parse_block(self, in_delimited: bool = False) -> Optional[Element]:
        """Read one block-level element.

        Returns None for lines that only contribute attributes (block
        attributes, anchors, titles, attribute entries) and for comment blocks.
        """
        token = self._current_token()

        if token.type == TokenType.ATTRIBUTE:
            self._record_attribute(self._advance())
            return None

        if token.type == TokenType.BLOCK_ATTRIBUTE:
            self._parse_block_attribute(token.content)
            self._advance()
            return None

        if token.type == TokenType.ANCHOR:
            self.pending_block_attrs["id"] = token.content
            self._advance()
            return None

        if token.type == TokenType.BLOCK_TITLE:
            self.pending_block_attrs["title"] = token.content
            self._advance()
            return None

        if token.type == TokenType.HEADING:
            return self._parse_section(discrete=in_delimited)

        if token.type in _LIST_TYPES:
            return self._parse_list(())

        if token.type == TokenType.DESCRIPTION_TERM:
            return self._parse_description_list()

        if token.type in _DELIMITER_TYPES:
            return self._parse_delimited_block()

        if token.type == TokenType.FENCE:
            return self._parse_fenced_block()

        if token.type == TokenType.TABLE_DELIMITER:
            return self._parse_table()

        if token.type in (TokenType.THEMATIC_BREAK, TokenType.PAGE_BREAK, TokenType.BLOCK_IMAGE):
            self._consume_pending_attrs()
            self._advance()
            kind = {
                TokenType.THEMATIC_BREAK: "thematic_break",
                TokenType.PAGE_BREAK: "page_break",
                TokenType.BLOCK_IMAGE: "image",
            }[token.type]
            return UnsupportedElement(lineno=token.line_num, kind=kind)

        return self._parse_paragraph()

    def _parse_section(self, discrete: bool = False) -> SectionElement:
        """Read a heading and, unless it is discrete, the blocks of its section."""
        attrs = self._consume_pending_attrs()
        token = self._advance()
        level = token.metadata["level"]
        section = SectionElement(lineno=token.line_num, title=token.content, level=level)

        if discrete or attrs.get("style") in ("discrete", "float"):
            return section

        section.blocks = self._parse_blocks(level=level)
        return section

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def _parse_paragraph(self) -> Optional[Element]:
        """Read consecutive lines up to a blank line or block boundary.

        Comment lines inside the paragraph are dropped from its lines without
        ending it. The pending block style decides the element produced.
        """
        attrs = self._consume_pending_attrs()
        first = self._current_token()
        breaks = _LIST_PARAGRAPH_BREAKS if self._list_depth else _PARAGRAPH_BREAKS
        literal = first.indent > 0 and first.type == TokenType.TEXT_LINE

        tokens: list[Token] = []
        consumed = False
        while self._current_token().type not in breaks:
            token = self._advance()
            consumed = True
            if token.type != TokenType.COMMENT:
                tokens.append(token)

        if not tokens:
            if consumed:
                return None
            # The first line is itself a break in this context; take it as text.
            tokens.append(self._advance())

        lineno = tokens[0].line_num
        style = str(attrs.get("style", ""))

        if style == "comment":
            return None
        if style in ("source", "listing"):
            language = self._listing_language(attrs)
            return ListingElement(lineno=lineno, lines=[token.text for token in tokens], language=language)
        if style in ("pass", "verse", "stem", "latexmath", "asciimath"):
            return UnsupportedElement(lineno=lineno, kind=style)
        if literal or style == "literal":
            return LiteralElement(lineno=lineno, lines=self._dedent([token.text for token in tokens]))

        lines = [token.text.strip() for token in tokens]
        label = self._admonition_label(attrs)
        if label is not None:
            return AdmonitionElement(lineno=lineno, label=label, blocks=[ParagraphElement(lineno=lineno, lines=lines)])
        if style == "quote":
            return QuoteElement(lineno=lineno, blocks=[ParagraphElement(lineno=lineno, lines=lines)])

        if self.options.admonition_paragraphs:
            label_match = _ADMONITION_PARAGRAPH_PATTERN.match(lines[0])
            if label_match and label_match.group(1) in ADMONITION_LABELS:
                inner = ParagraphElement(lineno=lineno, lines=[label_match.group(2)] + lines[1:])
                return AdmonitionElement(lineno=lineno, label=label_match.group(1), blocks=[inner])

        return ParagraphElement(lineno=lineno, lines=lines)

    @staticmethod
    def _dedent(lines: list[str]) -> list[str]:
        indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
        margin = min(indents) if indents else 0
        return [line[margin:].rstrip() for line in lines]

    def _listing_language(self, attrs: dict[str, Any]) -> Optional[str]:
        positional = attrs.get("positional") or []
        if positional:
            return positional[0]
        if attrs.get("language"):
            return str(attrs["language"])
        if attrs.get("style") == "source":
            return self.attributes.get("source-language") or None
        return None

    # ------------------------------------------------------------------
    # Delimited blocks
    # ------------------------------------------------------------------

    def _collect_verbatim_lines(self, closing: str) -> list[str]:
        """Collect physical lines up to the closing delimiter line and consume it."""
        lines: list[str] = []
        while True:
            token = self._current_token()
            if token.type == TokenType.EOF:
                logger.debug(f"Unterminated verbatim block {closing!r} ends at end of input")
                break
            self._advance()
            if token.text.strip() == closing:
                break
            lines.append(token.text)
        return lines

    def _parse_delimited_block(self) -> Optional[Element]:
        """Read a block framed by ``----``, ``....``, ``____``, ``====``, ``****``, ``++++``, ``////`` or ``--``."""
        attrs = self._consume_pending_attrs()
        opening = self._advance()
        delimiter = opening.content
        context = opening.metadata["context"]
        style = str(attrs.get("style", ""))
        label = self._admonition_label(attrs)

        if context == "comment":
            self._collect_verbatim_lines(delimiter)
            return None

        if context == "listing" or (context == "open" and style in ("source", "listing")):
            lines = self._collect_verbatim_lines(delimiter)
            return ListingElement(lineno=opening.line_num, lines=lines, language=self._listing_language(attrs))

        if context == "literal":
            return LiteralElement(lineno=opening.line_num, lines=self._collect_verbatim_lines(delimiter))

        if context == "pass" or style in ("pass", "verse", "stem", "latexmath", "asciimath"):
            self._collect_verbatim_lines(delimiter)
            return UnsupportedElement(lineno=opening.line_num, kind=style or context)

        blocks = self._parse_delimited_children(delimiter)

        if label is not None:
            return AdmonitionElement(lineno=opening.line_num, label=label, blocks=blocks)
        if context == "quote" or style == "quote":
            return QuoteElement(lineno=opening.line_num, blocks=blocks)
        if context == "example":
            return ExampleElement(lineno=opening.line_num, blocks=blocks)
        if context == "sidebar" or style == "sidebar":
            return SidebarElement(lineno=opening.line_num, blocks=blocks)
        return OpenElement(lineno=opening.line_num, blocks=blocks)

    def _parse_delimited_children(self, delimiter: str) -> list[Element]:
        # Paragraphs inside a delimited block are not list-item text
        saved_depth = self._list_depth
        self._list_depth = 0
        try:
            return self._parse_blocks(until=delimiter)
        finally:
            self._list_depth = saved_depth

    def _parse_fenced_block(self) -> ListingElement:
        """Read a fenced (```` ``` ````) code block."""
        attrs = self._consume_pending_attrs()
        opening = self._advance()
        lines = self._collect_verbatim_lines("```")
        language = opening.metadata.get("language") or self._listing_language(attrs)
        return ListingElement(lineno=opening.line_num, lines=lines, language=language)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _parse_list(self, ancestors: tuple[str, ...]) -> ListElement:
        """Read a list whose items share the current token's marker.

        Parameters
        ----------
        ancestors : tuple of str
            Markers of the enclosing lists. A marker not among them (or this
            list's own) starts a nested list inside the current item.

        """
        self._consume_pending_attrs()
        first = self._current_token()
        marker = first.metadata["marker"]
        list_class = OrderedListElement if first.type == TokenType.ORDERED_LIST else UnorderedListElement
        element = list_class(lineno=first.line_num, marker=marker)
        scope = ancestors + (marker,)

        self._list_depth += 1
        try:
            while self._is_list_token(self._current_token(), marker):
                element.items.append(self._parse_list_item(scope))
                self._skip_blank_lines()
        finally:
            self._list_depth -= 1

        return element

    @staticmethod
    def _is_list_token(token: Token, marker: Optional[str] = None) -> bool:
        if token.type not in _LIST_TYPES:
            return False
        return marker is None or token.metadata["marker"] == marker

    def _parse_list_item(self, scope: tuple[str, ...]) -> ListItemElement:
        """Read one list item: marker line, text continuation lines, attached blocks and nested lists."""
        token = self._advance()
        item = ListItemElement(lineno=token.line_num, checked=token.metadata.get("checked"))
        lines = [token.content]

        while self._current_token().type in (TokenType.TEXT_LINE, TokenType.COMMENT):
            next_token = self._advance()
            if next_token.type == TokenType.TEXT_LINE:
                lines.append(next_token.content)
        item.text = "\n".join(lines)

        self._read_attached_blocks(item.blocks, scope)
        return item

    def _read_attached_blocks(self, blocks: list[Element], scope: tuple[str, ...]) -> None:
        """Append ``+``-attached blocks and nested lists that belong to the current item."""
        while True:
            token = self._current_token()

            if token.type == TokenType.LIST_CONTINUATION:
                self._advance()
                block = self._parse_attached_block()
                if block is not None:
                    blocks.append(block)
                continue

            # Look past blank lines for a nested list
            offset = 0
            while self._peek_token(offset).type in (TokenType.BLANK_LINE, TokenType.COMMENT):
                offset += 1
            candidate = self._peek_token(offset)

            if self._is_list_token(candidate) and candidate.metadata["marker"] not in scope:
                self.current_token_index += offset
                blocks.append(self._parse_list(scope))
                continue

            if candidate.type == TokenType.DESCRIPTION_TERM and candidate.metadata["delimiter"] not in scope:
                self.current_token_index += offset
                blocks.append(self._parse_description_list(scope))
                continue

            return

    def _parse_attached_block(self) -> Optional[Element]:
        """Read the block following a list continuation, with its attribute lines."""
        while True:
            token = self._current_token()
            if token.type in (TokenType.BLANK_LINE, TokenType.EOF):
                return None
            block = self._parse_block()
            if block is not None or token.type not in (
                TokenType.BLOCK_ATTRIBUTE,
                TokenType.ANCHOR,
                TokenType.BLOCK_TITLE,
                TokenType.ATTRIBUTE,
            ):
                return block

    def _parse_description_list(self, ancestors: tuple[str, ...] = ()) -> DescriptionListElement:
        """Read a description list whose terms share the current token's delimiter."""
        self._consume_pending_attrs()
        first = self._current_token()
        delimiter = first.metadata["delimiter"]
        element = DescriptionListElement(lineno=first.line_num, delimiter=delimiter)
        scope = ancestors + (delimiter,)

        self._list_depth += 1
        try:
            while self._is_term(self._current_token(), delimiter):
                element.entries.append(self._parse_description_entry(delimiter, scope))
                self._skip_blank_lines()
        finally:
            self._list_depth -= 1

        return element

    @staticmethod
    def _is_term(token: Token, delimiter: str) -> bool:
        return token.type == TokenType.DESCRIPTION_TERM and token.metadata["delimiter"] == delimiter

    def _parse_description_entry(self, delimiter: str, scope: tuple[str, ...]) -> DescriptionEntry:
        """Read stacked terms and the description they share."""
        entry = DescriptionEntry()

        while True:
            token = self._advance()
            entry.terms.append(ListItemElement(lineno=token.line_num, text=token.content))
            inline_text = token.metadata.get("description", "")
            if inline_text or not self._is_term(self._current_token(), delimiter):
                break

        lines: list[str] = []
        lineno: Optional[int] = None
        if inline_text:
            lines.append(inline_text)
            lineno = token.line_num
        else:
            self._skip_blank_lines()

        while self._current_token().type in (TokenType.TEXT_LINE, TokenType.COMMENT):
            next_token = self._advance()
            if next_token.type == TokenType.TEXT_LINE:
                lines.append(next_token.content)
                if lineno is None:
                    lineno = next_token.line_num

        blocks: list[Element] = []
        self._read_attached_blocks(blocks, scope)

        if lines or blocks:
            if lineno is None:
                lineno = blocks[0].lineno
            entry.description = ListItemElement(lineno=lineno, text="\n".join(lines) or None, blocks=blocks)
        return entry

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _parse_table(self) -> TableElement:
        """Read a ``|===`` table into header and body rows."""
        attrs = self._consume_pending_attrs()
        opening = self._advance()
        body_tokens: list[Token] = []
        while True:
            token = self._current_token()
            if token.type == TokenType.EOF:
                logger.debug(f"Unterminated table starting on line {opening.line_num}")
                break
            self._advance()
            if token.type == TokenType.TABLE_DELIMITER and token.content == opening.content:
                break
            body_tokens.append(token)

        cells = self._split_cells(body_tokens)
        column_count = self._column_count(attrs, cells)

        rows: list[TableRowElement] = []
        row: TableRowElement = []
        width = 0
        for pending in cells:
            row.append(self._build_cell(pending))
            width += pending.colspan
            if width >= column_count:
                rows.append(row)
                row, width = [], 0
        if row:
            logger.debug(f"Dropping {len(row)} cell(s) of an incomplete row in table on line {opening.line_num}")

        table = TableElement(lineno=opening.line_num, body_rows=rows)
        if rows and self._has_header(attrs, body_tokens, rows[0]):
            table.header_rows = [rows[0]]
            table.body_rows = rows[1:]
        return table

    def _split_cells(self, tokens: list[Token]) -> list[_PendingCell]:
        """Split table lines into cells; lines without a separator continue the previous cell."""
        cells: list[_PendingCell] = []

        for token in tokens:
            if token.type == TokenType.COMMENT:
                continue
            if token.type == TokenType.BLANK_LINE:
                if cells and cells[-1].style == "asciidoc":
                    cells[-1].lines.append((token.line_num, ""))
                continue

            pieces = _CELL_SEPARATOR_PATTERN.split(token.text)
            texts: list[str] = []
            specs: list[str] = []
            for position, piece in enumerate(pieces[:-1]):
                spec_match = _CELL_SPEC_START_PATTERN.match(piece) if position == 0 else None
                if spec_match is None:
                    spec_match = _CELL_SPEC_END_PATTERN.search(piece)
                spec = spec_match.group(1) if spec_match else ""
                texts.append(piece[: spec_match.start(1)] if spec else piece)
                specs.append(spec)
            texts.append(pieces[-1])

            leading = texts[0]
            if leading.strip() and cells:
                cells[-1].lines.append((token.line_num, leading.strip()))

            for spec, text in zip(specs, texts[1:]):
                cell = _PendingCell(lineno=token.line_num, spec=spec)
                cell.lines.append((token.line_num, text.strip()))
                cells.append(cell)

        return cells

    @staticmethod
    def _column_count(attrs: dict[str, Any], cells: list[_PendingCell]) -> int:
        cols = attrs.get("cols")
        if cols:
            count = 0
            for part in str(cols).split(","):
                multiplier = re.match(r"^\s*(\d+)\*", part)
                count += int(multiplier.group(1)) if multiplier else 1
            return max(count, 1)

        if not cells:
            return 1
        first_line = cells[0].lineno
        return max(sum(cell.colspan for cell in cells if cell.lineno == first_line), 1)

    def _has_header(self, attrs: dict[str, Any], tokens: list[Token], first_row: TableRowElement) -> bool:
        mode = self.options.table_header_detection
        if mode == "none":
            return False

        options = attrs.get("options", set())
        if "noheader" in options:
            return False
        if "header" in options:
            return True
        if mode == "attribute-based":
            return False

        # Implicit: the whole first row sits on the first line, followed by a blank line
        content = [token for token in tokens if token.type != TokenType.COMMENT]
        if len(content) < 2 or content[0].type == TokenType.BLANK_LINE:
            return False
        first_line = content[0].line_num
        return all(cell.lineno == first_line for cell in first_row) and content[1].type == TokenType.BLANK_LINE

    def _build_cell(self, pending: _PendingCell) -> TableCellElement:
        lines = list(pending.lines)
        while lines and not lines[0][1]:
            lines.pop(0)
        while lines and not lines[-1][1]:
            lines.pop()

        cell = TableCellElement(
            lineno=pending.lineno,
            text="\n".join(text for _, text in lines),
            style=pending.style,
            colspan=pending.colspan,
        )
        if pending.style == "asciidoc" and lines:
            tokens = AsciiDocLexer(lines, self.comment_marker).tokenize()
            nested = AsciiDocBlockReader(tokens, self.options, self.attributes, self.comment_marker)
            cell.inner = nested.parse_document(allow_header=False, source=cell.text)
        return cell


def load(
    text: str, options: Optional[ReaderOptions] = None, comment_marker: str = DEFAULT_COMMENT_MARKER
) -> DocumentElement:
    """Read AsciiDoc text into an element tree.

    Parameters
    ----------
    text : str
        AsciiDoc source
    options : ReaderOptions or None, default = None
        Reader configuration
    comment_marker : str, default = "//"
        Prefix of single-line comments

    Returns
    -------
    DocumentElement
        Root of the element tree; empty input gives a document with no blocks

    Examples
    --------
        >>> doc = load("= Title\\n\\nSome text.")
        >>> doc.header.title
        'Title'
        >>> doc.blocks[0].lines, doc.blocks[0].lineno
        (['Some text.'], 3)

    """
    tokens = AsciiDocLexer.from_text(text, comment_marker).tokenize()
    reader = AsciiDocBlockReader(tokens, options, comment_marker=comment_marker)
    return reader.parse_document(source=text)
