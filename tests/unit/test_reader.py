#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the AsciiDoc lexer and block reader."""

import pytest

from adocast.document import (
    AdmonitionElement,
    AsciiDocLexer,
    DescriptionListElement,
    ExampleElement,
    ListingElement,
    LiteralElement,
    OpenElement,
    OrderedListElement,
    ParagraphElement,
    QuoteElement,
    SectionElement,
    SidebarElement,
    TableElement,
    TokenType,
    UnorderedListElement,
    UnsupportedElement,
    load,
)
from adocast.options import ReaderOptions


def _token(line: str):
    return AsciiDocLexer.from_text(line).tokenize()[0]


@pytest.mark.unit
class TestAsciiDocLexer:
    """Tests for line classification."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("", TokenType.BLANK_LINE),
            ("   ", TokenType.BLANK_LINE),
            ("// a comment", TokenType.COMMENT),
            ("////", TokenType.BLOCK_DELIMITER),
            ("----", TokenType.BLOCK_DELIMITER),
            ("====", TokenType.BLOCK_DELIMITER),
            ("--", TokenType.OPEN_DELIMITER),
            ("```ruby", TokenType.FENCE),
            ("|===", TokenType.TABLE_DELIMITER),
            ("'''", TokenType.THEMATIC_BREAK),
            ("<<<", TokenType.PAGE_BREAK),
            ("image::diagram.png[Diagram]", TokenType.BLOCK_IMAGE),
            ("== Section", TokenType.HEADING),
            ("[source,python]", TokenType.BLOCK_ATTRIBUTE),
            ("[[anchor-id]]", TokenType.ANCHOR),
            (".Block title", TokenType.BLOCK_TITLE),
            (":toc: left", TokenType.ATTRIBUTE),
            ("+", TokenType.LIST_CONTINUATION),
            ("* item", TokenType.UNORDERED_LIST),
            ("- item", TokenType.UNORDERED_LIST),
            (". step", TokenType.ORDERED_LIST),
            ("term:: definition", TokenType.DESCRIPTION_TERM),
            ("Plain text.", TokenType.TEXT_LINE),
        ],
    )
    def test_line_types(self, line: str, expected: TokenType) -> None:
        """Test that each kind of line gets its token type."""
        assert _token(line).type == expected

    def test_tokens_end_with_eof(self) -> None:
        """Test that the token stream ends with EOF after the last line."""
        tokens = AsciiDocLexer.from_text("one\ntwo").tokenize()

        assert [token.line_num for token in tokens] == [1, 2, 3]
        assert tokens[-1].type == TokenType.EOF

    def test_heading_level(self) -> None:
        """Test that heading levels count markers from zero."""
        assert _token("= Title").metadata["level"] == 0
        assert _token("== Section").metadata["level"] == 1
        assert _token("=== Subsection").metadata["level"] == 2
        assert _token("== Section").content == "Section"

    def test_indented_heading_is_text(self) -> None:
        """Test that heading markers only count at the start of a line."""
        assert _token("  == Not a heading").type == TokenType.TEXT_LINE

    def test_list_markers(self) -> None:
        """Test list marker metadata."""
        assert _token("** nested").metadata["marker"] == "**"
        assert _token("** nested").content == "nested"
        assert _token("1. first").metadata["marker"] == "1."
        assert _token("7. seventh").metadata["marker"] == "1."
        assert _token("b. second").metadata["marker"] == "a."
        assert _token("B. second").metadata["marker"] == "A."
        assert _token(".. nested step").metadata["marker"] == ".."

    def test_checklist_items(self) -> None:
        """Test that checkboxes are removed from the item text."""
        checked = _token("* [x] done")
        unchecked = _token("* [ ] todo")
        plain = _token("* item")

        assert checked.content == "done"
        assert checked.metadata["checked"] is True
        assert unchecked.content == "todo"
        assert unchecked.metadata["checked"] is False
        assert plain.metadata["checked"] is None

    def test_description_term(self) -> None:
        """Test description term metadata."""
        token = _token("CPU:: The brain")

        assert token.content == "CPU"
        assert token.metadata["delimiter"] == "::"
        assert token.metadata["description"] == "The brain"
        assert _token("Term;;").metadata["delimiter"] == ";;"

    def test_attribute_entries(self) -> None:
        """Test attribute entry values and unsetting."""
        token = _token(":source-language: ruby")
        unset = _token(":toc!:")

        assert token.content == "source-language"
        assert token.metadata["value"] == "ruby"
        assert unset.metadata["unset"] is True

    def test_comment_content(self) -> None:
        """Test that comment tokens hold the text after the marker."""
        assert _token("// TODO check").content == "TODO check"

    def test_custom_comment_marker(self) -> None:
        """Test that the comment prefix is configurable."""
        tokens = AsciiDocLexer.from_text("# note\n// text", comment_marker="#").tokenize()

        assert tokens[0].type == TokenType.COMMENT
        assert tokens[0].content == "note"
        assert tokens[1].type == TokenType.TEXT_LINE

    def test_fence_language(self) -> None:
        """Test that fence lines carry their info string."""
        assert _token("```python").metadata["language"] == "python"
        assert _token("```").metadata["language"] is None

    def test_carriage_return_stripped(self) -> None:
        """Test that a trailing carriage return does not affect classification."""
        assert _token("== Title\r").content == "Title"


@pytest.mark.unit
class TestDocumentStructure:
    """Tests for the document header and sections."""

    def test_empty_document(self) -> None:
        """Test that empty input gives a document without blocks."""
        document = load("")

        assert document.header is None
        assert document.blocks == []
        assert document.source == ""

    def test_document_header(self) -> None:
        """Test reading the document title and attributes."""
        document = load("= Title\nJane Doe\n:toc: left\n\nSome text.")

        assert document.header is not None
        assert document.header.title == "Title"
        assert document.header.lineno == 1
        assert document.attributes == {"toc": "left"}
        assert len(document.blocks) == 1
        assert document.blocks[0].lines == ["Some text."]
        assert document.blocks[0].lineno == 5

    def test_attributes_before_title(self) -> None:
        """Test that attribute entries may precede the title."""
        document = load(":icons: font\n= Title\n\ntext")

        assert document.header is not None
        assert document.header.lineno == 2
        assert document.attributes == {"icons": "font"}

    def test_section_without_header(self) -> None:
        """Test that a level 1 heading starts a section, not a document header."""
        document = load("== Section\n\nBody text.")

        assert document.header is None
        section = document.blocks[0]
        assert isinstance(section, SectionElement)
        assert section.title == "Section"
        assert section.level == 1
        assert section.lineno == 1
        assert [block.lines for block in section.blocks] == [["Body text."]]

    def test_nested_sections(self) -> None:
        """Test that sections nest by level."""
        document = load("== A\n\n=== B\n\ntext\n\n== C")

        first, second = document.blocks
        assert (first.title, second.title) == ("A", "C")
        assert isinstance(first.blocks[0], SectionElement)
        assert first.blocks[0].title == "B"
        assert first.blocks[0].level == 2
        assert first.blocks[0].blocks[0].lines == ["text"]
        assert second.blocks == []

    def test_discrete_heading(self) -> None:
        """Test that a discrete heading owns no blocks."""
        document = load("[discrete]\n== Float\n\ntext")

        assert isinstance(document.blocks[0], SectionElement)
        assert document.blocks[0].blocks == []
        assert isinstance(document.blocks[1], ParagraphElement)

    def test_heading_inside_delimited_block_is_discrete(self) -> None:
        """Test that headings inside delimited blocks do not open sections."""
        document = load("====\n== Inside\n\ntext\n====")

        example = document.blocks[0]
        assert isinstance(example, ExampleElement)
        assert isinstance(example.blocks[0], SectionElement)
        assert example.blocks[0].blocks == []
        assert example.blocks[1].lines == ["text"]


@pytest.mark.unit
class TestParagraphs:
    """Tests for paragraphs and paragraph styles."""

    def test_multiline_paragraph(self) -> None:
        """Test that consecutive lines form one paragraph."""
        document = load("line one\nline two\n\nnext")

        assert [block.lines for block in document.blocks] == [["line one", "line two"], ["next"]]
        assert [block.lineno for block in document.blocks] == [1, 4]

    def test_comment_lines_removed(self) -> None:
        """Test that comment lines inside a paragraph are dropped from its lines."""
        document = load("first\n// note\nsecond")

        assert len(document.blocks) == 1
        assert document.blocks[0].lines == ["first", "second"]

    def test_custom_comment_marker(self) -> None:
        """Test that lines with a custom comment prefix are dropped and // lines kept."""
        document = load("first\n# note\n// kept\nsecond", comment_marker="#")

        assert document.blocks[0].lines == ["first", "// kept", "second"]

    def test_comment_only_input(self) -> None:
        """Test that comments alone produce no blocks."""
        assert load("// one\n// two").blocks == []

    def test_comment_block_dropped(self) -> None:
        """Test that comment blocks produce nothing."""
        document = load("////\nhidden\n////\n\ntext")

        assert [block.lines for block in document.blocks] == [["text"]]

    def test_literal_paragraph(self) -> None:
        """Test that indented paragraphs are literal and dedented."""
        document = load("  indented\n    more")

        block = document.blocks[0]
        assert isinstance(block, LiteralElement)
        assert block.lines == ["indented", "  more"]

    def test_admonition_paragraph(self) -> None:
        """Test that NOTE: paragraphs become admonitions without the label."""
        block = load("NOTE: Be careful.").blocks[0]

        assert isinstance(block, AdmonitionElement)
        assert block.label == "NOTE"
        assert block.blocks[0].lines == ["Be careful."]

    def test_admonition_paragraphs_disabled(self) -> None:
        """Test that the label stays in the text when admonition paragraphs are off."""
        block = load("NOTE: Be careful.", ReaderOptions(admonition_paragraphs=False)).blocks[0]

        assert type(block) is ParagraphElement
        assert block.lines == ["NOTE: Be careful."]

    def test_unknown_label_is_paragraph(self) -> None:
        """Test that only known admonition labels are recognized."""
        block = load("FOO: bar").blocks[0]

        assert type(block) is ParagraphElement

    def test_styled_admonition(self) -> None:
        """Test [TIP] before a paragraph."""
        block = load("[TIP]\nRemember this.").blocks[0]

        assert isinstance(block, AdmonitionElement)
        assert block.label == "TIP"
        assert block.blocks[0].lines == ["Remember this."]
        assert block.blocks[0].lineno == 2

    def test_styled_admonition_disabled(self) -> None:
        """Test that [TIP] is ignored when block admonitions are off."""
        block = load("[TIP]\nRemember this.", ReaderOptions(parse_admonitions=False)).blocks[0]

        assert type(block) is ParagraphElement

    def test_quote_paragraph(self) -> None:
        """Test [quote] before a paragraph."""
        block = load("[quote, Someone]\nWise words.").blocks[0]

        assert isinstance(block, QuoteElement)
        assert block.blocks[0].lines == ["Wise words."]

    def test_source_paragraph(self) -> None:
        """Test [source] before a paragraph."""
        block = load("[source,ruby]\nputs 1").blocks[0]

        assert isinstance(block, ListingElement)
        assert block.language == "ruby"
        assert block.lines == ["puts 1"]

    def test_unsupported_paragraph_styles(self) -> None:
        """Test that verse and passthrough paragraphs are reported as unsupported."""
        assert load("[verse]\nRoses are red").blocks[0] == UnsupportedElement(lineno=2, kind="verse")
        assert load("[pass]\n<b>raw</b>").blocks[0] == UnsupportedElement(lineno=2, kind="pass")

    def test_breaks_and_images(self) -> None:
        """Test that breaks and block images are unsupported elements."""
        kinds = [block.kind for block in load("'''\n\n<<<\n\nimage::a.png[]").blocks]

        assert kinds == ["thematic_break", "page_break", "image"]


@pytest.mark.unit
class TestDelimitedBlocks:
    """Tests for delimited and fenced blocks."""

    def test_listing_block(self) -> None:
        """Test that listing lines are verbatim, comments included."""
        block = load("[source,python]\n----\n// kept\n  indented\n----").blocks[0]

        assert isinstance(block, ListingElement)
        assert block.lineno == 2
        assert block.language == "python"
        assert block.lines == ["// kept", "  indented"]
        assert block.source == "// kept\n  indented"

    def test_source_language_attribute(self) -> None:
        """Test that [source] falls back to the source-language attribute."""
        block = load(":source-language: go\n\n[source]\n----\nx\n----").blocks[0]

        assert block.language == "go"

    def test_unterminated_listing(self) -> None:
        """Test that an unterminated listing runs to the end of input."""
        block = load("----\ncode").blocks[0]

        assert isinstance(block, ListingElement)
        assert block.lines == ["code"]

    def test_fenced_block(self) -> None:
        """Test fenced code blocks."""
        block = load("```python\nx = 1\n```").blocks[0]

        assert isinstance(block, ListingElement)
        assert block.language == "python"
        assert block.lines == ["x = 1"]

    def test_literal_block(self) -> None:
        """Test literal blocks."""
        block = load("....\n  keep\n....").blocks[0]

        assert isinstance(block, LiteralElement)
        assert block.lines == ["  keep"]

    @pytest.mark.parametrize(
        "delimiter,element_class",
        [("====", ExampleElement), ("****", SidebarElement), ("--", OpenElement), ("____", QuoteElement)],
    )
    def test_compound_blocks(self, delimiter: str, element_class: type) -> None:
        """Test that compound delimited blocks read their children."""
        block = load(f"{delimiter}\nInside.\n{delimiter}").blocks[0]

        assert type(block) is element_class
        assert block.lineno == 1
        assert block.blocks[0].lines == ["Inside."]

    def test_admonition_block(self) -> None:
        """Test [NOTE] on an example block."""
        block = load("[NOTE]\n====\nInside.\n\nMore.\n====").blocks[0]

        assert isinstance(block, AdmonitionElement)
        assert block.label == "NOTE"
        assert [child.lines for child in block.blocks] == [["Inside."], ["More."]]

    def test_pass_block(self) -> None:
        """Test that passthrough blocks are unsupported."""
        block = load("++++\n<div/>\n++++").blocks[0]

        assert block == UnsupportedElement(lineno=1, kind="pass")


@pytest.mark.unit
class TestLists:
    """Tests for ordered, unordered and description lists."""

    def test_unordered_list(self) -> None:
        """Test a flat unordered list."""
        block = load("* one\n* two").blocks[0]

        assert isinstance(block, UnorderedListElement)
        assert block.marker == "*"
        assert [(item.text, item.lineno) for item in block.items] == [("one", 1), ("two", 2)]

    def test_ordered_list(self) -> None:
        """Test a flat ordered list."""
        block = load(". one\n. two").blocks[0]

        assert isinstance(block, OrderedListElement)
        assert [item.text for item in block.items] == ["one", "two"]

    def test_nested_list(self) -> None:
        """Test that a deeper marker nests inside the current item."""
        block = load("* value 1\n** value 2\n* value 3\n").blocks[0]

        assert [item.text for item in block.items] == ["value 1", "value 3"]
        nested = block.items[0].blocks[0]
        assert isinstance(nested, UnorderedListElement)
        assert nested.marker == "**"
        assert nested.lineno == 2
        assert [item.text for item in nested.items] == ["value 2"]

    def test_nested_list_after_blank_line(self) -> None:
        """Test that a nested list may follow a blank line."""
        block = load("* outer\n\n** inner\n\n* next").blocks[0]

        assert [item.text for item in block.items] == ["outer", "next"]
        assert block.items[0].blocks[0].items[0].text == "inner"

    def test_other_list_kind_nests(self) -> None:
        """Test that ordered items nest inside unordered ones."""
        block = load("* outer\n. inner").blocks[0]

        nested = block.items[0].blocks[0]
        assert isinstance(nested, OrderedListElement)

    def test_item_continuation_lines(self) -> None:
        """Test that text lines directly after an item belong to it."""
        block = load("* first\ncontinued\n// note\nagain").blocks[0]

        assert block.items[0].text == "first\ncontinued\nagain"

    def test_checklist(self) -> None:
        """Test checklist item state."""
        block = load("* [x] done\n* [ ] todo").blocks[0]

        assert [(item.text, item.checked) for item in block.items] == [("done", True), ("todo", False)]

    def test_attached_block(self) -> None:
        """Test that a continuation attaches the next block to the item."""
        block = load("* item\n+\n----\ncode\n----\n* next").blocks[0]

        listing = block.items[0].blocks[0]
        assert isinstance(listing, ListingElement)
        assert listing.lines == ["code"]
        assert listing.lineno == 3
        assert [item.text for item in block.items] == ["item", "next"]

    def test_attached_paragraph(self) -> None:
        """Test attaching a paragraph."""
        block = load("* item\n+\nMore text.").blocks[0]

        paragraph = block.items[0].blocks[0]
        assert isinstance(paragraph, ParagraphElement)
        assert paragraph.lines == ["More text."]
        assert paragraph.lineno == 3

    def test_list_ends_at_paragraph(self) -> None:
        """Test that a paragraph after a blank line ends the list."""
        blocks = load("* item\n\nAfter.").blocks

        assert isinstance(blocks[0], UnorderedListElement)
        assert blocks[1].lines == ["After."]

    def test_description_list(self) -> None:
        """Test a description list with inline descriptions."""
        block = load("CPU:: The brain\nRAM:: Memory").blocks[0]

        assert isinstance(block, DescriptionListElement)
        assert block.delimiter == "::"
        terms = [[term.text for term in entry.terms] for entry in block.entries]
        descriptions = [entry.description.text for entry in block.entries]
        assert terms == [["CPU"], ["RAM"]]
        assert descriptions == ["The brain", "Memory"]

    def test_description_on_next_line(self) -> None:
        """Test stacked terms sharing a description on the following line."""
        block = load("A::\nB::\nshared text").blocks[0]

        entry = block.entries[0]
        assert [term.text for term in entry.terms] == ["A", "B"]
        assert entry.description.text == "shared text"
        assert entry.description.lineno == 3

    def test_term_without_description(self) -> None:
        """Test a term with no description."""
        block = load("Lonely::").blocks[0]

        assert block.entries[0].description is None


@pytest.mark.unit
class TestTables:
    """Tests for tables."""

    def test_rows_from_first_line(self) -> None:
        """Test that the column count comes from the first line."""
        table = load("|===\n|a |b\n|c |d\n|===").blocks[0]

        assert isinstance(table, TableElement)
        assert table.header_rows == []
        assert [[cell.text for cell in row] for row in table.body_rows] == [["a", "b"], ["c", "d"]]
        assert [cell.lineno for cell in table.body_rows[1]] == [3, 3]

    def test_cols_attribute(self) -> None:
        """Test that the cols attribute sets the column count."""
        table = load('[cols="1,1"]\n|===\n|a\n|b\n|c\n|d\n|===').blocks[0]

        assert [[cell.text for cell in row] for row in table.body_rows] == [["a", "b"], ["c", "d"]]

    def test_cols_multiplier(self) -> None:
        """Test N* multipliers in the cols attribute."""
        table = load('[cols="3*"]\n|===\n|a |b |c\n|===').blocks[0]

        assert len(table.body_rows[0]) == 3

    def test_implicit_header(self) -> None:
        """Test that a first line followed by a blank line is the header row."""
        table = load("|===\n|H1 |H2\n\n|a |b\n|===").blocks[0]

        assert [[cell.text for cell in row] for row in table.header_rows] == [["H1", "H2"]]
        assert [[cell.text for cell in row] for row in table.body_rows] == [["a", "b"]]

    def test_header_option(self) -> None:
        """Test %header without a blank line."""
        table = load("[%header]\n|===\n|H1 |H2\n|a |b\n|===").blocks[0]

        assert len(table.header_rows) == 1
        assert len(table.body_rows) == 1

    def test_noheader_option(self) -> None:
        """Test that noheader suppresses implicit detection."""
        table = load('[options="noheader"]\n|===\n|H1 |H2\n\n|a |b\n|===').blocks[0]

        assert table.header_rows == []
        assert len(table.body_rows) == 2

    @pytest.mark.parametrize("mode,expected", [("implicit", 1), ("attribute-based", 0), ("none", 0)])
    def test_header_detection_modes(self, mode: str, expected: int) -> None:
        """Test each table header detection mode on an implicit header."""
        options = ReaderOptions(table_header_detection=mode)
        table = load("|===\n|H1 |H2\n\n|a |b\n|===", options).blocks[0]

        assert len(table.header_rows) == expected

    def test_multiline_cell(self) -> None:
        """Test that a line without a separator continues the previous cell."""
        table = load("[cols=\"2*\"]\n|===\n|first\nmore |second\n|===").blocks[0]

        assert [cell.text for cell in table.body_rows[0]] == ["first\nmore", "second"]

    def test_colspan(self) -> None:
        """Test that spanned cells count for several columns."""
        table = load("|===\n|a |b\n2+|wide\n|===").blocks[0]

        wide = table.body_rows[1][0]
        assert wide.text == "wide"
        assert wide.colspan == 2

    def test_cell_styles(self) -> None:
        """Test cell style specifiers."""
        table = load("|===\nh|head m|mono |plain\n|===").blocks[0]

        assert [(cell.text, cell.style) for cell in table.body_rows[0]] == [
            ("head", "header"),
            ("mono", "monospaced"),
            ("plain", None),
        ]

    def test_cell_text_is_not_a_spec(self) -> None:
        """Test that single-letter cell text is kept as text."""
        table = load("|===\n|a |e\n|===").blocks[0]

        assert [cell.text for cell in table.body_rows[0]] == ["a", "e"]

    def test_escaped_separator(self) -> None:
        """Test that an escaped bar does not split cells."""
        table = load("|===\n|a \\| b |c\n|===").blocks[0]

        assert [cell.text for cell in table.body_rows[0]] == ["a \\| b", "c"]

    def test_asciidoc_cell(self) -> None:
        """Test that a| cells carry a parsed inner document."""
        table = load("|===\na|* item\n|===").blocks[0]

        cell = table.body_rows[0][0]
        assert cell.style == "asciidoc"
        assert cell.text == "* item"
        assert cell.inner is not None
        nested = cell.inner.blocks[0]
        assert isinstance(nested, UnorderedListElement)
        assert nested.lineno == 2
        assert nested.items[0].text == "item"

    def test_comments_skipped_in_tables(self) -> None:
        """Test that comment lines inside a table are not cell content."""
        table = load("|===\n|a |b\n// note\n|c |d\n|===").blocks[0]

        assert [[cell.text for cell in row] for row in table.body_rows] == [["a", "b"], ["c", "d"]]

    def test_incomplete_row_dropped(self) -> None:
        """Test that trailing cells short of a full row are dropped."""
        table = load("|===\n|a |b\n|c\n|===").blocks[0]

        assert [[cell.text for cell in row] for row in table.body_rows] == [["a", "b"]]
