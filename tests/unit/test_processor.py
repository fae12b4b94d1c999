#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the linting host processor."""

import pytest

from adocast import AsciiDocFileProcessor, AsciiDocProcessor, ConfigError, ConverterOptions
from adocast.ast import Document


@pytest.mark.unit
class TestAsciiDocProcessor:
    """Tests for AsciiDocProcessor."""

    def test_available_extensions(self) -> None:
        """Test the handled file extensions."""
        assert AsciiDocProcessor.available_extensions() == (".adoc", ".asciidoc", ".asc", ".asciidoctor")

    def test_default_options(self) -> None:
        """Test that no configuration gives default options."""
        assert AsciiDocProcessor().options == ConverterOptions()

    def test_options_instance(self) -> None:
        """Test passing options directly."""
        options = ConverterOptions(include_table_header=True)

        assert AsciiDocProcessor(options).options is options

    def test_config_mapping(self) -> None:
        """Test passing a configuration mapping."""
        processor = AsciiDocProcessor({"skip-comments": False})

        assert processor.options.skip_comments is False
        assert processor.config == {"skip-comments": False}

    def test_invalid_config_mapping(self) -> None:
        """Test that bad configuration is rejected up front."""
        with pytest.raises(ConfigError):
            AsciiDocProcessor({"unknown": True})

    def test_processor_for_extension(self) -> None:
        """Test creating the per-extension processor."""
        processor = AsciiDocProcessor().processor(".adoc")

        assert isinstance(processor, AsciiDocFileProcessor)
        assert processor.extension == ".adoc"


@pytest.mark.unit
class TestAsciiDocFileProcessor:
    """Tests for pre_process and post_process."""

    def test_pre_process(self) -> None:
        """Test that pre_process returns the spanned AST."""
        processor = AsciiDocProcessor().processor(".adoc")

        doc = processor.pre_process("= Title\n\ntext", "README.adoc")

        assert isinstance(doc, Document)
        assert [child.type for child in doc.children] == ["Header", "Paragraph"]

    def test_pre_process_uses_options(self) -> None:
        """Test that the processor's options are applied."""
        processor = AsciiDocProcessor({"include_table_header": True}).processor(".adoc")

        doc = processor.pre_process("|===\n|H\n\n|a\n|===")

        assert len(doc.children[0].children) == 2

    def test_pre_process_empty(self) -> None:
        """Test that empty input gives the empty-document sentinel."""
        doc = AsciiDocProcessor().processor(".adoc").pre_process("")

        assert doc.children == []
        assert doc.range == (0, 0)

    def test_post_process(self) -> None:
        """Test that the file path is attached to the messages."""
        processor = AsciiDocProcessor().processor(".adoc")
        messages = [{"message": "issue", "line": 1}]

        assert processor.post_process(messages, "docs/guide.adoc") == {
            "messages": messages,
            "filePath": "docs/guide.adoc",
        }

    @pytest.mark.parametrize("file_path", [None, ""])
    def test_post_process_placeholder_path(self, file_path) -> None:
        """Test the placeholder used when no path is known."""
        result = AsciiDocProcessor().processor(".adoc").post_process([], file_path)

        assert result == {"messages": [], "filePath": "<asciidoc>"}
