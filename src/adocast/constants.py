#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the adocast library.

This module centralizes the hardcoded values and default configuration
constants used across adocast.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Location Recovery - Search and comment handling defaults
3. Document Reader - Defaults for the AsciiDoc block reader
4. Host Integration - File extensions and placeholder paths
5. CLI - Exit codes and config file names
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

NodeType = Literal[
    "Document",
    "Header",
    "Paragraph",
    "List",
    "ListItem",
    "BlockQuote",
    "CodeBlock",
    "Table",
    "TableRow",
    "TableCell",
    "Str",
]
TableHeaderDetection = Literal["implicit", "attribute-based", "none"]
OutputFormat = Literal["json", "tree"]

# =============================================================================
# Location Recovery
# =============================================================================

DEFAULT_COMMENT_MARKER = "//"
DEFAULT_SKIP_COMMENTS = True
DEFAULT_INCLUDE_TABLE_HEADER = False

# =============================================================================
# Document Reader
# =============================================================================

DEFAULT_PARSE_ADMONITIONS = True
DEFAULT_ADMONITION_PARAGRAPHS = True
DEFAULT_TABLE_HEADER_DETECTION: TableHeaderDetection = "implicit"

ADMONITION_LABELS = frozenset({"NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION"})

# Delimiter character -> element context for delimited blocks
DELIMITED_BLOCK_CONTEXTS: dict[str, str] = {
    "-": "listing",
    ".": "literal",
    "_": "quote",
    "=": "example",
    "*": "sidebar",
    "+": "pass",
    "/": "comment",
}

# =============================================================================
# Host Integration
# =============================================================================

ASCIIDOC_EXTENSIONS: tuple[str, ...] = (".adoc", ".asciidoc", ".asc", ".asciidoctor")
DEFAULT_FILE_PATH_PLACEHOLDER = "<asciidoc>"

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

DEFAULT_OUTPUT_FORMAT: OutputFormat = "json"
DEFAULT_JSON_INDENT = 2

CONFIG_FILENAMES: tuple[str, ...] = (".adocast.toml", ".adocast.yaml", ".adocast.yml", ".adocast.json")
PYPROJECT_TOOL_SECTION = "adocast"
CONFIG_ENV_VAR = "ADOCAST_CONFIG"
