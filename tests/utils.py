"""Test utilities for the adocast test suite.

This module provides helpers for creating temporary files and for checking
the spans of converted documents against their source text.
"""

import shutil
import tempfile
from pathlib import Path

from adocast.ast import TxtNode, check_spans, walk


def assert_spans_valid(node: TxtNode, text: str) -> None:
    """Assert that every span in the tree is consistent with the source."""
    errors = check_spans(node, text)
    assert errors == [], "\n".join(errors)


def ranges(nodes: list[TxtNode]) -> list[tuple[int, int]]:
    """Return the ranges of ``nodes`` in order."""
    return [node.range for node in nodes]


def node_types(node: TxtNode) -> list[str]:
    """Return the types of ``node`` and its descendants in document order."""
    return [n.type for n in walk(node)]


def create_test_temp_dir() -> Path:
    """Create an empty temporary directory."""
    return Path(tempfile.mkdtemp(prefix="adocast-test-"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a directory made by ``create_test_temp_dir``."""
    shutil.rmtree(path, ignore_errors=True)
