#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
walk : Iterate over a node and its descendants in document order
find_nodes : Collect the descendants of a given kind
extract_text : Concatenate the values of Str leaves
check_spans : Report span invariant violations against the source text

Examples
--------
    >>> from adocast import parse
    >>> from adocast.ast.utils import find_nodes
    >>> doc = parse("* one\\n* two")
    >>> [node.value for node in find_nodes(doc, "Str")]
    ['one', 'two']

"""

from __future__ import annotations

from typing import Iterator, Union

from adocast.ast.nodes import Str, TxtNode
from adocast.ast.visitors import SpanValidationVisitor


def walk(node: TxtNode) -> Iterator[TxtNode]:
    """Yield ``node`` and all of its descendants, depth first, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def find_nodes(node: TxtNode, node_type: Union[str, type[TxtNode]]) -> list[TxtNode]:
    """Collect every node of ``node_type`` below and including ``node``.

    Parameters
    ----------
    node : TxtNode
        Root of the search
    node_type : str or type
        Kind tag (e.g. ``"Str"``) or node class

    Returns
    -------
    list of TxtNode
        Matching nodes in document order

    """
    if isinstance(node_type, str):
        return [n for n in walk(node) if n.type == node_type]
    return [n for n in walk(node) if isinstance(n, node_type)]


def extract_text(node: TxtNode, joiner: str = "\n") -> str:
    """Join the values of all Str leaves under ``node``."""
    return joiner.join(n.value for n in walk(node) if isinstance(n, Str))


def check_spans(node: TxtNode, text: str) -> list[str]:
    """Check the span invariants of a converted tree.

    Parameters
    ----------
    node : TxtNode
        Root of a tree converted from ``text``
    text : str
        The source text

    Returns
    -------
    list of str
        One message per violation; empty when the tree is consistent

    """
    validator = SpanValidationVisitor(text)
    node.accept(validator)
    return validator.errors
