#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Output rendering for the adocast CLI.

``json`` output is the serialized AST; ``tree`` output is a ``rich`` tree of
node types and spans meant for reading in a terminal.
"""

from __future__ import annotations

import json
from typing import Any, Optional, TextIO

from adocast.ast.nodes import CodeBlock, Header, Str, TxtNode
from adocast.ast.serialization import ast_to_dict

_PREVIEW_LENGTH = 40


def _preview(text: str) -> str:
    text = text.replace("\n", "\\n")
    if len(text) > _PREVIEW_LENGTH:
        return text[: _PREVIEW_LENGTH - 3] + "..."
    return text


def describe_node(node: TxtNode) -> str:
    """Return a one-line label with the node's type, span and short content.

    Examples
    --------
        >>> from adocast import parse
        >>> describe_node(parse("text").children[0])
        'Paragraph 1:0-1:4 [0, 4)'

    """
    start, end = node.loc.start, node.loc.end
    label = f"{node.type} {start.line}:{start.column}-{end.line}:{end.column} [{node.range[0]}, {node.range[1]})"
    if isinstance(node, Header):
        label += f" depth={node.depth}"
    if isinstance(node, CodeBlock):
        label += f" lang={node.lang}" if node.lang else ""
        label += f" {_preview(node.value)!r}"
    if isinstance(node, Str):
        label += f" {_preview(node.value)!r}"
    return label


def render_tree(document: TxtNode, title: Optional[str] = None, file: Optional[TextIO] = None) -> None:
    """Print the node tree with rich.

    Parameters
    ----------
    document : TxtNode
        Root node to print
    title : str or None, default = None
        Label for the tree root, usually the input path
    file : TextIO or None, default = None
        Stream to print to, stdout when omitted

    """
    from rich.console import Console
    from rich.text import Text
    from rich.tree import Tree

    # Plain Text labels: source text must not be parsed as markup or emoji codes
    def add_children(branch: Tree, node: TxtNode) -> None:
        for child in node.children:
            add_children(branch.add(Text(describe_node(child))), child)

    root_label = Text(describe_node(document))
    if title:
        root_label = Text.assemble((title, "bold"), " ", root_label)
    tree = Tree(root_label)
    add_children(tree, document)
    Console(file=file).print(tree)


def render_json(results: list[tuple[str, TxtNode]], indent: Optional[int], file: TextIO) -> None:
    """Write the serialized AST of each input.

    A single input is written as its document object; several inputs are
    written as a list of ``{"filePath": ..., "ast": ...}`` objects.
    """
    payload: Any
    if len(results) == 1:
        payload = ast_to_dict(results[0][1])
    else:
        payload = [{"filePath": path, "ast": ast_to_dict(document)} for path, document in results]
    file.write(json.dumps(payload, indent=indent, ensure_ascii=False))
    file.write("\n")
