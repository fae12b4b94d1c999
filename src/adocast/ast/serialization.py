#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/ast/serialization.py
"""JSON serialization and deserialization for AST nodes.

The dictionary form is the plain shape linting hosts consume: every node has
``type``, ``loc`` (``{"start": {"line", "column"}, "end": {...}}``), ``range``
(a two-element list) and ``raw``; container nodes add ``children``, and the
kind-specific fields ``value``, ``depth`` and ``lang`` appear where they apply.
Leaf nodes (Str, CodeBlock) carry no ``children`` key.

Examples
--------
Serialize a document:

    >>> from adocast import parse
    >>> from adocast.ast.serialization import ast_to_json
    >>> print(ast_to_json(parse("text"), indent=None))  # doctest: +ELLIPSIS
    {"type": "Document", ...}

Deserialize it again:

    >>> from adocast.ast.serialization import json_to_ast
    >>> json_to_ast(ast_to_json(parse("text"))).children[0].type
    'Paragraph'

"""

from __future__ import annotations

import json
from typing import Any, Optional

from adocast.ast.nodes import NODE_CLASSES, CodeBlock, Header, Location, Position, Str, TxtNode

_LEAF_TYPES = frozenset({"Str", "CodeBlock"})


def _serialize_position(position: Position) -> dict[str, int]:
    return {"line": position.line, "column": position.column}


def _serialize_location(loc: Location) -> dict[str, dict[str, int]]:
    return {"start": _serialize_position(loc.start), "end": _serialize_position(loc.end)}


def ast_to_dict(node: TxtNode) -> dict[str, Any]:
    """Convert a node and its subtree to plain dictionaries.

    Parameters
    ----------
    node : TxtNode
        Node to serialize

    Returns
    -------
    dict
        JSON-compatible dictionary

    """
    result: dict[str, Any] = {"type": node.type}
    if isinstance(node, Header):
        result["depth"] = node.depth
    if isinstance(node, CodeBlock):
        result["lang"] = node.lang
        result["value"] = node.value
    if isinstance(node, Str):
        result["value"] = node.value
    if node.type not in _LEAF_TYPES:
        result["children"] = [ast_to_dict(child) for child in node.children]
    result["loc"] = _serialize_location(node.loc)
    result["range"] = [node.range[0], node.range[1]]
    result["raw"] = node.raw
    return result


def ast_to_json(node: TxtNode, indent: Optional[int] = 2, ensure_ascii: bool = False) -> str:
    """Serialize a node to a JSON string.

    Parameters
    ----------
    node : TxtNode
        Node to serialize
    indent : int or None, default = 2
        Indentation passed to ``json.dumps``; None for compact output
    ensure_ascii : bool, default = False
        Escape non-ASCII characters

    Returns
    -------
    str
        JSON document

    """
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=ensure_ascii)


def _deserialize_position(data: dict[str, Any]) -> Position:
    return Position(line=int(data["line"]), column=int(data["column"]))


def dict_to_ast(data: dict[str, Any]) -> TxtNode:
    """Rebuild a node tree from its dictionary form.

    Parameters
    ----------
    data : dict
        Dictionary produced by ``ast_to_dict``

    Returns
    -------
    TxtNode
        The reconstructed node

    Raises
    ------
    ValueError
        If a node type is unknown or a required key is missing

    """
    node_type = data.get("type")
    node_class = NODE_CLASSES.get(str(node_type))
    if node_class is None:
        raise ValueError(f"Unknown node type: {node_type!r}")

    try:
        loc_data = data["loc"]
        start, end = data["range"]
        loc = Location(start=_deserialize_position(loc_data["start"]), end=_deserialize_position(loc_data["end"]))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed span on {node_type} node: {e}") from e

    kwargs: dict[str, Any] = {
        "loc": loc,
        "range": (int(start), int(end)),
        "raw": data.get("raw"),
        "children": [dict_to_ast(child) for child in data.get("children", [])],
    }
    if node_class is Header:
        kwargs["depth"] = int(data.get("depth", 1))
    elif node_class is CodeBlock:
        kwargs["lang"] = data.get("lang")
        kwargs["value"] = data.get("value", "")
    elif node_class is Str:
        kwargs["value"] = data.get("value", "")
    return node_class(**kwargs)


def json_to_ast(json_str: str) -> TxtNode:
    """Deserialize a JSON string produced by ``ast_to_json``.

    Raises
    ------
    ValueError
        If the JSON is invalid or does not describe a node tree

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("JSON root must be an object")
    return dict_to_ast(data)
