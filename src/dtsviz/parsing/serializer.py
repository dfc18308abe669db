"""
Syntax tree serializers.

Three read-only views of the same tree:
- ``tree_to_dot``: labeled directed graph, one node per tree node and one
  parent -> child edge per relation. This is the overlay artifact.
- ``tree_to_dict``: nested JSON with source positions.
- ``tree_to_sexp``: S-expression of a reloaded dump, in tree-sitter's own
  notation (live tree-sitter nodes render themselves).
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from .base import SimpleTreeNode, SyntaxTreeNode

DEFAULT_GRAPH_NAME = "AST"


def escape_label(text: str) -> str:
    """Escape backslashes and double quotes for a DOT quoted string."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _graph_name(name: str) -> str:
    cleaned = re.sub(r"\W", "_", name)
    return cleaned or DEFAULT_GRAPH_NAME


class TreeGraphSerializer:
    """
    Emits a syntax tree as labeled-node DOT.

    Nodes receive ``n0, n1, ...`` in depth-first pre-order. Each node line
    is followed by the edge from its parent, so edges appear in the order
    children are visited. The walk uses an explicit stack; deep trees do
    not hit the interpreter recursion limit.
    """

    def __init__(self, graph_name: str = DEFAULT_GRAPH_NAME, id_prefix: str = "n"):
        self.graph_name = _graph_name(graph_name)
        self.id_prefix = id_prefix

    def serialize_lines(self, root: SyntaxTreeNode) -> List[str]:
        lines = [f"digraph {self.graph_name} {{"]
        counter = 0
        stack: List[Tuple[SyntaxTreeNode, Optional[str]]] = [(root, None)]

        while stack:
            node, parent_id = stack.pop()
            node_id = f"{self.id_prefix}{counter}"
            counter += 1

            lines.append(f'  {node_id} [label="{escape_label(str(node.type))}"];')
            if parent_id is not None:
                lines.append(f"  {parent_id} -> {node_id};")

            for child in reversed(list(node.children)):
                stack.append((child, node_id))

        lines.append("}")
        return lines

    def serialize(self, root: SyntaxTreeNode) -> str:
        return "\n".join(self.serialize_lines(root)) + "\n"


def tree_to_dot(root: SyntaxTreeNode, graph_name: str = DEFAULT_GRAPH_NAME) -> str:
    """Serialize ``root`` to labeled-node DOT text."""
    return TreeGraphSerializer(graph_name).serialize(root)


def _point(node: Any, attr: str) -> Dict[str, int]:
    point = getattr(node, attr, None)
    if point is None:
        return {"row": 0, "column": 0}
    row, column = point
    return {"row": row, "column": column}


def tree_to_dict(node: SyntaxTreeNode, field_name: Optional[str] = None) -> Dict[str, Any]:
    """
    JSON-ready form of the tree, with start and end positions.

    ``isNamed``, ``isMissing`` and the child's ``fieldName`` are kept so a
    reloaded dump renders the same S-expression as the live tree.
    """
    field_name_for = getattr(node, "field_name_for_child", None)
    children = []
    for index, child in enumerate(node.children):
        if callable(field_name_for):
            child_field = field_name_for(index)
        else:
            child_field = getattr(child, "field_name", None)
        children.append(tree_to_dict(child, child_field))

    data: Dict[str, Any] = {
        "type": node.type,
        "startPosition": _point(node, "start_point"),
        "endPosition": _point(node, "end_point"),
        "isNamed": bool(getattr(node, "is_named", True)),
        "isMissing": bool(getattr(node, "is_missing", False)),
    }
    if field_name:
        data["fieldName"] = field_name
    data["children"] = children
    return data


def tree_to_sexp(node: SimpleTreeNode) -> str:
    """
    S-expression in tree-sitter's notation, e.g.
    ``(assignment left: (identifier) right: (MISSING integer))``.

    Only named and MISSING nodes appear.
    """
    if node.is_missing:
        label = f"MISSING {node.type}" if node.is_named else f'MISSING "{node.type}"'
    else:
        label = node.type

    parts = [label]
    for child in node.children:
        if not (child.is_named or child.is_missing):
            continue
        rendered = tree_to_sexp(child)
        parts.append(f"{child.field_name}: {rendered}" if child.field_name else rendered)

    return f"({' '.join(parts)})"
