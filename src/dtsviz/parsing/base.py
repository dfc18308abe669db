"""
Borrowed syntax-tree interface.

The serializers walk trees owned by the parsing collaborator (tree-sitter)
and only ever read ``type`` and ``children``, plus positions and
``is_named`` where the tree provides them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class SyntaxTreeNode(Protocol):
    """Read-only view of a parsed syntax tree node."""

    @property
    def type(self) -> str:
        ...

    @property
    def children(self) -> Sequence["SyntaxTreeNode"]:
        ...


@dataclass
class SimpleTreeNode:
    """
    In-memory tree node.

    Used to reload ``.tree.json`` dumps, so a tree can be re-serialized
    without the grammar runtime.
    """

    type: str
    children: List["SimpleTreeNode"] = field(default_factory=list)
    start_point: Tuple[int, int] = (0, 0)
    end_point: Tuple[int, int] = (0, 0)
    is_named: bool = True
    is_missing: bool = False
    field_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimpleTreeNode":
        start = data.get("startPosition") or {}
        end = data.get("endPosition") or {}
        return cls(
            type=str(data.get("type", "")),
            children=[cls.from_dict(child) for child in data.get("children", [])],
            start_point=(start.get("row", 0), start.get("column", 0)),
            end_point=(end.get("row", 0), end.get("column", 0)),
            is_named=data.get("isNamed", True),
            is_missing=data.get("isMissing", False),
            field_name=data.get("fieldName"),
        )
