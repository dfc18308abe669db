"""
Parsing: graph text dialects in, syntax trees out.
"""

from .base import SimpleTreeNode, SyntaxTreeNode
from .dialects import GraphTextParser, classify_dialect, parse_graph_text
from .serializer import TreeGraphSerializer, tree_to_dict, tree_to_dot, tree_to_sexp

__all__ = [
    "GraphTextParser",
    "SimpleTreeNode",
    "SyntaxTreeNode",
    "TreeGraphSerializer",
    "classify_dialect",
    "parse_graph_text",
    "tree_to_dict",
    "tree_to_dot",
    "tree_to_sexp",
]
