"""
Core types, result values and errors for dtsviz.
"""

from .errors import ArtifactNotFoundError, DtsvizError, UpstreamToolError
from .graph import GraphModel
from .result import Err, Ok, Result
from .types import Dialect, GraphEdge, GraphNode, LayoutDirective, LayoutMode, Position

__all__ = [
    "ArtifactNotFoundError",
    "Dialect",
    "DtsvizError",
    "Err",
    "GraphEdge",
    "GraphModel",
    "GraphNode",
    "LayoutDirective",
    "LayoutMode",
    "Ok",
    "Position",
    "Result",
    "UpstreamToolError",
]
