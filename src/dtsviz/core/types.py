"""
Core type definitions for dtsviz.

Every graph that reaches the viewer, whichever dialect it was written in,
is reduced to these node and edge models before layout.
"""

from enum import StrEnum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Dialect(StrEnum):
    """Textual graph encodings understood by the parser."""
    QUOTED = "quoted"
    LABELED_NODE = "labeled_node"


class LayoutMode(StrEnum):
    """Strategies for placing a graph on the canvas."""
    RADIAL = "radial"
    HIERARCHICAL = "hierarchical"


class GraphNode(BaseModel):
    """
    A single vertex of a parsed graph.

    In the quoted dialect the label doubles as the id.
    """
    id: str
    label: str

    model_config = ConfigDict(frozen=True)


class GraphEdge(BaseModel):
    """
    Directed relationship between two GraphNodes.
    """
    source: str
    target: str

    model_config = ConfigDict(frozen=True)


class Position(BaseModel):
    """Canvas coordinates for one node."""
    x: float
    y: float

    model_config = ConfigDict(frozen=True)


class LayoutDirective(BaseModel):
    """
    Instructions for a layout engine that runs inside the renderer.

    Field names follow the cytoscape-dagre option names so the directive
    can be handed to the browser as-is.
    """
    name: str = "dagre"
    rank_dir: str = Field(default="TB", serialization_alias="rankDir")
    node_sep: float = Field(default=30, serialization_alias="nodeSep")
    rank_sep: float = Field(default=60, serialization_alias="rankSep")
    edge_sep: float = Field(default=20, serialization_alias="edgeSep")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_options(self) -> Dict[str, Any]:
        """Render the directive as a Cytoscape ``layout`` option object."""
        return self.model_dump(by_alias=True)
