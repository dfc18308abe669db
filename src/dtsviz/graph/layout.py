"""
Layout builder.

Two strategies:
- Radial: deterministic circle placement computed here, used for the main
  dependency graph.
- Hierarchical: a top-to-bottom dagre directive executed by the renderer,
  used for syntax tree overlays whose subtree widths vary too much for a
  circle.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import HierarchySettings, RadialSettings
from ..core.graph import GraphModel
from ..core.types import LayoutDirective, LayoutMode, Position


@dataclass
class LayoutModel:
    """
    A graph plus placement.

    Radial layouts carry exactly one position per node; hierarchical layouts
    carry no positions and one directive that covers every node.
    """

    graph: GraphModel
    mode: LayoutMode
    positions: Dict[str, Position] = field(default_factory=dict)
    directive: Optional[LayoutDirective] = None

    def position_of(self, node_id: str) -> Optional[Position]:
        return self.positions.get(node_id)

    def layout_options(self) -> Dict[str, Any]:
        """Cytoscape ``layout`` option for this model."""
        if self.directive is not None:
            return self.directive.to_options()
        return {"name": "preset"}


class GraphLayoutBuilder:
    def __init__(
        self,
        radial: RadialSettings | None = None,
        hierarchy: HierarchySettings | None = None,
    ):
        self.radial_settings = radial or RadialSettings()
        self.hierarchy_settings = hierarchy or HierarchySettings()

    def radius_for(self, node_count: int) -> float:
        """``clamp(radius_per_node * n, min_radius, max_radius)``."""
        s = self.radial_settings
        return max(s.min_radius, min(s.max_radius, s.radius_per_node * node_count))

    def radial(self, graph: GraphModel) -> LayoutModel:
        s = self.radial_settings
        count = graph.node_count
        radius = self.radius_for(count)
        angle_step = (2 * math.pi) / max(1, count)

        positions = {
            node.id: Position(
                x=s.center_x + radius * math.cos(i * angle_step),
                y=s.center_y + radius * math.sin(i * angle_step),
            )
            for i, node in enumerate(graph.iter_nodes())
        }
        return LayoutModel(graph=graph, mode=LayoutMode.RADIAL, positions=positions)

    def hierarchical(self, graph: GraphModel) -> LayoutModel:
        h = self.hierarchy_settings
        directive = LayoutDirective(
            rank_dir=h.rank_dir,
            node_sep=h.node_sep,
            rank_sep=h.rank_sep,
            edge_sep=h.edge_sep,
        )
        return LayoutModel(graph=graph, mode=LayoutMode.HIERARCHICAL, directive=directive)

    def build(self, graph: GraphModel, mode: LayoutMode = LayoutMode.RADIAL) -> LayoutModel:
        if mode is LayoutMode.HIERARCHICAL:
            return self.hierarchical(graph)
        return self.radial(graph)


def to_cytoscape_elements(layout: LayoutModel) -> List[Dict[str, Any]]:
    """
    Cytoscape element list: nodes (with preset positions when known) then
    edges numbered ``e0, e1, ...`` in model order.
    """
    elements: List[Dict[str, Any]] = []
    for node in layout.graph.iter_nodes():
        element: Dict[str, Any] = {"data": {"id": node.id, "name": node.label}}
        position = layout.position_of(node.id)
        if position is not None:
            element["position"] = position.model_dump()
        elements.append(element)

    for i, edge in enumerate(layout.graph.iter_edges()):
        elements.append({"data": {"id": f"e{i}", "source": edge.source, "target": edge.target}})
    return elements
