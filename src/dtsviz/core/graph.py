"""
Structural graph model shared by the parser, the layout builder and the
viewer.

It manages:
- An ordered, id-unique node table (insertion order drives default layout).
- An ordered edge sequence (duplicates permitted, no implicit dedup).
- Endpoint materialisation, so every edge endpoint is always a node.
- Structural statistics computed on a rustworkx projection.
"""

from typing import Any, Dict, Iterator, List, Optional

import rustworkx as rx

from .types import GraphEdge, GraphNode


class GraphModel:
    """
    Canonical structural form of a graph.

    Invariant: every edge's source and target id is present in the node
    table. ``add_edge`` creates missing endpoints with the raw id as label.
    """

    def __init__(self):
        self._nodes: Dict[str, GraphNode] = {}
        self._edges: List[GraphEdge] = []

    def add_node(self, node_id: str, label: Optional[str] = None) -> GraphNode:
        """
        Add or relabel a node.

        A repeated id keeps its original position and takes the new label.
        """
        node = GraphNode(id=node_id, label=node_id if label is None else label)
        self._nodes[node_id] = node
        return node

    def ensure_node(self, node_id: str) -> GraphNode:
        """Return the node for ``node_id``, creating it (label = id) if absent."""
        existing = self.get_node(node_id)
        if existing is not None:
            return existing
        return self.add_node(node_id)

    def add_edge(self, source: str, target: str) -> GraphEdge:
        """Append a directed edge, materialising unknown endpoints."""
        self.ensure_node(source)
        self.ensure_node(target)
        edge = GraphEdge(source=source, target=target)
        self._edges.append(edge)
        return edge

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self._nodes.get(node_id)

    @property
    def nodes(self) -> List[GraphNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[GraphEdge]:
        return list(self._edges)

    def iter_nodes(self) -> Iterator[GraphNode]:
        return iter(self._nodes.values())

    def iter_edges(self) -> Iterator[GraphEdge]:
        return iter(self._edges)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def is_empty(self) -> bool:
        return not self._nodes

    def to_rustworkx(self) -> rx.PyDiGraph:
        """Project the model onto a rustworkx multigraph (payloads are node ids)."""
        graph = rx.PyDiGraph(multigraph=True)
        index = {node_id: graph.add_node(node_id) for node_id in self._nodes}
        for edge in self._edges:
            graph.add_edge(index[edge.source], index[edge.target], edge)
        return graph

    def get_stats(self) -> Dict[str, Any]:
        graph = self.to_rustworkx()
        roots = []
        orphans = []
        for idx in graph.node_indices():
            if graph.in_degree(idx) == 0:
                if graph.out_degree(idx) == 0:
                    orphans.append(graph[idx])
                else:
                    roots.append(graph[idx])

        is_dag = rx.is_directed_acyclic_graph(graph)
        depth = rx.dag_longest_path_length(graph) if is_dag and self._edges else 0

        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "roots": roots,
            "orphans": orphans,
            "is_dag": is_dag,
            "depth": depth,
            "backend": "rustworkx",
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.model_dump() for node in self._nodes.values()],
            "edges": [edge.model_dump() for edge in self._edges],
        }

    def __eq__(self, other):
        if isinstance(other, GraphModel):
            return self.nodes == other.nodes and self._edges == other._edges
        return NotImplemented

    def __repr__(self) -> str:
        return f"GraphModel(nodes={self.node_count}, edges={self.edge_count})"
