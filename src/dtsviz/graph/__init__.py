"""
Layout, overlay resolution and rendering of parsed graphs.
"""

from .layout import GraphLayoutBuilder, LayoutModel, to_cytoscape_elements
from .overlay import ClickRegion, InteractiveGraphView, OverlaySnapshot, OverlayState
from .resolution import ArtifactResolver, HttpArtifactFetcher, candidate_locations

__all__ = [
    "ArtifactResolver",
    "ClickRegion",
    "GraphLayoutBuilder",
    "HttpArtifactFetcher",
    "InteractiveGraphView",
    "LayoutModel",
    "OverlaySnapshot",
    "OverlayState",
    "candidate_locations",
    "to_cytoscape_elements",
]
