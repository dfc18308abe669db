"""
Interactive graph view: the node-activation overlay.

State machine::

    IDLE --activate--> LOADING --resolve--> DISPLAYING
                          +--fail-------> FAILED
    DISPLAYING / FAILED --activate--> LOADING
    DISPLAYING / FAILED --dismiss---> IDLE

Each activation takes a fresh generation token. ``resolve`` and ``fail``
carry the token of the activation they answer; a token that is no longer
current is dropped, so a slow response for an earlier node can never
replace the overlay of a later one. ``load`` still answers a superseded
activation with its own outcome, marked ``superseded``, without touching
the view.
"""

import logging
from enum import StrEnum
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from ..core.result import Err, Result
from ..core.types import LayoutMode
from ..parsing.dialects import GraphTextParser
from .layout import GraphLayoutBuilder, LayoutModel, to_cytoscape_elements
from .resolution import ArtifactResolver, ResolutionError, ResolvedArtifact

logger = logging.getLogger(__name__)


class OverlayState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    DISPLAYING = "displaying"
    FAILED = "failed"


class ClickRegion(StrEnum):
    """Where a click landed relative to the overlay."""
    BACKDROP = "backdrop"
    CONTENT = "content"
    CLOSE = "close"


class GraphRenderer(Protocol):
    def render(self, layout: LayoutModel) -> None:
        ...

    def fit(self) -> None:
        ...

    def clear(self) -> None:
        ...


class CytoscapeRenderer:
    """
    Renders into a Cytoscape payload for the browser.

    ``fit`` marks the payload so the page calls ``cy.fit()`` once the
    layout has run.
    """

    def __init__(self):
        self.elements: List[Dict[str, Any]] = []
        self.layout_options: Optional[Dict[str, Any]] = None
        self.fitted = False

    def render(self, layout: LayoutModel) -> None:
        self.elements = to_cytoscape_elements(layout)
        self.layout_options = layout.layout_options()
        self.fitted = False

    def fit(self) -> None:
        self.fitted = True

    def clear(self) -> None:
        self.elements = []
        self.layout_options = None
        self.fitted = False


class OverlaySnapshot(BaseModel):
    """Serializable view of the overlay, as returned to the browser."""
    state: OverlayState
    generation: int
    title: Optional[str] = None
    error: Optional[str] = None
    raw_text: Optional[str] = None
    source: Optional[str] = None
    elements: List[Dict[str, Any]] = Field(default_factory=list)
    layout: Optional[Dict[str, Any]] = None
    fit: bool = False
    node_count: int = 0
    edge_count: int = 0
    superseded: bool = False


class InteractiveGraphView:
    def __init__(
        self,
        parser: GraphTextParser | None = None,
        layout_builder: GraphLayoutBuilder | None = None,
        renderer: GraphRenderer | None = None,
    ):
        self._parser = parser or GraphTextParser()
        self._layout_builder = layout_builder or GraphLayoutBuilder()
        self.renderer: GraphRenderer = renderer or CytoscapeRenderer()
        self._generation = 0
        self._reset()

    def _reset(self) -> None:
        self.state = OverlayState.IDLE
        self.title: Optional[str] = None
        self.error: Optional[str] = None
        self.raw_text: Optional[str] = None
        self.source: Optional[str] = None
        self.layout: Optional[LayoutModel] = None
        self.renderer.clear()

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation and self.state is OverlayState.LOADING

    def activate(self, node_id: str) -> int:
        """Start loading the overlay for ``node_id``; returns its token."""
        self._reset()
        self._generation += 1
        self.state = OverlayState.LOADING
        self.title = node_id
        logger.debug(f"Activated {node_id!r} (generation {self._generation})")
        return self._generation

    def resolve(self, token: int, text: str, source: Optional[str] = None) -> bool:
        """
        Display ``text`` for the activation identified by ``token``.

        Returns False (and changes nothing) when the token is stale.
        """
        if not self.is_current(token):
            logger.debug(f"Dropping stale overlay response (generation {token})")
            return False

        self.layout = self._layout_for(text)
        self.raw_text = text
        self.source = source
        self.renderer.render(self.layout)
        self.renderer.fit()
        self.state = OverlayState.DISPLAYING
        return True

    def fail(self, token: int, reason: str) -> bool:
        if not self.is_current(token):
            logger.debug(f"Dropping stale overlay failure (generation {token})")
            return False
        self.error = reason
        self.state = OverlayState.FAILED
        return True

    def dismiss(self) -> None:
        """
        Close the overlay.

        Dismissing while a load is in flight also retires its token.
        """
        if self.state is OverlayState.IDLE:
            return
        if self.state is OverlayState.LOADING:
            self._generation += 1
        self._reset()

    def click(self, region: ClickRegion) -> None:
        """Backdrop and close-button clicks dismiss; content clicks never do."""
        if region is ClickRegion.CONTENT:
            return
        self.dismiss()

    def _layout_for(self, text: str) -> LayoutModel:
        graph = self._parser.parse(text)
        return self._layout_builder.build(graph, LayoutMode.HIERARCHICAL)

    async def load(self, node_id: str, resolver: ArtifactResolver) -> OverlaySnapshot:
        """
        Activate ``node_id``, resolve its graph and apply the outcome.

        The returned snapshot always describes ``node_id``. When a newer
        activation or a dismiss overtook this one, the outcome is rendered
        on its own and the shared view is left as it is.
        """
        token = self.activate(node_id)
        outcome = await resolver.resolve(node_id)
        if isinstance(outcome, Err):
            applied = self.fail(token, outcome.error.message)
        else:
            applied = self.resolve(token, outcome.value.text, source=outcome.value.location)

        if applied:
            return self.snapshot(token)
        return self._superseded_snapshot(token, node_id, outcome)

    def _superseded_snapshot(
        self,
        token: int,
        node_id: str,
        outcome: Result[ResolvedArtifact, ResolutionError],
    ) -> OverlaySnapshot:
        if isinstance(outcome, Err):
            return OverlaySnapshot(
                state=OverlayState.FAILED,
                generation=token,
                title=node_id,
                error=outcome.error.message,
                superseded=True,
            )

        artifact = outcome.value
        layout = self._layout_for(artifact.text)
        return OverlaySnapshot(
            state=OverlayState.DISPLAYING,
            generation=token,
            title=node_id,
            raw_text=artifact.text,
            source=artifact.location,
            elements=to_cytoscape_elements(layout),
            layout=layout.layout_options(),
            fit=True,
            node_count=layout.graph.node_count,
            edge_count=layout.graph.edge_count,
            superseded=True,
        )

    def snapshot(self, generation: Optional[int] = None) -> OverlaySnapshot:
        """
        Current overlay state.

        ``generation`` tags the snapshot with the activation that asked for
        it, so the browser can tell a superseded answer from a current one.
        """
        elements: List[Dict[str, Any]] = []
        layout_options = None
        fitted = False
        if isinstance(self.renderer, CytoscapeRenderer):
            elements = self.renderer.elements
            layout_options = self.renderer.layout_options
            fitted = self.renderer.fitted

        graph = self.layout.graph if self.layout else None
        return OverlaySnapshot(
            state=self.state,
            generation=self._generation if generation is None else generation,
            title=self.title,
            error=self.error,
            raw_text=self.raw_text,
            source=self.source,
            elements=elements,
            layout=layout_options,
            fit=fitted,
            node_count=graph.node_count if graph else 0,
            edge_count=graph.edge_count if graph else 0,
        )
