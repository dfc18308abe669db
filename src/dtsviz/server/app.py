"""
dtsviz viewer server.

Endpoints:
- GET  /                 -> viewer page (``?dot=`` picks the initial graph)
- GET  /dot/<path>       -> raw artifacts from the output directory
- GET  /api/graph        -> parsed, radially laid out graph
- GET  /api/overlay      -> activate a node and resolve its syntax tree
- DELETE /api/overlay    -> dismiss the overlay
- GET  /health

Overlay lookups issue real GETs against ``/dot/...`` through an httpx
client bound to this same application, so the candidate search sees
exactly what a browser would.

Usage:
    dtsviz serve out/depends-output-file.converted.dot
"""

import logging
import threading
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from ..config import DEFAULT_GRAPH_ARTIFACT, DOT_ROUTE_PREFIX, VisualizerSettings
from ..core.types import LayoutMode
from ..graph.layout import GraphLayoutBuilder, to_cytoscape_elements
from ..graph.overlay import InteractiveGraphView
from ..graph.resolution import ArtifactResolver, HttpArtifactFetcher
from ..graph.visualize import generate_html, open_in_browser, viewer_config
from ..parsing.dialects import GraphTextParser

logger = logging.getLogger(__name__)

SELF_BASE_URL = "http://dtsviz.local"


def _resolver(app: FastAPI) -> ArtifactResolver:
    """Lazily bind the overlay resolver to an in-process client."""
    if app.state.client is None:
        app.state.client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url=SELF_BASE_URL,
        )
        app.state.resolver = ArtifactResolver(HttpArtifactFetcher(app.state.client))
    return app.state.resolver


def _artifact_path(artifact_dir: Path, name: str) -> Path:
    """Resolve ``name`` inside ``artifact_dir``; refuse anything outside it."""
    candidate = (artifact_dir / name.lstrip("/")).resolve()
    if not candidate.is_relative_to(artifact_dir):
        raise HTTPException(status_code=400, detail=f"Invalid graph path: {name}")
    if not candidate.is_file():
        raise HTTPException(status_code=404, detail=f"Failed to load DOT file: {name} not found")
    return candidate


def create_app(
    artifact_dir: Path,
    default_dot: str = DEFAULT_GRAPH_ARTIFACT,
    settings: Optional[VisualizerSettings] = None,
) -> FastAPI:
    settings = settings or VisualizerSettings()
    artifact_dir = Path(artifact_dir).resolve()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Serving artifacts from {artifact_dir}")
        yield
        if app.state.client is not None:
            await app.state.client.aclose()
            app.state.client = None

    app = FastAPI(
        title="dtsviz",
        description="Dependency and syntax tree graph viewer",
        lifespan=lifespan,
    )

    layout_builder = GraphLayoutBuilder(settings.radial, settings.hierarchy)
    app.state.artifact_dir = artifact_dir
    app.state.default_dot = default_dot
    app.state.parser = GraphTextParser()
    app.state.layout_builder = layout_builder
    app.state.view = InteractiveGraphView(app.state.parser, layout_builder)
    app.state.client = None
    app.state.resolver = None

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return generate_html(viewer_config(default_dot))

    @app.get("/health")
    async def health_check():
        return {"status": "online", "artifact_dir": str(artifact_dir)}

    @app.get("/api/graph")
    async def get_graph(dot: str = Query(default=default_dot)) -> Dict[str, Any]:
        path = _artifact_path(artifact_dir, dot)
        text = path.read_text(encoding="utf-8", errors="replace")

        dialect, graph = app.state.parser.parse_with_dialect(text)
        layout = layout_builder.build(graph, LayoutMode.RADIAL)
        return {
            "dot": dot,
            "dialect": dialect.value,
            "elements": to_cytoscape_elements(layout),
            "layout": layout.layout_options(),
            "stats": graph.get_stats(),
        }

    @app.get("/api/overlay")
    async def get_overlay(request: Request, node: str = Query(..., min_length=1)):
        view: InteractiveGraphView = request.app.state.view
        snapshot = await view.load(node, _resolver(request.app))
        return snapshot.model_dump(mode="json")

    @app.delete("/api/overlay")
    async def dismiss_overlay(request: Request):
        view: InteractiveGraphView = request.app.state.view
        view.dismiss()
        return view.snapshot().model_dump(mode="json")

    app.mount(DOT_ROUTE_PREFIX, StaticFiles(directory=artifact_dir), name="dot")
    return app


def serve(
    artifact_dir: Path,
    default_dot: str = DEFAULT_GRAPH_ARTIFACT,
    port: int = 3000,
    open_browser: bool = True,
    settings: Optional[VisualizerSettings] = None,
) -> None:
    """Run the viewer until interrupted."""
    import uvicorn

    app = create_app(artifact_dir, default_dot, settings)
    url = f"http://localhost:{port}/?dot={default_dot}"
    logger.info(f"Visualizer available at {url}")

    if open_browser:
        threading.Timer(1.0, open_in_browser, args=(url,)).start()

    uvicorn.run(app, host="127.0.0.1", port=port, log_level="warning")
