"""
Viewer page.

A single HTML document that renders the dependency graph with Cytoscape
and, on node tap, asks the server for that node's syntax tree overlay
(laid out with cytoscape-dagre). The same template serves two purposes:

- Served by ``dtsviz serve``: the page reads ``?dot=`` and fetches
  ``/api/graph`` and ``/api/overlay``.
- Exported by ``dtsviz export``: the main graph's elements are embedded,
  so the page works from ``file://`` (overlays need the server).
"""

import json
import webbrowser
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import DEFAULT_GRAPH_ARTIFACT
from .layout import LayoutModel, to_cytoscape_elements

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>dtsviz</title>
    <script src="https://unpkg.com/cytoscape@3.30.2/dist/cytoscape.min.js"></script>
    <script src="https://unpkg.com/dagre@0.8.5/dist/dagre.min.js"></script>
    <script src="https://unpkg.com/cytoscape-dagre@2.5.0/cytoscape-dagre.js"></script>
    <style>
        :root {
            --bg-base: #f3f4f6;
            --bg-header: #111827;
            --text-header: #f9fafb;
            --color-danger: #dc2626;
            --text-muted: #4b5563;
        }
        html, body { margin: 0; width: 100%; height: 100%; font-family: ui-sans-serif, system-ui, sans-serif; }
        body { background: var(--bg-base); }
        #cy { width: 100vw; height: 100vh; }
        #error { padding: 16px; color: var(--color-danger); font-family: ui-monospace, monospace; }

        /* Overlay */
        #overlay { position: fixed; inset: 0; background: rgba(0, 0, 0, 0.8); z-index: 50;
                   display: none; flex-direction: column; }
        #overlay.open { display: flex; }
        #overlay-header { display: flex; align-items: center; justify-content: space-between;
                          background: var(--bg-header); color: var(--text-header); padding: 16px; }
        #overlay-title { margin: 0; font-size: 18px; font-weight: 700; }
        #overlay-close { background: none; border: none; color: var(--text-header); font-size: 20px; cursor: pointer; }
        #overlay-close:hover { color: #f87171; }
        #overlay-body { flex: 1; background: #fff; overflow: auto; padding: 16px; display: flex; flex-direction: column; }
        #overlay-graph { flex: 1; min-height: 400px; }
        #overlay-error { color: var(--color-danger); margin-bottom: 8px; }
        #overlay-error .hint { margin-top: 8px; font-size: 13px; color: var(--text-muted); }
        pre.raw { white-space: pre-wrap; font-size: 13px; padding: 8px; background: #f8fafc; border-radius: 4px; }
    </style>
</head>
<body>
    <div id="cy"></div>

    <div id="overlay">
        <div id="overlay-header">
            <h2 id="overlay-title">AST</h2>
            <button id="overlay-close" title="Close">&#x2715;</button>
        </div>
        <div id="overlay-body">
            <div id="overlay-status">Loading&hellip;</div>
            <div id="overlay-error" hidden></div>
            <div id="overlay-graph"></div>
            <details id="overlay-raw" hidden>
                <summary>Show raw DOT</summary>
                <pre class="raw"></pre>
            </details>
        </div>
    </div>

    <script>
        const CONFIG = __VIEWER_CONFIG__;

        if (window.cytoscapeDagre) { cytoscape.use(cytoscapeDagre); }

        const MAIN_STYLE = [
            { selector: "node[name]", style: { content: "data(name)", "text-wrap": "wrap" } },
            { selector: "edge", style: { "curve-style": "bezier", "target-arrow-shape": "triangle" } },
        ];

        const TREE_STYLE = [
            {
                selector: "node[name]",
                style: {
                    content: "data(name)", "text-wrap": "wrap",
                    "text-valign": "center", "text-halign": "center",
                    shape: "roundrectangle", width: "label", height: "label", padding: "10px",
                    "background-color": "#f0f0f0", "border-width": 1, "border-color": "#999",
                    "font-size": 12,
                },
            },
            { selector: "edge", style: { "curve-style": "bezier", "target-arrow-shape": "triangle" } },
        ];

        // ============================================================
        // MAIN GRAPH
        // ============================================================
        async function loadMainGraph() {
            if (CONFIG.elements) {
                return { elements: CONFIG.elements, layout: CONFIG.layout || { name: "preset" } };
            }
            const params = new URLSearchParams(window.location.search);
            const dot = params.get("dot") || CONFIG.defaultDot;
            const res = await fetch(`${CONFIG.graphEndpoint}?dot=${encodeURIComponent(dot)}`);
            if (!res.ok) {
                const body = await res.json().catch(() => ({}));
                throw new Error(body.detail || `Failed to load DOT file: ${res.status} ${res.statusText}`);
            }
            return res.json();
        }

        async function init() {
            try {
                const graph = await loadMainGraph();
                const cy = cytoscape({
                    container: document.getElementById("cy"),
                    layout: graph.layout,
                    style: MAIN_STYLE,
                    elements: graph.elements,
                });
                cy.on("tap", "node", (evt) => openOverlay(evt.target.data("id")));
            } catch (err) {
                const box = document.getElementById("cy");
                box.id = "error";
                box.textContent = err.message || String(err);
            }
        }

        // ============================================================
        // OVERLAY
        // ============================================================
        const overlay = document.getElementById("overlay");
        let overlayCy = null;
        let generation = 0;

        function resetOverlay() {
            if (overlayCy) { overlayCy.destroy(); overlayCy = null; }
            document.getElementById("overlay-status").hidden = false;
            document.getElementById("overlay-error").hidden = true;
            document.getElementById("overlay-raw").hidden = true;
        }

        function closeOverlay() {
            generation += 1;  // retire any in-flight request
            if (!CONFIG.elements) {
                fetch(CONFIG.overlayEndpoint, { method: "DELETE" }).catch(() => {});
            }
            resetOverlay();
            overlay.classList.remove("open");
        }

        async function openOverlay(nodeId) {
            const mine = ++generation;
            resetOverlay();
            document.getElementById("overlay-title").textContent = nodeId || "AST";
            overlay.classList.add("open");

            let snapshot;
            try {
                const res = await fetch(`${CONFIG.overlayEndpoint}?node=${encodeURIComponent(nodeId)}`);
                if (!res.ok) throw new Error(`Overlay request failed: ${res.status} ${res.statusText}`);
                snapshot = await res.json();
            } catch (err) {
                snapshot = { state: "failed", title: nodeId, error: err.message || String(err) };
            }
            // superseded by a newer activation, or an answer for another node
            if (mine !== generation || snapshot.title !== nodeId) return;
            showSnapshot(snapshot);
        }

        function showSnapshot(snapshot) {
            document.getElementById("overlay-status").hidden = true;

            if (snapshot.state === "failed") {
                const box = document.getElementById("overlay-error");
                box.hidden = false;
                box.innerHTML = "<strong>Error fetching DOT:</strong> ";
                box.appendChild(document.createTextNode(snapshot.error || "unknown error"));
                const hint = document.createElement("div");
                hint.className = "hint";
                hint.textContent = "Put the file under the artifact directory or make sure the server exposes the /dot/ path.";
                box.appendChild(hint);
                return;
            }
            if (snapshot.state !== "displaying") return;

            overlayCy = cytoscape({
                container: document.getElementById("overlay-graph"),
                style: TREE_STYLE,
                elements: snapshot.elements,
                layout: snapshot.layout,
            });
            if (snapshot.fit) { overlayCy.ready(() => overlayCy.fit()); }

            const raw = document.getElementById("overlay-raw");
            raw.hidden = false;
            raw.querySelector("pre").textContent = snapshot.raw_text || "";
        }

        // Clicks inside the header or body never reach the backdrop handler
        overlay.addEventListener("click", closeOverlay);
        document.getElementById("overlay-header").addEventListener("click", (e) => e.stopPropagation());
        document.getElementById("overlay-body").addEventListener("click", (e) => e.stopPropagation());
        document.getElementById("overlay-close").addEventListener("click", (e) => {
            e.stopPropagation();
            closeOverlay();
        });

        init();
    </script>
</body>
</html>
"""


def viewer_config(
    default_dot: str = DEFAULT_GRAPH_ARTIFACT,
    layout: Optional[LayoutModel] = None,
    graph_endpoint: str = "/api/graph",
    overlay_endpoint: str = "/api/overlay",
) -> Dict[str, Any]:
    config: Dict[str, Any] = {
        "defaultDot": default_dot,
        "graphEndpoint": graph_endpoint,
        "overlayEndpoint": overlay_endpoint,
        "elements": None,
        "layout": None,
    }
    if layout is not None:
        config["elements"] = to_cytoscape_elements(layout)
        config["layout"] = layout.layout_options()
    return config


def generate_html(config: Dict[str, Any]) -> str:
    """
    Generate the HTML content for the viewer.
    """
    # "</" would end the inline script early
    payload = json.dumps(config).replace("</", "<\\/")
    return HTML_TEMPLATE.replace("__VIEWER_CONFIG__", payload)


def export_html(layout: LayoutModel, output_path: Path, default_dot: str = DEFAULT_GRAPH_ARTIFACT) -> Path:
    """Write a standalone viewer with the laid-out graph embedded."""
    out_file = Path(output_path)
    out_file.write_text(generate_html(viewer_config(default_dot, layout)), encoding="utf-8")
    return out_file


def open_in_browser(url: str) -> None:
    webbrowser.open(url)
