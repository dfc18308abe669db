"""
Unit tests for the viewer page.
"""

import json
from unittest.mock import patch

from dtsviz.core.graph import GraphModel
from dtsviz.graph.layout import GraphLayoutBuilder
from dtsviz.graph.visualize import export_html, generate_html, open_in_browser, viewer_config


def embedded_config(html: str) -> dict:
    line = next(l for l in html.splitlines() if "const CONFIG =" in l)
    return json.loads(line.split("=", 1)[1].strip().rstrip(";"))


class TestViewerPage:
    def test_server_mode_config(self):
        html = generate_html(viewer_config("deps.converted.dot"))

        assert "<!DOCTYPE html>" in html
        assert "cytoscape-dagre" in html
        config = embedded_config(html)
        assert config["defaultDot"] == "deps.converted.dot"
        assert config["overlayEndpoint"] == "/api/overlay"
        assert config["elements"] is None

    def test_overlay_answers_for_other_nodes_are_dropped(self):
        html = generate_html(viewer_config())
        assert "snapshot.title !== nodeId" in html

    def test_embedded_elements(self):
        model = GraphModel()
        model.add_edge("main.py", "util.py")
        layout = GraphLayoutBuilder().radial(model)

        config = embedded_config(generate_html(viewer_config(layout=layout)))

        assert [e["data"]["id"] for e in config["elements"]] == ["main.py", "util.py", "e0"]
        assert config["layout"] == {"name": "preset"}

    def test_script_terminator_is_escaped(self):
        model = GraphModel()
        model.add_node("</script>")
        html = generate_html(viewer_config(layout=GraphLayoutBuilder().radial(model)))

        config_line = next(l for l in html.splitlines() if "const CONFIG =" in l)
        assert "</script>" not in config_line
        assert embedded_config(html)["elements"][0]["data"]["id"] == "</script>"

    def test_export_html(self, tmp_path):
        model = GraphModel()
        model.add_node("a")
        out = export_html(GraphLayoutBuilder().radial(model), tmp_path / "graph.html")

        assert out.exists()
        assert embedded_config(out.read_text())["elements"][0]["data"]["name"] == "a"

    @patch("dtsviz.graph.visualize.webbrowser.open")
    def test_open_in_browser(self, mock_open):
        open_in_browser("http://localhost:3000/")
        mock_open.assert_called_once_with("http://localhost:3000/")
