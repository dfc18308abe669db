"""
Export Command - Write a standalone HTML viewer for a graph file.
"""

import sys
from pathlib import Path

import click

from ...config import load_settings
from ...graph.layout import GraphLayoutBuilder
from ...graph.visualize import export_html
from ...parsing.dialects import parse_graph_text
from ..utils import echo_error, echo_info, echo_success


@click.command()
@click.argument("dot_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-o", "--output", default="graph.html", type=click.Path(path_type=Path),
              help="Output HTML file")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Settings file (default: .dtsviz/config.yaml)")
def export(dot_file: Path, output: Path, config_path: Path | None):
    """
    Lay out DOT_FILE radially and embed it in a self-contained page.
    """
    try:
        text = dot_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        echo_error(f"Graph file not found: {dot_file} ({e})")
        sys.exit(1)

    settings = load_settings(config_path)
    layout = GraphLayoutBuilder(settings.radial, settings.hierarchy).radial(parse_graph_text(text))
    out_file = export_html(layout, output, default_dot=dot_file.name)

    echo_success(f"Generated: {out_file}")
    echo_info(f"Open: {out_file.resolve().as_uri()}")
