"""
Serve Command - Start the interactive viewer for an existing artifact.
"""

import sys
from pathlib import Path

import click

from ...config import load_settings
from ..utils import configure_logging, echo_error, echo_info


@click.command()
@click.argument("dot_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--port", type=int, default=None, help="Port (default: 3000)")
@click.option("--no-browser", is_flag=True, help="Do not open a browser")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Settings file (default: .dtsviz/config.yaml)")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output")
def serve(dot_file: Path, port: int | None, no_browser: bool, config_path: Path | None, verbose: bool):
    """
    Serve DOT_FILE and its directory in the viewer.

    Tree artifacts in the same directory are loaded when a node is clicked.
    """
    configure_logging(verbose)

    if not dot_file.is_file():
        echo_error(f"Graph file not found: {dot_file}")
        sys.exit(1)

    settings = load_settings(config_path)
    port = port or settings.port
    echo_info(f"Visualizer available at http://localhost:{port}/?dot={dot_file.name}")

    from ...server.app import serve as serve_app

    serve_app(
        dot_file.parent,
        default_dot=dot_file.name,
        port=port,
        open_browser=settings.open_browser and not no_browser,
        settings=settings,
    )
