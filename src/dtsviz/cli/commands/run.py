"""
Run Command - The full batch: analyze, convert, parse, optionally serve.
"""

import sys
from pathlib import Path

import click

from ...config import load_settings
from ...core.errors import DtsvizError
from ...pipeline import run_pipeline
from ..utils import configure_logging, echo_error, echo_info, echo_success, echo_warning


@click.command()
@click.argument("language")
@click.argument("source", type=click.Path(path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--web", is_flag=True, help="Serve the viewer when the batch finishes")
@click.option("--port", type=int, default=None, help="Viewer port (default: 3000)")
@click.option("--only-tree-sitter", is_flag=True, help="Skip depends.jar")
@click.option("--only-depends", is_flag=True, help="Skip tree-sitter")
@click.option("--no-browser", is_flag=True, help="Do not open a browser with --web")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Settings file (default: .dtsviz/config.yaml)")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output")
def run(
    language: str,
    source: Path,
    output_dir: Path,
    web: bool,
    port: int | None,
    only_tree_sitter: bool,
    only_depends: bool,
    no_browser: bool,
    config_path: Path | None,
    verbose: bool,
):
    """
    Analyze SOURCE and write graph artifacts to OUTPUT_DIR.

    \b
    Example:
      dtsviz run python ./src ./out --web
    """
    configure_logging(verbose)

    if only_tree_sitter and only_depends:
        raise click.UsageError("--only-tree-sitter and --only-depends are mutually exclusive")

    settings = load_settings(config_path)

    try:
        result = run_pipeline(
            language,
            source,
            output_dir,
            settings,
            only_tree_sitter=only_tree_sitter,
            only_depends=only_depends,
        )
    except DtsvizError as e:
        echo_error(f"Error: {e}")
        sys.exit(1)

    if result.conversion:
        echo_success(f"DOT ids converted → {result.conversion.converted_dot}")
        if result.conversion.converted_json:
            echo_info(f"JSON converted → {result.conversion.converted_json}")
        elif result.conversion.side_file_error:
            echo_warning(f"JSON side file skipped: {result.conversion.side_file_error.message}")

    if not only_depends:
        echo_success(f"Tree-sitter output for {len(result.trees)} file(s) written to {output_dir}")

    if not web:
        return

    if result.converted_dot is None:
        echo_error("No DOT file found to visualize.")
        sys.exit(1)

    from ...server.app import serve

    serve(
        result.converted_dot.parent,
        default_dot=result.converted_dot.name,
        port=port or settings.port,
        open_browser=settings.open_browser and not no_browser,
        settings=settings,
    )
