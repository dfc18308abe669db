"""
Tree Command - Dump syntax trees for one file or a directory.
"""

import sys
from pathlib import Path

import click

from ...config import TREE_SUFFIX
from ...core.errors import DtsvizError
from ...parsing.tree_sitter import load_tree_json, parse_sources, write_tree_artifacts
from ..utils import configure_logging, echo_error, echo_info, echo_success

TREE_JSON_SUFFIX = f"{TREE_SUFFIX}.json"


@click.command()
@click.argument("source", type=click.Path(path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("-l", "--language", default="python", show_default=True, help="tree-sitter grammar")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output")
def tree(source: Path, output_dir: Path, language: str, verbose: bool):
    """
    Write .tree.txt, .tree.json and .tree.dot for SOURCE.

    SOURCE may also be an existing .tree.json dump, which is re-serialized
    without needing a grammar.
    """
    configure_logging(verbose)

    try:
        if source.name.endswith(TREE_JSON_SUFFIX):
            root = load_tree_json(source)
            original = source.with_name(source.name[: -len(TREE_JSON_SUFFIX)])
            written = [write_tree_artifacts(root, original, output_dir)]
        else:
            written = parse_sources(source, output_dir, language)
    except DtsvizError as e:
        echo_error(f"Error: {e}")
        sys.exit(1)

    for artifacts in written:
        echo_info(str(artifacts.dot_path))
    echo_success(f"Tree output for {len(written)} file(s) written to {output_dir}")
