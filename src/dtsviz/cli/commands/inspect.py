"""
Inspect Command - Summarize a graph file in either supported dialect.
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...parsing.dialects import GraphTextParser
from ..utils import echo_error

console = Console()


@click.command()
@click.argument("dot_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def inspect(dot_file: Path, as_json: bool):
    """
    Parse DOT_FILE and print its dialect and structure.
    """
    try:
        text = dot_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        echo_error(f"Graph file not found: {dot_file} ({e})")
        sys.exit(1)

    dialect, graph = GraphTextParser().parse_with_dialect(text)
    stats = graph.get_stats()

    if as_json:
        click.echo(json.dumps({"dialect": dialect.value, **stats, **graph.to_dict()}))
        return

    table = Table(title=str(dot_file), show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Dialect", dialect.value)
    table.add_row("Nodes", str(stats["total_nodes"]))
    table.add_row("Edges", str(stats["total_edges"]))
    table.add_row("Roots", ", ".join(stats["roots"][:10]) or "-")
    table.add_row("Orphans", ", ".join(stats["orphans"][:10]) or "-")
    table.add_row("Acyclic", "yes" if stats["is_dag"] else "no")
    table.add_row("Depth", str(stats["depth"]))
    console.print(table)

    if graph.is_empty():
        console.print("[yellow]No nodes or edges recognised.[/yellow]")
