"""
Convert Command - Rewrite a raw depends DOT file into canonical form.
"""

import sys
from pathlib import Path

import click

from ...conversion.converter import convert_dot_ids
from ...core.errors import DtsvizError
from ..utils import configure_logging, echo_error, echo_info, echo_success, echo_warning


@click.command()
@click.argument("dot_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output")
def convert(dot_file: Path, verbose: bool):
    """
    Replace numeric ids in DOT_FILE with file names.

    Writes <name>.converted.dot, and <name>.converted.json when a matching
    <name>.json side file exists.
    """
    configure_logging(verbose)

    try:
        report = convert_dot_ids(dot_file)
    except DtsvizError as e:
        echo_error(f"Failed to convert DOT file: {e}")
        sys.exit(1)

    echo_success(f"DOT ids converted → {report.converted_dot}")
    echo_info(f"{report.labels_resolved} labels resolved")
    if report.converted_json:
        echo_success(f"JSON converted → {report.converted_json}")
    elif report.side_file_error:
        echo_warning(f"JSON file not found or failed to convert: {report.side_file_error.message}")
