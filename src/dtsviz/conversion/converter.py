"""
Conversion step: raw depends artifacts -> canonical artifacts on disk.

Given ``<dir>/<base>.dot`` this writes ``<dir>/<base>.converted.dot`` and,
when ``<dir>/<base>.json`` loads cleanly, ``<dir>/<base>.converted.json``.
Re-running overwrites both outputs.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import CONVERTED_MARKER
from ..core.errors import ArtifactNotFoundError
from ..core.result import Err
from .cells import SideFileError, convert_cell_records, load_cell_records
from .labels import resolve_labels
from .rewriter import normalize_newlines, rewrite_edges

logger = logging.getLogger(__name__)


@dataclass
class ConversionReport:
    """Outcome of converting one depends DOT file."""

    source: Path
    converted_dot: Path
    converted_json: Optional[Path] = None
    labels_resolved: int = 0
    side_file_error: Optional[SideFileError] = None


def converted_path(path: Path, suffix: str) -> Path:
    """``out/x.dot`` -> ``out/x.converted<suffix>``."""
    return path.with_name(f"{path.stem}{CONVERTED_MARKER}{suffix}")


def convert_dot_ids(dot_path: Path) -> ConversionReport:
    """
    Convert a depends DOT file and its JSON side file.

    Raises:
        ArtifactNotFoundError: The DOT file itself is missing or unreadable.
    """
    dot_path = Path(dot_path)
    try:
        raw = dot_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ArtifactNotFoundError(dot_path, str(e)) from e

    text = normalize_newlines(raw)
    id_to_label = resolve_labels(text)
    logger.debug(f"Resolved {len(id_to_label)} labels from {dot_path}")

    converted_dot = converted_path(dot_path, ".dot")
    converted_dot.write_text(rewrite_edges(text, id_to_label), encoding="utf-8")
    logger.info(f"DOT ids converted -> {converted_dot}")

    report = ConversionReport(
        source=dot_path,
        converted_dot=converted_dot,
        labels_resolved=len(id_to_label),
    )

    json_path = dot_path.with_suffix(".json")
    loaded = load_cell_records(json_path)
    if isinstance(loaded, Err):
        logger.warning(f"Skipping side file {json_path}: {loaded.error.message}")
        report.side_file_error = loaded.error
        return report

    converted_json = converted_path(dot_path, ".json")
    converted_json.write_text(
        json.dumps(convert_cell_records(loaded.value), indent=2),
        encoding="utf-8",
    )
    logger.info(f"JSON converted -> {converted_json}")
    report.converted_json = converted_json
    return report
