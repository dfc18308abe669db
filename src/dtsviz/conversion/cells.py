"""
Cell record conversion for the depends JSON side file.

The side file indexes ``variables`` positionally from each cell, so only the
variable paths are rewritten (to basenames). Cells are copied verbatim;
basename substitution keeps the array order, so every index stays valid.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from ..core.result import Err, Ok, Result
from .labels import basename

logger = logging.getLogger(__name__)


@dataclass
class SideFileError:
    """Non-fatal failure to load or interpret a side file."""

    path: Path
    message: str


def load_cell_records(json_path: Path) -> Result[Dict[str, Any], SideFileError]:
    """
    Read a depends JSON side file.

    Returns Err for a missing file, invalid JSON, or a payload without a
    ``variables`` list; the caller decides whether to skip.
    """
    try:
        raw = json_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(SideFileError(json_path, "side file not found"))
    except OSError as e:
        return Err(SideFileError(json_path, f"unreadable side file: {e}"))

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        return Err(SideFileError(json_path, f"invalid JSON: {e}"))

    if not isinstance(parsed, dict):
        return Err(SideFileError(json_path, "expected a JSON object"))
    if not isinstance(parsed.get("variables"), list):
        return Err(SideFileError(json_path, "missing 'variables' list"))
    if not isinstance(parsed.get("cells", []), list):
        return Err(SideFileError(json_path, "'cells' must be a list"))
    if any(not isinstance(cell, dict) for cell in parsed.get("cells", [])):
        return Err(SideFileError(json_path, "every cell must be an object"))

    return Ok(parsed)


def _index_in_range(value: Any, size: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < size


def convert_cell_records(records: Dict[str, Any]) -> Dict[str, Any]:
    """
    Basename every variable path and copy cells unchanged.

    Any other top-level keys pass through untouched. Cells whose ``src`` or
    ``dest`` index falls outside ``variables`` are kept but logged.
    """
    variables: List[str] = [basename(str(v)) for v in records.get("variables", [])]
    cells = [dict(cell) for cell in records.get("cells", [])]

    for position, cell in enumerate(cells):
        for key in ("src", "dest"):
            if not _index_in_range(cell.get(key), len(variables)):
                logger.warning(
                    f"Cell {position} has out-of-range {key} index {cell.get(key)!r} "
                    f"({len(variables)} variables)"
                )

    return {**records, "variables": variables, "cells": cells}
