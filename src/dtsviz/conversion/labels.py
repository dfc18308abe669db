"""
Label resolution for depends DOT output.

depends.jar writes numeric node ids on edge lines and records which file
each id stands for in comment lines:

    // 7:/home/me/project/main.py
    7 -> 9;

This module turns those comments into an id -> label map.
"""

import re
from types import MappingProxyType
from typing import Dict, Mapping

ID_COMMENT_PATTERN = re.compile(r"//\s*(\d+):(.*)")
_PATH_SEPARATORS = re.compile(r"[\\/]")


def basename(path: str) -> str:
    """
    Final segment of a path, accepting both POSIX and Windows separators.

    Trailing separators are ignored, matching ``path.basename`` semantics.
    """
    trimmed = path.strip().rstrip("/\\")
    if not trimmed:
        return path.strip()
    return _PATH_SEPARATORS.split(trimmed)[-1]


def resolve_labels(text: str) -> Mapping[str, str]:
    """
    Build an immutable id -> label map from the id comments in ``text``.

    Later comments for the same id overwrite earlier ones. Text with no id
    comments yields an empty map.
    """
    id_to_label: Dict[str, str] = {}
    for match in ID_COMMENT_PATTERN.finditer(text):
        node_id, full_path = match.groups()
        id_to_label[node_id] = basename(full_path)
    return MappingProxyType(id_to_label)


def label_for(id_to_label: Mapping[str, str], node_id: str) -> str:
    """Look up a label, falling back to the raw id when unresolved."""
    return id_to_label.get(node_id) or node_id
