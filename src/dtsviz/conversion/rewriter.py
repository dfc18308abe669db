"""
Rewrites numeric depends edges into the canonical quoted-label form.

This is a line-oriented text transform; it never builds a graph model.
"""

import re
from typing import Mapping, Optional

from ..parsing.serializer import escape_label
from .labels import label_for, resolve_labels

NUMERIC_EDGE_PATTERN = re.compile(r"^([ \t]*)(\d+)[ \t]+->[ \t]+(\d+);", re.MULTILINE)
COMMENT_LINE_PATTERN = re.compile(r"^\s*//")


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")


def rewrite_edges(text: str, id_to_label: Optional[Mapping[str, str]] = None) -> str:
    """
    Produce canonical graph text from raw depends output.

    Numeric edges become ``"<label>" -> "<label>";`` with their leading
    whitespace kept and quotes in labels escaped. Comment lines and blank
    lines are dropped.

    Args:
        text: Raw DOT text as written by depends.jar.
        id_to_label: Resolved labels. Resolved from ``text`` when omitted.

    Returns:
        The rewritten text, newline-terminated unless it is empty.
    """
    text = normalize_newlines(text)
    if id_to_label is None:
        id_to_label = resolve_labels(text)

    def _substitute(match: re.Match) -> str:
        indent, source, target = match.groups()
        source_label = escape_label(label_for(id_to_label, source))
        target_label = escape_label(label_for(id_to_label, target))
        return f'{indent}"{source_label}" -> "{target_label}";'

    rewritten = NUMERIC_EDGE_PATTERN.sub(_substitute, text)

    kept = [
        line for line in rewritten.split("\n")
        if line.strip() and not COMMENT_LINE_PATTERN.match(line)
    ]
    if not kept:
        return ""
    return "\n".join(kept) + "\n"
