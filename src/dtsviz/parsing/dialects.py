"""
Graph text parser.

Recovers a GraphModel from either textual dialect the pipeline produces:

- Quoted edges (converted depends output)::

      "main.py" -> "logger.py";

- Labeled nodes (tree serializer output)::

      n0 [label="module"];
      n0 -> n1;

Parsing is best effort and never raises; text with no recognisable
content yields an empty model.
"""

import re
from typing import Dict, Iterator, Tuple

from ..core.graph import GraphModel
from ..core.types import Dialect

_QUOTED = r'"((?:[^"\\]|\\.)*)"'
_QUOTED_LABEL = r'"((?:[^"\\\n]|\\.)+)"'

# Confined to a single line: tree labels such as "->" must not pair up across lines
QUOTED_EDGE_PATTERN = re.compile(_QUOTED_LABEL + r"[ \t]*->[ \t]*" + _QUOTED_LABEL)
NODE_DECL_PATTERN = re.compile(r"([A-Za-z0-9_]+)\s*\[label\s*=\s*" + _QUOTED + r"\]\s*;?")
ID_EDGE_PATTERN = re.compile(r"([A-Za-z0-9_]+)\s*->\s*([A-Za-z0-9_]+)\s*;?")
QUOTED_STRING_PATTERN = re.compile(_QUOTED)
_ESCAPE_PATTERN = re.compile(r"\\(.)")


def unescape_label(text: str) -> str:
    """Undo backslash escaping of a DOT quoted string."""
    return _ESCAPE_PATTERN.sub(r"\1", text)


def classify_dialect(text: str) -> Dialect:
    """
    Pick the extraction strategy for ``text``.

    A single quoted edge anywhere selects the quoted dialect, even when
    labeled-node syntax is also present.
    """
    if QUOTED_EDGE_PATTERN.search(text):
        return Dialect.QUOTED
    return Dialect.LABELED_NODE


def _iter_quoted_edges(text: str) -> Iterator[Tuple[str, str]]:
    for line in text.split("\n"):
        for match in QUOTED_EDGE_PATTERN.finditer(line):
            yield unescape_label(match.group(1)), unescape_label(match.group(2))


def parse_quoted(text: str) -> GraphModel:
    """Every quoted edge on every line; labels double as node ids."""
    model = GraphModel()
    for source, target in _iter_quoted_edges(text):
        model.add_edge(source, target)
    return model


def parse_labeled_nodes(text: str) -> GraphModel:
    """
    Declarations first (last write wins per id), then edges.

    Edge endpoints without a declaration become nodes labeled with their
    own id, after all declared nodes, in the order edges mention them.
    Quoted strings are blanked before edge matching so that labels
    containing ``->`` cannot produce phantom edges.
    """
    id_to_label: Dict[str, str] = {}
    for match in NODE_DECL_PATTERN.finditer(text):
        id_to_label[match.group(1)] = unescape_label(match.group(2))

    model = GraphModel()
    for node_id, label in id_to_label.items():
        model.add_node(node_id, label)

    unquoted = QUOTED_STRING_PATTERN.sub('""', text)
    for match in ID_EDGE_PATTERN.finditer(unquoted):
        model.add_edge(match.group(1), match.group(2))
    return model


class GraphTextParser:
    """
    Stateless front door over the two dialect strategies.

    ``parse`` classifies once per call, so the same text always produces
    the same node set and edge sequence.
    """

    def parse(self, text: str) -> GraphModel:
        return self.parse_with_dialect(text)[1]

    def parse_with_dialect(self, text: str) -> Tuple[Dialect, GraphModel]:
        text = text.replace("\r\n", "\n")
        dialect = classify_dialect(text)
        if dialect is Dialect.QUOTED:
            return dialect, parse_quoted(text)
        return dialect, parse_labeled_nodes(text)


def parse_graph_text(text: str) -> GraphModel:
    """Parse ``text`` in whichever supported dialect it uses."""
    return GraphTextParser().parse(text)
