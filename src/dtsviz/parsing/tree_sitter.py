"""
Tree-sitter collaborator.

Parses source files with a tree-sitter grammar and writes three dumps per
file into the output directory:

- ``<file>.tree.txt``  S-expression
- ``<file>.tree.json`` nested JSON with positions
- ``<file>.tree.dot``  labeled-node DOT, fetched by the viewer overlay
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Set

from ..config import TREE_SUFFIX, extensions_for
from ..core.errors import ArtifactNotFoundError, UpstreamToolError
from .base import SimpleTreeNode, SyntaxTreeNode
from .serializer import tree_to_dict, tree_to_dot, tree_to_sexp

logger = logging.getLogger(__name__)

# Type alias for Tree-sitter tree, using Any as strict typing requires the library
Tree = Any

try:
    from tree_sitter_languages import get_parser
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False
    logger.debug("tree-sitter not available, syntax tree dumps disabled")


@dataclass
class TreeArtifacts:
    """Paths written for one source file."""

    source: Path
    text_path: Path
    json_path: Path
    dot_path: Path


class TreeSitterParser:
    """Lazily initialised tree-sitter parser for one language."""

    def __init__(self, language: str = "python"):
        self.language = language
        self._ts_parser = None
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _init_tree_sitter(self) -> None:
        if self._ts_parser is not None:
            return
        if not TREE_SITTER_AVAILABLE:
            raise UpstreamToolError(
                "tree-sitter",
                "tree_sitter_languages is not installed (pip install 'dtsviz[treesitter]')",
            )
        try:
            self._ts_parser = get_parser(self.language)
        except Exception as e:
            raise UpstreamToolError("tree-sitter", f"no grammar for {self.language!r}: {e}") from e

    def parse(self, content: bytes) -> Tree:
        self._init_tree_sitter()
        tree = self._ts_parser.parse(content)
        if tree is None:
            raise UpstreamToolError("tree-sitter", "parser returned no tree")
        return tree

    def parse_file(self, file_path: Path) -> SyntaxTreeNode:
        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise ArtifactNotFoundError(file_path, str(e)) from e
        return self.parse(content).root_node


def tree_artifact_stem(source: Path, output_dir: Path) -> Path:
    """``src/main.py`` -> ``<output_dir>/main.py.tree``."""
    return output_dir / f"{source.name}{TREE_SUFFIX}"


def tree_sexp(root: SyntaxTreeNode) -> str:
    """
    S-expression for the ``.tree.txt`` dump.

    tree-sitter nodes render themselves (``Node.sexp()``, or ``str(node)``
    on releases that dropped it); reloaded dumps are rendered by hand.
    """
    if isinstance(root, SimpleTreeNode):
        return tree_to_sexp(root)
    sexp = getattr(root, "sexp", None)
    if callable(sexp):
        return sexp()
    return str(root)


def write_tree_artifacts(root: SyntaxTreeNode, source: Path, output_dir: Path) -> TreeArtifacts:
    """Write the text, JSON and DOT dumps of ``root`` next to each other."""
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = tree_artifact_stem(source, output_dir)

    artifacts = TreeArtifacts(
        source=source,
        text_path=stem.with_name(stem.name + ".txt"),
        json_path=stem.with_name(stem.name + ".json"),
        dot_path=stem.with_name(stem.name + ".dot"),
    )
    artifacts.text_path.write_text(tree_sexp(root), encoding="utf-8")
    artifacts.json_path.write_text(json.dumps(tree_to_dict(root), indent=2), encoding="utf-8")
    artifacts.dot_path.write_text(tree_to_dot(root), encoding="utf-8")
    return artifacts


def load_tree_json(json_path: Path) -> SimpleTreeNode:
    """Reload a ``.tree.json`` dump as a borrowed tree."""
    try:
        data = json.loads(json_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ArtifactNotFoundError(json_path, f"unreadable tree dump: {e}") from e
    return SimpleTreeNode.from_dict(data)


def discover_sources(src: Path, language: str) -> List[Path]:
    """
    Source files to parse: ``src`` itself, or the matching files directly
    inside it (not recursive), sorted by name.
    """
    if src.is_file():
        return [src]
    if not src.is_dir():
        raise ArtifactNotFoundError(src, "source path does not exist")

    extensions: Set[str] = extensions_for(language)
    return sorted(
        path for path in src.iterdir()
        if path.is_file() and path.suffix.lower() in extensions
    )


def parse_sources(src: Path, output_dir: Path, language: str = "python") -> List[TreeArtifacts]:
    """Parse every discovered source file and write its tree dumps."""
    parser = TreeSitterParser(language)
    written = []
    for source in discover_sources(src, language):
        root = parser.parse_file(source)
        written.append(write_tree_artifacts(root, source, output_dir))
        logger.info(f"Tree-sitter output for {source} written to {output_dir}")
    return written
