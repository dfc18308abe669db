"""
Unit tests for the tree-sitter collaborator and tree dump files.
"""

import json

import pytest

import dtsviz.parsing.tree_sitter as ts_module
from dtsviz.core.errors import ArtifactNotFoundError, UpstreamToolError
from dtsviz.parsing.base import SimpleTreeNode
from dtsviz.parsing.tree_sitter import (
    TreeSitterParser,
    discover_sources,
    load_tree_json,
    tree_sexp,
    write_tree_artifacts,
)


@pytest.fixture
def tree():
    return SimpleTreeNode("module", [SimpleTreeNode("expression_statement", [SimpleTreeNode("integer")])])


class TestTreeArtifacts:
    def test_writes_three_dumps(self, tmp_path, tree):
        artifacts = write_tree_artifacts(tree, tmp_path / "src" / "main.py", tmp_path / "out")

        assert artifacts.dot_path == tmp_path / "out" / "main.py.tree.dot"
        assert artifacts.text_path.read_text() == "(module (expression_statement (integer)))"
        assert json.loads(artifacts.json_path.read_text())["type"] == "module"
        assert artifacts.dot_path.read_text().startswith("digraph AST {\n")

    def test_reload_json_dump(self, tmp_path, tree):
        artifacts = write_tree_artifacts(tree, tmp_path / "main.py", tmp_path)
        reloaded = load_tree_json(artifacts.json_path)

        assert reloaded.type == "module"
        assert reloaded.children[0].children[0].type == "integer"

    def test_reload_unreadable_json(self, tmp_path):
        path = tmp_path / "broken.tree.json"
        path.write_text("{")
        with pytest.raises(ArtifactNotFoundError):
            load_tree_json(path)

    def test_text_dump_uses_library_sexp(self, tmp_path):
        class LibraryNode:
            type = "module"
            children = []

            def sexp(self):
                return "(module (comment))"

        artifacts = write_tree_artifacts(LibraryNode(), tmp_path / "main.py", tmp_path)
        assert artifacts.text_path.read_text() == "(module (comment))"

    def test_text_dump_falls_back_to_str(self):
        class LibraryNode:
            type = "module"
            children = []

            def __str__(self):
                return "(module)"

        assert tree_sexp(LibraryNode()) == "(module)"


class TestDiscoverSources:
    def test_single_file(self, tmp_path):
        source = tmp_path / "a.txt"
        source.write_text("")
        assert discover_sources(source, "python") == [source]

    def test_directory_is_sorted_and_not_recursive(self, tmp_path):
        for name in ("b.py", "a.py", "notes.md"):
            (tmp_path / name).write_text("")
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "c.py").write_text("")

        assert [p.name for p in discover_sources(tmp_path, "python")] == ["a.py", "b.py"]

    def test_missing_path(self, tmp_path):
        with pytest.raises(ArtifactNotFoundError):
            discover_sources(tmp_path / "missing", "python")


class TestTreeSitterParser:
    def test_unavailable_runtime_raises(self, monkeypatch):
        monkeypatch.setattr(ts_module, "TREE_SITTER_AVAILABLE", False)
        with pytest.raises(UpstreamToolError, match="tree-sitter"):
            TreeSitterParser("python").parse(b"x = 1")

    def test_parses_python(self, tmp_path):
        languages = pytest.importorskip("tree_sitter_languages")
        try:
            languages.get_parser("python")
        except Exception as e:
            pytest.skip(f"grammar unavailable: {e}")

        source = tmp_path / "main.py"
        source.write_text("x = 1\n")
        root = TreeSitterParser("python").parse_file(source)

        assert root.type == "module"
