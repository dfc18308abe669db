"""
Unit tests for the numeric edge rewriter.
"""

from hypothesis import given
from hypothesis import strategies as st

from dtsviz.conversion.rewriter import COMMENT_LINE_PATTERN, NUMERIC_EDGE_PATTERN, rewrite_edges
from dtsviz.parsing.dialects import parse_graph_text

RAW_DEPENDS = """digraph {
// 0:/home/me/project/main.py
// 1:/home/me/project/util.py

  0 -> 1;
}
"""


class TestRewriteEdges:
    def test_rewrites_ids_to_quoted_labels(self):
        assert rewrite_edges(RAW_DEPENDS) == 'digraph {\n  "main.py" -> "util.py";\n}\n'

    def test_unresolved_ids_keep_their_number(self):
        assert rewrite_edges("3 -> 4;\n") == '"3" -> "4";\n'

    def test_partial_resolution(self):
        text = "// 1:/x/a.py\n1 -> 2;"
        assert rewrite_edges(text) == '"a.py" -> "2";\n'

    def test_explicit_label_map_is_used(self):
        assert rewrite_edges("1 -> 2;", {"1": "a", "2": "b"}) == '"a" -> "b";\n'

    def test_indented_comments_are_removed(self):
        assert rewrite_edges("   // note\n5 -> 6;") == '"5" -> "6";\n'

    def test_only_comments_yields_empty_text(self):
        assert rewrite_edges("// 0:/a.py\n\n// 1:/b.py\n") == ""

    def test_crlf_input(self):
        text = "// 0:/p/a.py\r\n// 1:/p/b.py\r\n0 -> 1;\r\n"
        assert rewrite_edges(text) == '"a.py" -> "b.py";\n'

    def test_edges_never_span_lines(self):
        assert rewrite_edges("1\n-> 2;") == "1\n-> 2;\n"

    def test_quotes_in_basenames_are_escaped(self):
        text = '// 1:/x/a"b.py\n1 -> 2;'
        assert rewrite_edges(text) == '"a\\"b.py" -> "2";\n'

    def test_escaped_labels_parse_back(self):
        graph = parse_graph_text(rewrite_edges('// 1:/x/a"b.py\n// 2:C:\\src\\c.py\n1 -> 2;'))

        assert [n.id for n in graph.nodes] == ['a"b.py', "c.py"]
        assert [(e.source, e.target) for e in graph.edges] == [('a"b.py', "c.py")]


_ids = st.integers(min_value=0, max_value=20)
_paths = st.from_regex(r"/[a-z]{1,5}(/[a-z]{1,5}){0,2}\.py", fullmatch=True)
_lines = st.one_of(
    st.builds(lambda i, p: f"// {i}:{p}", _ids, _paths),
    st.builds(lambda ind, a, b: f"{ind}{a} -> {b};", st.sampled_from(["", "  ", "\t"]), _ids, _ids),
    st.sampled_from(["", "digraph {", "}", "   "]),
)
_documents = st.lists(_lines, max_size=30).map("\n".join)


class TestRewriteProperties:
    @given(_documents)
    def test_idempotent(self, text):
        once = rewrite_edges(text)
        assert rewrite_edges(once) == once

    @given(_documents)
    def test_no_comments_or_numeric_edges_survive(self, text):
        for line in rewrite_edges(text).split("\n"):
            assert not COMMENT_LINE_PATTERN.match(line)
            assert not NUMERIC_EDGE_PATTERN.match(line)
