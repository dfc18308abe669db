"""
Unit tests for the on-disk conversion step.
"""

import json

import pytest

from dtsviz.conversion.converter import convert_dot_ids, converted_path
from dtsviz.core.errors import ArtifactNotFoundError

RAW_DOT = "digraph {\n// 0:/p/main.py\n// 1:/p/util.py\n  0 -> 1;\n}\n"


@pytest.fixture
def depends_output(tmp_path):
    dot = tmp_path / "depends-output-file.dot"
    dot.write_text(RAW_DOT)
    return dot


class TestConvertDotIds:
    def test_converted_path(self, tmp_path):
        assert converted_path(tmp_path / "x.dot", ".json") == tmp_path / "x.converted.json"

    def test_writes_converted_dot_and_json(self, depends_output):
        depends_output.with_suffix(".json").write_text(
            json.dumps({"variables": ["/p/main.py", "/p/util.py"], "cells": [{"src": 0, "dest": 1}]})
        )

        report = convert_dot_ids(depends_output)

        assert report.converted_dot.name == "depends-output-file.converted.dot"
        assert report.converted_dot.read_text() == 'digraph {\n  "main.py" -> "util.py";\n}\n'
        assert report.labels_resolved == 2
        assert report.side_file_error is None

        data = json.loads(report.converted_json.read_text())
        assert data["variables"] == ["main.py", "util.py"]
        assert data["cells"] == [{"src": 0, "dest": 1}]

    def test_missing_side_file_is_not_fatal(self, depends_output):
        report = convert_dot_ids(depends_output)

        assert report.converted_dot.exists()
        assert report.converted_json is None
        assert "not found" in report.side_file_error.message

    def test_invalid_side_file_is_skipped(self, depends_output):
        depends_output.with_suffix(".json").write_text("[oops")
        report = convert_dot_ids(depends_output)

        assert report.converted_json is None
        assert not (depends_output.parent / "depends-output-file.converted.json").exists()

    def test_missing_dot_file_raises(self, tmp_path):
        with pytest.raises(ArtifactNotFoundError):
            convert_dot_ids(tmp_path / "missing.dot")

    def test_rerun_overwrites(self, depends_output):
        first = convert_dot_ids(depends_output).converted_dot.read_text()
        depends_output.write_text("// 0:/q/other.py\n0 -> 0;\n")
        second = convert_dot_ids(depends_output).converted_dot.read_text()

        assert first != second
        assert second == '"other.py" -> "other.py";\n'
