"""
Unit tests for the 'convert' command.
"""

from click.testing import CliRunner

from dtsviz.cli.commands.convert import convert


class TestConvertCommand:
    def test_converts(self, tmp_path):
        dot = tmp_path / "depends-output-file.dot"
        dot.write_text("// 0:/p/a.py\n// 1:/p/b.py\n0 -> 1;\n")

        result = CliRunner().invoke(convert, [str(dot)])

        assert result.exit_code == 0
        assert "DOT ids converted" in result.output
        assert "2 labels resolved" in result.output
        assert "JSON file not found" in result.output
        assert (tmp_path / "depends-output-file.converted.dot").read_text() == '"a.py" -> "b.py";\n'

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(convert, [str(tmp_path / "missing.dot")])

        assert result.exit_code == 1
        assert "Failed to convert DOT file" in result.output
