"""
Unit tests for the 'serve' command.
"""

from unittest.mock import patch

from click.testing import CliRunner

from dtsviz.cli.commands.serve import serve


class TestServeCommand:
    def test_serves_file_directory(self, tmp_path):
        dot = tmp_path / "graph.dot"
        dot.write_text('"a" -> "b";')
        runner = CliRunner()

        with runner.isolated_filesystem(), patch("dtsviz.server.app.serve") as mock_serve:
            result = runner.invoke(serve, [str(dot), "--port", "4000", "--no-browser"])

        assert result.exit_code == 0
        assert "http://localhost:4000/?dot=graph.dot" in result.output
        args, kwargs = mock_serve.call_args
        assert args[0] == tmp_path
        assert kwargs["default_dot"] == "graph.dot"
        assert kwargs["open_browser"] is False

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(serve, [str(tmp_path / "missing.dot")])

        assert result.exit_code == 1
        assert "Graph file not found" in result.output
