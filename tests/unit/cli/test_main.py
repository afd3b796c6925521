"""Unit tests for the main CLI application."""

import logging

from partsweep import __version__
from partsweep.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"partsweep version {__version__}" in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without a command shows help."""
        result = runner.invoke(app, [])

        assert "scan" in result.output
        assert "clean" in result.output

    def test_verbose_sets_debug(self) -> None:
        """--verbose lowers the log level to DEBUG."""
        result = runner.invoke(app, ["--verbose", "history"])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_quiet_sets_error(self) -> None:
        """--quiet raises the log level to ERROR."""
        result = runner.invoke(app, ["--quiet", "history"])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.ERROR
