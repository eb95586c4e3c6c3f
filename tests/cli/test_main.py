"""Tests for main CLI entry point.

Tests the main CLI group and lazy command loading mechanism.
"""

from unittest import mock

import pytest
from click.testing import CliRunner

from elastic_package import __version__
from elastic_package.cli.main import LazyGroup, cli, main


@pytest.fixture
def runner():
    """Provide a Click CLI runner for testing."""
    return CliRunner()


class TestLazyGroup:
    """Test the LazyGroup command loading mechanism."""

    def test_get_command_imports_module(self):
        group = LazyGroup(name="test")

        with mock.patch("importlib.import_module") as mock_import:
            mock_import.return_value = mock.Mock(stack="stack-command")
            cmd = group.get_command(mock.Mock(), "stack")

        mock_import.assert_called_once_with("elastic_package.cli.stack_cmd")
        assert cmd == "stack-command"

    def test_unknown_command(self):
        assert LazyGroup(name="test").get_command(mock.Mock(), "nonexistent") is None

    def test_list_commands(self):
        assert LazyGroup(name="test").list_commands(mock.Mock()) == ["query", "stack"]


class TestCli:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "stack" in result.output
        assert "query" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_stack_help(self, runner):
        result = runner.invoke(cli, ["stack", "swarm", "--help"])

        assert result.exit_code == 0
        for command in ["init", "leave", "up", "down"]:
            assert command in result.output

    def test_verbose_sets_debug_level(self, runner):
        with mock.patch("elastic_package.cli.main.set_log_level") as mock_level:
            result = runner.invoke(cli, ["--verbose", "query", "--help"])

        assert result.exit_code == 0
        mock_level.assert_called_once()


class TestMain:
    def test_keyboard_interrupt_exits_130(self):
        with mock.patch("elastic_package.cli.main.cli", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 130
