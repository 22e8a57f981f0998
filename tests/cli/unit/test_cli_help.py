"""CLI smoke tests."""

from click.testing import CliRunner
from wallet_e2e_tester.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "bootstrap" in result.output
    assert "run" in result.output


def test_run_help_lists_settings_and_env_file_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "--help"])

    assert result.exit_code == 0
    assert "--settings" in result.output
    assert "--env-file" in result.output
