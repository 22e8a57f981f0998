"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from wallet_e2e_tester.bootstrap import BootstrapError, bootstrap_project_environment
from wallet_e2e_tester.configuration import (
    DEFAULT_SETTINGS_FILENAME,
    write_placeholder_configuration,
)
from wallet_e2e_tester.run_execution import (
    RunExecutionError,
    RunRequest,
    execute_self_send_run,
)
from wallet_e2e_tester.stage_sequencing import StageStatus

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="wallet-e2e-tester")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """Wallet self-send end-to-end tester."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_SETTINGS_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML harness settings template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML harness settings file with the default values."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="bootstrap")
@click.option(
    "--skip-browser",
    is_flag=True,
    default=False,
    help="Do not install the Playwright Chromium build.",
)
def bootstrap(skip_browser: bool) -> None:
    """Prepare local virtual environment, dependencies and browser."""
    repo_root = Path(__file__).resolve().parents[2]
    try:
        bootstrap_project_environment(repo_root=repo_root, install_browser=not skip_browser)
    except BootstrapError as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"local virtual environment ready: {repo_root / '.venv'}")


@cli.command(name="run")
@click.option(
    "--settings",
    "settings_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML harness settings file",
)
@click.option(
    "--env-file",
    "env_file",
    required=False,
    type=click.Path(path_type=str),
    help="Optional .env file with the wallet secret and URLs",
)
def run_self_send(settings_path: str | None, env_file: str | None) -> None:
    """Send an EIP-1559 self-transfer through the wallet and verify its receipt."""
    try:
        outcome = execute_self_send_run(
            RunRequest(settings_path=settings_path, env_file=env_file)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for result in outcome.sequence.results:
        line = f"{result.status.value.upper():<9} {result.stage_name}"
        if result.status in (StageStatus.FAILED, StageStatus.TIMED_OUT):
            line = f"{line}: {result.error_message}"
        click.echo(line)
    if not outcome.succeeded:
        raise CliError("Self-send run failed.")
    click.echo("Self-send run succeeded.")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
