"""Bootstrap orchestration for local uv-managed environments with Playwright browsers."""

from __future__ import annotations

import shlex
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

CommandRunner = Callable[[tuple[str, ...], Path], None]

PLAYWRIGHT_BROWSER = "chromium"


class BootstrapError(Exception):
    """Raised when project bootstrap commands fail."""


def bootstrap_project_environment(
    *, repo_root: Path, run_command: CommandRunner | None = None, install_browser: bool = True
) -> None:
    """Prepare `.venv`, sync dependencies with uv and install the Chromium build."""
    command_runner = run_command or _run_checked_command
    resolved_repo_root = repo_root.resolve()
    venv_python = _find_existing_venv_python(resolved_repo_root)
    if venv_python is None:
        command_runner((sys.executable, "-m", "venv", ".venv"), resolved_repo_root)
        venv_python = _venv_executable(resolved_repo_root, "python")

    command_runner(
        (str(venv_python), "-m", "pip", "install", "--upgrade", "pip", "uv"),
        resolved_repo_root,
    )
    command_runner(
        (str(_venv_executable(resolved_repo_root, "uv")), "sync", "--all-groups"),
        resolved_repo_root,
    )
    if install_browser:
        command_runner(
            (str(venv_python), "-m", "playwright", "install", PLAYWRIGHT_BROWSER),
            resolved_repo_root,
        )


def _run_checked_command(command: tuple[str, ...], cwd: Path) -> None:
    """Run one bootstrap command and wrap subprocess errors with domain-friendly messages."""
    try:
        subprocess.run(list(command), cwd=cwd, check=True)
    except FileNotFoundError as exc:
        command_text = shlex.join(command)
        raise BootstrapError(f"Bootstrap command not found: {command_text}") from exc
    except subprocess.CalledProcessError as exc:
        command_text = shlex.join(command)
        raise BootstrapError(
            f"Bootstrap command failed with exit code {exc.returncode}: {command_text}"
        ) from exc


def _find_existing_venv_python(repo_root: Path) -> Path | None:
    for candidate in (
        repo_root / ".venv" / "bin" / "python",
        repo_root / ".venv" / "Scripts" / "python.exe",
    ):
        if candidate.exists():
            return candidate
    return None


def _venv_executable(repo_root: Path, name: str) -> Path:
    if sys.platform.startswith("win"):
        return repo_root / ".venv" / "Scripts" / f"{name}.exe"
    return repo_root / ".venv" / "bin" / name
