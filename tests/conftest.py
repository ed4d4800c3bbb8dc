"""Shared fixtures for cargo_dockerize tests."""

import subprocess
from pathlib import Path

import pytest

CARGO_TOML = """\
[package]
name = "svc"
version = "0.1.0"
edition = "2021"

[dependencies]
serde = "1"
"""


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    """Create a minimal Cargo project with a Dockerfile."""
    root = tmp_path / "svc"
    root.mkdir()
    (root / "Cargo.toml").write_text(CARGO_TOML)
    (root / "Dockerfile").write_text("FROM scratch\n")
    (root / "src").mkdir()
    return root


def make_fake_run(
    revision: str = "0123abcd",
    failing: str | None = None,
    git_exit: int = 0,
):
    """Build a subprocess.run replacement.

    Args:
        revision: Commit id printed by the fake `git rev-parse`.
        failing: Command name (e.g. "cargo") whose run exits with 101.
        git_exit: Exit code for git; non-zero raises CalledProcessError
            because the revision lookup runs with check=True.
    """

    def fake_run(cmd, **kwargs):
        if cmd[0] == "git":
            if git_exit != 0:
                raise subprocess.CalledProcessError(
                    git_exit, cmd, output="", stderr="fatal: not a git repository"
                )
            return subprocess.CompletedProcess(cmd, 0, stdout=f"{revision}\n", stderr="")
        if failing is not None and cmd[0] == failing:
            return subprocess.CompletedProcess(cmd, 101)
        return subprocess.CompletedProcess(cmd, 0)

    return fake_run


def commands_for(mock_run, tool: str) -> list[list[str]]:
    """Return every command a mocked subprocess.run received for `tool`."""
    return [c.args[0] for c in mock_run.call_args_list if c.args[0][0] == tool]


def tags_in(cmd: list[str]) -> list[str]:
    """Return the values of every `-t` flag in an image build command."""
    return [cmd[i + 1] for i, arg in enumerate(cmd) if arg == "-t"]


def labels_in(cmd: list[str]) -> list[str]:
    """Return the values of every `--label` flag in an image build command."""
    return [cmd[i + 1] for i, arg in enumerate(cmd) if arg == "--label"]
