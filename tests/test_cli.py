"""Tests for the CLI.

These tests drive the Typer app end to end inside a temporary Cargo
project, with all external commands mocked.
"""

import io
import json
import os
from unittest.mock import MagicMock, patch

import pytest
from conftest import commands_for, labels_in, make_fake_run, tags_in
from typer.testing import CliRunner

from cargo_dockerize import __version__
from cargo_dockerize.cli import app

runner = CliRunner()


@pytest.fixture
def in_project(cargo_project, monkeypatch):
    """Run the CLI from inside the temporary project."""
    monkeypatch.chdir(cargo_project)
    return cargo_project


class TestCLIHelp:
    """Test CLI help and version commands."""

    def test_help_returns_zero(self) -> None:
        """CLI --help should return exit code 0."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Cargo Dockerize" in result.stdout

    def test_version_flag(self) -> None:
        """CLI --version should print version and exit 0."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_short_version_flag(self) -> None:
        """CLI -V should print version and exit 0."""
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_dockerize_help_lists_options(self) -> None:
        """dockerize --help should document its flags."""
        result = runner.invoke(app, ["dockerize", "--help"])
        assert result.exit_code == 0
        for flag in ("--export", "--tags"):
            assert flag in result.stdout


class TestCLIConfig:
    """Test CLI config command."""

    def test_config_command(self) -> None:
        """CLI config should show all configuration sections."""
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Project:" in result.stdout
        assert "Tools:" in result.stdout
        assert "Container engine" in result.stdout
        assert "Log level" in result.stdout

    def test_config_json(self) -> None:
        """CLI config --json should output JSON."""
        with patch.dict(os.environ, {"CARGO_DOCKERIZE_CONTAINER_ENGINE": "podman"}):
            result = runner.invoke(app, ["config", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["container_engine"] == "podman"
        assert data["build_args"] == ["build", "--release"]


class TestCLIDockerize:
    """Test the dockerize command."""

    def test_tags_option(self, in_project) -> None:
        """--tag and --tags should produce one -t flag per tag."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = make_fake_run()
            result = runner.invoke(
                app, ["dockerize", "--tag", "1.2.3", "--tags", "beta,edge"]
            )

        assert result.exit_code == 0, result.stdout
        (cmd,) = commands_for(mock_run, "docker")
        assert tags_in(cmd) == ["svc:1.2.3", "svc:beta", "svc:edge"]
        assert "Dockerize completed successfully!" in result.stdout

    def test_short_flags(self, in_project) -> None:
        """-n and -t should override name and tag."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = make_fake_run()
            result = runner.invoke(app, ["dockerize", "-n", "api", "-t", "9"])

        assert result.exit_code == 0, result.stdout
        (cmd,) = commands_for(mock_run, "docker")
        assert tags_in(cmd) == ["api:9"]

    def test_label_options(self, in_project) -> None:
        """Label flags should be passed through to the image build."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = make_fake_run()
            result = runner.invoke(
                app,
                [
                    "dockerize",
                    "--licenses",
                    "MIT",
                    "--vendor",
                    "Example",
                    "--title",
                    "Service",
                ],
            )

        assert result.exit_code == 0, result.stdout
        (cmd,) = commands_for(mock_run, "docker")
        labels = labels_in(cmd)
        assert labels.count("org.opencontainers.image.licenses=MIT") == 1
        assert "org.opencontainers.image.vendor=Example" in labels
        assert "org.opencontainers.image.title=Service" in labels
        assert len(labels) == 6

    def test_export(self, in_project) -> None:
        """--export should write the archive into the project root."""
        proc = MagicMock()
        proc.stdout = io.BytesIO(b"image")
        proc.wait.return_value = 0

        with patch("subprocess.run") as mock_run, patch(
            "subprocess.Popen"
        ) as mock_popen:
            mock_run.side_effect = make_fake_run()
            mock_popen.return_value = proc
            result = runner.invoke(app, ["dockerize", "--export", "--tag", "1.2.3"])

        assert result.exit_code == 0, result.stdout
        assert (in_project / "svc-1.2.3.tgz").exists()

    def test_revision_failure_still_succeeds(self, in_project) -> None:
        """A failing VCS lookup should not fail the command."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = make_fake_run(git_exit=128)
            result = runner.invoke(app, ["dockerize"])

        assert result.exit_code == 0, result.stdout
        (cmd,) = commands_for(mock_run, "docker")
        assert "org.opencontainers.image.revision=unknown" in labels_in(cmd)

    def test_build_failure_exits_non_zero(self, in_project) -> None:
        """A failing project build should exit 1 with the error code."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = make_fake_run(failing="cargo")
            result = runner.invoke(app, ["dockerize"])

        assert result.exit_code == 1
        assert "build_failed" in result.stdout
        assert commands_for(mock_run, "docker") == []

    def test_missing_dockerfile_exits_non_zero(self, in_project) -> None:
        """A missing Dockerfile should exit 1."""
        with patch("subprocess.run") as mock_run:
            result = runner.invoke(app, ["dockerize", "--dockerfile", "Nope"])

        assert result.exit_code == 1
        assert "dockerfile_not_found" in result.stdout
        mock_run.assert_not_called()

    def test_non_utf8_manifest_exits_non_zero(self, in_project) -> None:
        """An undecodable manifest should exit 1 with the error code."""
        (in_project / "Cargo.toml").write_bytes(b'name = "svc\xff"\nversion = "1"\n')

        with patch("subprocess.run") as mock_run:
            result = runner.invoke(app, ["dockerize"])

        assert result.exit_code == 1
        assert "file_access_error" in result.stdout
        assert not isinstance(result.exception, UnicodeDecodeError)
        mock_run.assert_not_called()

    def test_empty_tag_is_not_replaced(self, in_project) -> None:
        """--tag "" should be passed through, not defaulted."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = make_fake_run()
            result = runner.invoke(app, ["dockerize", "--tag", ""])

        assert result.exit_code == 0, result.stdout
        (cmd,) = commands_for(mock_run, "docker")
        assert tags_in(cmd) == ["svc:"]

    def test_dry_run_json(self, in_project) -> None:
        """--dry-run --json should print the plan as JSON only."""
        with patch.dict(os.environ, {"CARGO_DOCKERIZE_LOG_LEVEL": "ERROR"}), patch(
            "subprocess.run"
        ) as mock_run:
            mock_run.side_effect = make_fake_run(revision="feed")
            result = runner.invoke(app, ["dockerize", "--dry-run", "--json"])

        assert result.exit_code == 0, result.stdout
        data = json.loads(result.stdout)
        assert data["image"] == "svc:0.1.0"
        assert data["revision"] == "feed"
        assert data["state"] == "done"
        assert data["dry_run"] is True
        assert data["commands"][0] == "cargo build --release"
        assert commands_for(mock_run, "cargo") == []
