"""Command runner for the external build steps.

This module handles:
- Composing the project build, image build and image save commands
- Executing each command as one blocking child process
- Streaming `save` output through gzip into the export archive

Commands inherit the terminal so tool output reaches the user directly.
No timeouts are applied; a hung tool hangs the run.
"""

from __future__ import annotations

import gzip
import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from cargo_dockerize.errors import FileAccessError

if TYPE_CHECKING:
    from cargo_dockerize.types import BuildLabel, ImageReference

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Result of one external command.

    Attributes:
        command: The command that was executed, shell-quoted.
        exit_code: Process exit code, None if the process never started.
        started_at: Step start time.
        finished_at: Step finish time.
        error_message: Error message if the step failed.
    """

    command: str
    exit_code: int | None
    started_at: datetime
    finished_at: datetime
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def duration(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


def compose_build_command(build_tool: str, build_args: list[str]) -> list[str]:
    """Compose the release-mode project build command."""
    return [build_tool, *build_args]


def compose_image_build_command(
    engine: str,
    images: list[ImageReference],
    dockerfile: str,
    labels: list[BuildLabel],
    context: str = ".",
) -> list[str]:
    """Compose the image build command.

    Args:
        engine: Container engine executable.
        images: Primary reference first, then every additional tag.
        dockerfile: Build file path, relative to the build context.
        labels: Provenance labels in the order they should be applied.
        context: Build context directory.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    cmd = [engine, "build"]

    for image in images:
        cmd.extend(["-t", str(image)])

    cmd.extend(["-f", dockerfile])

    for label in labels:
        cmd.extend(["--label", str(label)])

    cmd.append(context)
    return cmd


def compose_save_command(engine: str, image: ImageReference) -> list[str]:
    """Compose the command that writes an image tarball to stdout."""
    return [engine, "save", str(image)]


def run_step(cmd: list[str], cwd: Path) -> StepResult:
    """Run one external command to completion.

    Args:
        cmd: Command to execute.
        cwd: Working directory.

    Returns:
        StepResult with exit status; a command that cannot be started is
        reported with exit_code None rather than raised.
    """
    cmd_str = shlex.join(cmd)
    logger.info("Executing: %s", cmd_str)
    logger.debug("Working directory: %s", cwd)

    started_at = datetime.now(timezone.utc)
    error_message: str | None = None

    try:
        result = subprocess.run(cmd, cwd=cwd, check=False)
        exit_code: int | None = result.returncode
        if exit_code != 0:
            error_message = f"{cmd[0]} exited with code {exit_code}"
    except OSError as e:
        exit_code = None
        error_message = f"Failed to execute {cmd[0]}: {e}"

    finished_at = datetime.now(timezone.utc)
    if error_message:
        logger.error(error_message)

    return StepResult(
        command=cmd_str,
        exit_code=exit_code,
        started_at=started_at,
        finished_at=finished_at,
        error_message=error_message,
    )


def describe_export(engine: str, image: ImageReference, archive_path: Path) -> str:
    """Render the export step as the equivalent shell pipeline."""
    save_cmd = shlex.join(compose_save_command(engine, image))
    return f"{save_cmd} | gzip > {shlex.quote(str(archive_path))}"


def export_image(
    engine: str,
    image: ImageReference,
    archive_path: Path,
    cwd: Path,
) -> StepResult:
    """Save an image and gzip the stream into an archive file.

    A partially written archive is removed when the save fails.

    Args:
        engine: Container engine executable.
        image: Image to save.
        archive_path: Destination `.tgz` file.
        cwd: Working directory for the engine.

    Returns:
        StepResult for the save command.

    Raises:
        FileAccessError: If the archive cannot be written.
    """
    cmd = compose_save_command(engine, image)
    cmd_str = describe_export(engine, image, archive_path)
    logger.info("Executing: %s", cmd_str)

    started_at = datetime.now(timezone.utc)
    error_message: str | None = None

    try:
        proc = subprocess.Popen(cmd, cwd=cwd, stdout=subprocess.PIPE)
    except OSError as e:
        exit_code: int | None = None
        error_message = f"Failed to execute {engine}: {e}"
    else:
        with proc:
            try:
                with gzip.open(archive_path, "wb") as archive:
                    shutil.copyfileobj(proc.stdout, archive)
            except OSError as e:
                proc.kill()
                archive_path.unlink(missing_ok=True)
                logger.error("Failed to write %s: %s", archive_path, e)
                raise FileAccessError(f"Failed to write {archive_path}: {e}") from e
            exit_code = proc.wait()

        if exit_code != 0:
            error_message = f"{engine} save exited with code {exit_code}"
            archive_path.unlink(missing_ok=True)

    finished_at = datetime.now(timezone.utc)
    if error_message:
        logger.error(error_message)

    return StepResult(
        command=cmd_str,
        exit_code=exit_code,
        started_at=started_at,
        finished_at=finished_at,
        error_message=error_message,
    )


__all__ = [
    "StepResult",
    "compose_build_command",
    "compose_image_build_command",
    "compose_save_command",
    "describe_export",
    "export_image",
    "run_step",
]
