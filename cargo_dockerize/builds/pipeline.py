"""Dockerize pipeline driver.

This module provides the high-level dockerize API:
- Pipeline.run(): locate project, read metadata, resolve revision, build
  labels, then run project build, image build and optional export
- PipelineResult: summary of a run, JSON serializable

The driver is a small state machine:

    located -> metadata_read -> project_built -> image_built
            -> [exported] -> done

Any DockerizeError moves it to `aborted` and is re-raised. There are no
retries; each external command runs at most once.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from cargo_dockerize.builds.labels import build_labels
from cargo_dockerize.builds.revision import resolve_revision
from cargo_dockerize.builds.runner import (
    compose_build_command,
    compose_image_build_command,
    describe_export,
    export_image,
    run_step,
)
from cargo_dockerize.config import Settings, get_settings
from cargo_dockerize.errors import (
    BuildFailedError,
    DockerfileNotFoundError,
    DockerizeError,
    ExportFailedError,
    ImageBuildFailedError,
)
from cargo_dockerize.project import find_project_root, read_package_metadata
from cargo_dockerize.types import DockerizeOptions, ImageReference, PipelineState

logger = logging.getLogger(__name__)


class PipelineResult(BaseModel):
    """Summary of one dockerize run."""

    project_root: str
    image: str
    tags: list[str]
    labels: list[str]
    revision: str
    revision_resolved: bool
    archive_path: str | None = None
    commands: list[str] = Field(default_factory=list)
    state: PipelineState
    dry_run: bool = False


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _ignore(_message: str) -> None:
    pass


class Pipeline:
    """Runs the dockerize steps for one project in order.

    Args:
        options: What to build and how to label it.
        settings: Tool names and manifest name; loaded from env if None.
        cwd: Directory to start the project search from.
        progress: Callback receiving one human-readable line per stage.
        clock: Returns the build time used for the created label.
    """

    def __init__(
        self,
        options: DockerizeOptions,
        settings: Settings | None = None,
        cwd: Path | None = None,
        progress: Callable[[str], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.options = options
        self.settings = settings or get_settings()
        self.cwd = cwd
        self.progress = progress or _ignore
        self.clock = clock or _utc_now
        self.state: PipelineState | None = None

    def _advance(self, state: PipelineState) -> None:
        logger.debug(
            "Pipeline state: %s -> %s",
            self.state.value if self.state else "start",
            state.value,
        )
        self.state = state

    def run(self) -> PipelineResult:
        """Run the pipeline to completion.

        Returns:
            PipelineResult describing the finished run.

        Raises:
            DockerizeError: On the first fatal failure.
        """
        try:
            return self._run()
        except DockerizeError as e:
            logger.debug("Pipeline aborted [%s]: %s", e.code, e)
            self._advance(PipelineState.ABORTED)
            raise

    def _run(self) -> PipelineResult:
        options = self.options
        settings = self.settings

        root = find_project_root(self.cwd, settings.manifest_name)
        self._advance(PipelineState.LOCATED)
        self.progress(f"Project root: {root}")

        metadata = read_package_metadata(root, settings.manifest_name)
        self._advance(PipelineState.METADATA_READ)

        image = ImageReference(
            name=options.name if options.name is not None else metadata.name,
            tag=options.tag if options.tag is not None else metadata.version,
        )
        images = [image, *(image.with_tag(tag) for tag in options.extra_tags)]

        dockerfile_path = root / options.dockerfile
        if not dockerfile_path.exists():
            raise DockerfileNotFoundError(str(dockerfile_path))

        revision = resolve_revision(root, settings.vcs_tool)
        if not revision.resolved:
            self.progress(f"Revision unavailable, labelling as '{revision.revision}'")

        labels = build_labels(
            image=image,
            revision=revision.revision,
            created=self.clock(),
            title=options.title,
            description=options.description,
            authors=options.authors,
            url=options.url,
            source=options.source,
            vendor=options.vendor,
            licenses=options.licenses,
            application_name=options.application_name,
        )

        build_cmd = compose_build_command(settings.build_tool, settings.build_args)
        image_cmd = compose_image_build_command(
            settings.container_engine,
            images,
            options.dockerfile,
            labels,
        )
        archive_path = root / image.archive_name if options.export else None

        result = PipelineResult(
            project_root=str(root),
            image=str(image),
            tags=[str(i) for i in images],
            labels=[str(label) for label in labels],
            revision=revision.revision,
            revision_resolved=revision.resolved,
            archive_path=str(archive_path) if archive_path else None,
            state=PipelineState.METADATA_READ,
            dry_run=options.dry_run,
        )

        if options.dry_run:
            result.commands = [shlex.join(build_cmd), shlex.join(image_cmd)]
            if archive_path:
                result.commands.append(
                    describe_export(settings.container_engine, image, archive_path)
                )
            for command in result.commands:
                self.progress(f"Would run: {command}")
            self._advance(PipelineState.DONE)
            result.state = PipelineState.DONE
            return result

        self.progress(f"Building project with {settings.build_tool}...")
        step = run_step(build_cmd, root)
        result.commands.append(step.command)
        if not step.success:
            raise BuildFailedError(
                f"Project build failed: {step.error_message}",
                step.command,
                exit_code=step.exit_code,
            )
        self._advance(PipelineState.PROJECT_BUILT)

        self.progress(f"Building Docker image: {image}...")
        step = run_step(image_cmd, root)
        result.commands.append(step.command)
        if not step.success:
            raise ImageBuildFailedError(
                f"Docker build failed: {step.error_message}",
                step.command,
                exit_code=step.exit_code,
            )
        self._advance(PipelineState.IMAGE_BUILT)

        if archive_path:
            self.progress(f"Exporting Docker image to: {archive_path}...")
            step = export_image(settings.container_engine, image, archive_path, root)
            result.commands.append(step.command)
            if not step.success:
                raise ExportFailedError(
                    f"Docker export failed: {step.error_message}",
                    step.command,
                    exit_code=step.exit_code,
                )
            self._advance(PipelineState.EXPORTED)
            self.progress(f"Docker image exported successfully to: {archive_path}")

        self._advance(PipelineState.DONE)
        result.state = PipelineState.DONE
        self.progress("Dockerize completed successfully!")
        return result


def run_pipeline(
    options: DockerizeOptions,
    settings: Settings | None = None,
    cwd: Path | None = None,
    progress: Callable[[str], None] | None = None,
) -> PipelineResult:
    """Convenience wrapper: build a Pipeline and run it."""
    return Pipeline(options, settings=settings, cwd=cwd, progress=progress).run()


__all__ = ["Pipeline", "PipelineResult", "run_pipeline"]
