"""Shared type definitions for cargo_dockerize.

This module contains dataclasses, enums, and constants shared across
subpackages to avoid circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum

UNKNOWN_REVISION = "unknown"


class PipelineState(str, Enum):
    """State of a dockerize pipeline run."""

    LOCATED = "located"
    METADATA_READ = "metadata_read"
    PROJECT_BUILT = "project_built"
    IMAGE_BUILT = "image_built"
    EXPORTED = "exported"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class PackageMetadata:
    """Package name and version read from the manifest."""

    name: str
    version: str


@dataclass(frozen=True)
class BuildLabel:
    """One provenance label passed to the image build."""

    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class ImageReference:
    """Image name and tag, rendered as `name:tag`."""

    name: str
    tag: str

    def __str__(self) -> str:
        return f"{self.name}:{self.tag}"

    def with_tag(self, tag: str) -> "ImageReference":
        """Return a reference to the same image under another tag."""
        return ImageReference(name=self.name, tag=tag)

    @property
    def archive_name(self) -> str:
        """File name used when exporting this image."""
        return f"{self.name}-{self.tag}.tgz"


@dataclass(frozen=True)
class RevisionResult:
    """Outcome of the best-effort revision lookup.

    A failed lookup is not an error: `resolved` is False, `revision` holds
    the sentinel and `reason` says what went wrong.
    """

    revision: str
    resolved: bool
    reason: str | None = None

    @classmethod
    def unknown(cls, reason: str) -> "RevisionResult":
        return cls(revision=UNKNOWN_REVISION, resolved=False, reason=reason)


@dataclass
class DockerizeOptions:
    """Options for one dockerize run, as given on the command line."""

    export: bool = False
    name: str | None = None
    tag: str | None = None
    dockerfile: str = "Dockerfile"
    extra_tags: list[str] = field(default_factory=list)
    application_name: str | None = None
    title: str | None = None
    description: str | None = None
    authors: str | None = None
    url: str | None = None
    source: str | None = None
    vendor: str | None = None
    licenses: str | None = None
    dry_run: bool = False


def split_tags(value: str | None) -> list[str]:
    """Split a comma-separated tag list, dropping blank entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


__all__ = [
    "UNKNOWN_REVISION",
    "BuildLabel",
    "DockerizeOptions",
    "ImageReference",
    "PackageMetadata",
    "PipelineState",
    "RevisionResult",
    "split_tags",
]
