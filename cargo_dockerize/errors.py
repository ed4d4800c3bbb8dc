"""Error definitions for cargo_dockerize.

Every fatal pipeline failure is a DockerizeError subclass with a stable
code that the CLI surfaces next to the message. Revision lookup failures
are not errors; see RevisionResult in cargo_dockerize.types.
"""

from __future__ import annotations

# Error code constants
PROJECT_NOT_FOUND = "project_not_found"
DOCKERFILE_NOT_FOUND = "dockerfile_not_found"
MANIFEST_PARSE_ERROR = "manifest_parse_error"
BUILD_FAILED = "build_failed"
IMAGE_BUILD_FAILED = "image_build_failed"
EXPORT_FAILED = "export_failed"
FILE_ACCESS_ERROR = "file_access_error"


class DockerizeError(Exception):
    """Base error for all fatal pipeline failures."""

    def __init__(self, message: str, code: str = "dockerize_error") -> None:
        super().__init__(message)
        self.code = code


class ProjectRootNotFoundError(DockerizeError):
    """Raised when no ancestor directory holds the manifest."""

    def __init__(self, start: str, manifest_name: str) -> None:
        super().__init__(
            f"Could not find {manifest_name} in {start} or any parent directory",
            code=PROJECT_NOT_FOUND,
        )
        self.start = start
        self.manifest_name = manifest_name


class DockerfileNotFoundError(DockerizeError):
    """Raised when the image build file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Dockerfile not found at: {path}", code=DOCKERFILE_NOT_FOUND)
        self.path = path


class ManifestParseError(DockerizeError):
    """Raised when the manifest lacks a usable name or version line."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=MANIFEST_PARSE_ERROR)


class FileAccessError(DockerizeError):
    """Raised when the manifest or the export archive cannot be accessed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=FILE_ACCESS_ERROR)


class StepFailedError(DockerizeError):
    """Raised when an external command exits non-zero or cannot start."""

    def __init__(
        self,
        message: str,
        command: str,
        exit_code: int | None = None,
        code: str = "step_failed",
    ) -> None:
        super().__init__(message, code=code)
        self.command = command
        self.exit_code = exit_code


class BuildFailedError(StepFailedError):
    """Raised when the project build fails."""

    def __init__(self, message: str, command: str, exit_code: int | None = None) -> None:
        super().__init__(message, command, exit_code=exit_code, code=BUILD_FAILED)


class ImageBuildFailedError(StepFailedError):
    """Raised when the container image build fails."""

    def __init__(self, message: str, command: str, exit_code: int | None = None) -> None:
        super().__init__(message, command, exit_code=exit_code, code=IMAGE_BUILD_FAILED)


class ExportFailedError(StepFailedError):
    """Raised when saving the image to an archive fails."""

    def __init__(self, message: str, command: str, exit_code: int | None = None) -> None:
        super().__init__(message, command, exit_code=exit_code, code=EXPORT_FAILED)


__all__ = [
    "BUILD_FAILED",
    "DOCKERFILE_NOT_FOUND",
    "EXPORT_FAILED",
    "FILE_ACCESS_ERROR",
    "IMAGE_BUILD_FAILED",
    "MANIFEST_PARSE_ERROR",
    "PROJECT_NOT_FOUND",
    "BuildFailedError",
    "DockerfileNotFoundError",
    "DockerizeError",
    "ExportFailedError",
    "FileAccessError",
    "ImageBuildFailedError",
    "ManifestParseError",
    "ProjectRootNotFoundError",
    "StepFailedError",
]
