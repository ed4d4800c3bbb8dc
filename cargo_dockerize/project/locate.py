"""Project root discovery."""

from __future__ import annotations

import logging
from pathlib import Path

from cargo_dockerize.errors import ProjectRootNotFoundError

logger = logging.getLogger(__name__)


def find_project_root(
    start: Path | None = None,
    manifest_name: str = "Cargo.toml",
) -> Path:
    """Find the nearest directory containing the manifest.

    Checks `start` first, then each parent up to the filesystem root.

    Args:
        start: Directory to start from (current working directory if None).
        manifest_name: Manifest file name to look for.

    Returns:
        Absolute path of the project root.

    Raises:
        ProjectRootNotFoundError: If no ancestor holds the manifest.
    """
    origin = (start or Path.cwd()).resolve()

    for candidate in (origin, *origin.parents):
        if (candidate / manifest_name).exists():
            logger.debug("Found %s in %s", manifest_name, candidate)
            return candidate

    raise ProjectRootNotFoundError(str(origin), manifest_name)


__all__ = ["find_project_root"]
