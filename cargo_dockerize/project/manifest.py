"""Package metadata extraction from the manifest.

The scan is line based and not section aware: the first line anywhere in
the file that starts with `name =` (or `version =`) wins, even when it
belongs to a dependency table that comes before `[package]`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cargo_dockerize.errors import FileAccessError, ManifestParseError
from cargo_dockerize.types import PackageMetadata

logger = logging.getLogger(__name__)

QUOTE_CHARS = "\"'"


def _find_field(lines: list[str], field: str) -> str:
    """Return the value of the first `<field> =` line."""
    prefix = f"{field} ="
    line = next((ln for ln in lines if ln.strip().startswith(prefix)), None)
    if line is None:
        raise ManifestParseError(f"Could not find package {field} in manifest")

    _, sep, raw = line.partition("=")
    value = raw.strip().strip(QUOTE_CHARS)
    if not sep or not value:
        raise ManifestParseError(f"Invalid {field} format in manifest: {line.strip()}")
    return value


def parse_package_metadata(text: str) -> PackageMetadata:
    """Extract package name and version from manifest text.

    Args:
        text: Manifest file contents.

    Returns:
        PackageMetadata with the unquoted name and version.

    Raises:
        ManifestParseError: If either field is missing or malformed.
    """
    lines = text.splitlines()
    return PackageMetadata(
        name=_find_field(lines, "name"),
        version=_find_field(lines, "version"),
    )


def read_package_metadata(
    project_root: Path,
    manifest_name: str = "Cargo.toml",
) -> PackageMetadata:
    """Read package metadata from the manifest in a project root.

    Raises:
        FileAccessError: If the manifest cannot be read as UTF-8 text.
        ManifestParseError: If either field is missing or malformed.
    """
    manifest_path = project_root / manifest_name
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Failed to read {manifest_path}: {e}") from e

    metadata = parse_package_metadata(text)
    logger.info("Package %s version %s", metadata.name, metadata.version)
    return metadata


__all__ = ["parse_package_metadata", "read_package_metadata"]
