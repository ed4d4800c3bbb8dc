"""Project discovery module.

This module handles:
- Locating the project root by walking up to the manifest
- Reading package name and version from the manifest
"""

from cargo_dockerize.project.locate import find_project_root
from cargo_dockerize.project.manifest import (
    parse_package_metadata,
    read_package_metadata,
)

__all__ = ["find_project_root", "parse_package_metadata", "read_package_metadata"]
