"""Best-effort revision lookup.

Provenance labels are not worth failing a release over, so this is the one
step where failures are absorbed: any problem yields the `unknown` sentinel.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from cargo_dockerize.types import RevisionResult

logger = logging.getLogger(__name__)


def compose_revision_command(vcs_tool: str = "git") -> list[str]:
    """Compose the command that prints the current commit id."""
    return [vcs_tool, "rev-parse", "HEAD"]


def resolve_revision(project_root: Path, vcs_tool: str = "git") -> RevisionResult:
    """Resolve the current commit id of the project.

    Args:
        project_root: Directory to run the VCS tool in.
        vcs_tool: Version-control executable.

    Returns:
        RevisionResult; never raises for lookup failures.
    """
    cmd = compose_revision_command(vcs_tool)
    try:
        result = subprocess.run(
            cmd,
            cwd=project_root,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        reason = (e.stderr or "").strip() or f"exit code {e.returncode}"
        logger.warning("Revision lookup failed, using sentinel: %s", reason)
        return RevisionResult.unknown(reason)
    except OSError as e:
        logger.warning("Revision lookup failed, using sentinel: %s", e)
        return RevisionResult.unknown(str(e))

    revision = result.stdout.strip()
    if not revision:
        logger.warning("Revision lookup returned no output, using sentinel")
        return RevisionResult.unknown("empty output")

    logger.debug("Resolved revision %s", revision)
    return RevisionResult(revision=revision, resolved=True)


__all__ = ["compose_revision_command", "resolve_revision"]
