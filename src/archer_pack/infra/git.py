"""Infrastructure: derive the default image tag from git.

Rules
-----
* Detection via :func:`shutil.which` before any subprocess.
* Never raises — a missing or failing git falls back to ``latest``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

FALLBACK_IMAGE_TAG: str = "latest"


def short_commit_id(cwd: Path | None = None) -> str | None:
    """Return the short hash of ``HEAD``, or ``None`` when unavailable."""
    git = shutil.which("git")
    if git is None:
        return None
    try:
        result = subprocess.run(
            [git, "rev-parse", "--short", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=10,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git rev-parse failed: %s", exc)
        return None
    commit = result.stdout.strip()
    return commit or None


def default_image_tag(cwd: Path | None = None) -> str:
    """Return ``manual-{short sha}``, or ``latest`` outside a git checkout."""
    commit = short_commit_id(cwd)
    if commit is None:
        return FALLBACK_IMAGE_TAG
    return f"manual-{commit}"
