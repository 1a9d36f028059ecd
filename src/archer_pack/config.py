"""Per-invocation settings.

Settings are resolved once, at the CLI boundary, and threaded
explicitly into the packaging workflow.  Nothing below the CLI reads
environment variables.

Resolution order
----------------
* ``workspace_root`` — ``ARCHER_WORKSPACE``, else the current directory.
* ``project_name`` — ``ARCHER_PROJECT``, else the workspace summary file,
  else empty.
* ``environments_file`` — ``ARCHER_ENVIRONMENTS_FILE``, else
  ``<workspace>/ecs-project/environments.yml``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from archer_pack.infra.workspace import PROJECT_DIR_NAME, FileWorkspace

WORKSPACE_ENV_VAR: str = "ARCHER_WORKSPACE"
PROJECT_ENV_VAR: str = "ARCHER_PROJECT"
ENVIRONMENTS_FILE_ENV_VAR: str = "ARCHER_ENVIRONMENTS_FILE"
ENVIRONMENTS_FILE_NAME: str = "environments.yml"


@dataclass(frozen=True, slots=True)
class Settings:
    workspace_root: Path
    project_name: str
    environments_file: Path


def load_settings(
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> Settings:
    """Resolve :class:`Settings` from *environ* (default ``os.environ``).

    Raises
    ------
    NoProjectInWorkspaceError
        If the workspace summary file exists but is unreadable.
    """
    env = os.environ if environ is None else environ
    root = Path(env.get(WORKSPACE_ENV_VAR) or (cwd or Path.cwd()))

    project = env.get(PROJECT_ENV_VAR, "").strip()
    if not project:
        project = FileWorkspace(root).project_name() or ""

    env_file = env.get(ENVIRONMENTS_FILE_ENV_VAR)
    environments_file = (
        Path(env_file) if env_file else root / PROJECT_DIR_NAME / ENVIRONMENTS_FILE_NAME
    )

    return Settings(
        workspace_root=root,
        project_name=project,
        environments_file=environments_file,
    )
