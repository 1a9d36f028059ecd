"""Local workspace holding application manifests.

Layout::

    <root>/
      ecs-project/
        .ecs-workspace        # YAML summary: ``project: <name>``
        frontend-app.yml      # one manifest per application
        backend-app.yml

Rules
-----
* No imports from ``cli``.
* No user-facing output.
* ``OSError`` and ``yaml.YAMLError`` never escape; they are re-raised
  as :class:`~archer_pack.exceptions.ArcherPackError` subclasses.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from archer_pack.exceptions import ManifestNotFoundError, NoProjectInWorkspaceError

logger = logging.getLogger(__name__)

PROJECT_DIR_NAME: str = "ecs-project"
SUMMARY_FILE_NAME: str = ".ecs-workspace"
MANIFEST_SUFFIX: str = "-app.yml"


class FileWorkspace:
    """Concrete :class:`~archer_pack.core.protocols.Workspace` on local disk."""

    def __init__(self, root: Path) -> None:
        self.root: Path = root
        self.project_dir: Path = root / PROJECT_DIR_NAME

    def app_names(self) -> list[str]:
        """Return application names, sorted, derived from manifest file names."""
        if not self.project_dir.is_dir():
            return []
        try:
            entries = list(self.project_dir.iterdir())
        except OSError as exc:
            raise ManifestNotFoundError(
                f"list applications in {self.project_dir}: {exc.strerror or exc}",
            ) from exc
        return sorted(
            path.name[: -len(MANIFEST_SUFFIX)]
            for path in entries
            if path.is_file() and path.name.endswith(MANIFEST_SUFFIX)
        )

    def manifest_file_name(self, app_name: str) -> Path:
        return self.project_dir / f"{app_name}{MANIFEST_SUFFIX}"

    def read_manifest_file(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ManifestNotFoundError(
                f"read manifest file {path}: {exc.strerror or exc}",
                hint="Check that the application was initialised in this workspace.",
            ) from exc

    def project_name(self) -> str | None:
        """Return the project recorded in the workspace summary, if any.

        Raises
        ------
        NoProjectInWorkspaceError
            If the summary file exists but cannot be parsed.
        """
        summary = self.project_dir / SUMMARY_FILE_NAME
        if not summary.is_file():
            return None
        try:
            data = yaml.safe_load(summary.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise NoProjectInWorkspaceError(
                f"read workspace summary {summary}: {exc}",
            ) from exc
        if not isinstance(data, dict):
            return None
        project = data.get("project")
        logger.debug("Workspace summary %s names project %r", summary, project)
        return str(project) if project else None
