"""File-backed environment store.

Environments are read from a YAML document keyed by project, then by
environment name::

    demo:
      test:
        account_id: "123456789012"
        region: us-east-1
      prod:
        account_id: "210987654321"
        region: eu-west-1
        prod: true

The file is parsed on every lookup; the store keeps no state between
calls.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from archer_pack.core.models import Environment
from archer_pack.exceptions import EnvironmentLookupError

logger = logging.getLogger(__name__)


class FileEnvironmentStore:
    """Concrete :class:`~archer_pack.core.protocols.EnvironmentStore`."""

    def __init__(self, path: Path) -> None:
        self.path: Path = path

    def _load(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise EnvironmentLookupError(
                f"read environments file {self.path}: {exc}",
            ) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise EnvironmentLookupError(
                f"read environments file {self.path}: document must be a mapping",
            )
        return data

    def _project_envs(self, project: str) -> dict[str, Any]:
        envs = self._load().get(project) or {}
        if not isinstance(envs, dict):
            raise EnvironmentLookupError(
                f"environments of project {project} must be a mapping",
            )
        return envs

    @staticmethod
    def _to_environment(project: str, name: str, raw: Any) -> Environment:
        if not isinstance(raw, dict):
            raise EnvironmentLookupError(
                f"environment {name} in project {project} must be a mapping",
            )
        account_id = raw.get("account_id")
        region = raw.get("region")
        if not account_id or not region:
            raise EnvironmentLookupError(
                f"environment {name} in project {project} needs account_id and region",
            )
        return Environment(
            project=project,
            name=name,
            account_id=str(account_id),
            region=str(region),
            prod=bool(raw.get("prod", False)),
        )

    def get_environment(self, project: str, env_name: str) -> Environment:
        envs = self._project_envs(project)
        if env_name not in envs:
            raise EnvironmentLookupError(
                f"environment {env_name} does not exist in project {project}",
                hint=f"Known environments are listed in {self.path}",
            )
        env = self._to_environment(project, env_name, envs[env_name])
        logger.debug("Resolved environment %s/%s in %s", project, env_name, env.region)
        return env

    def list_environments(self, project: str) -> list[Environment]:
        envs = self._project_envs(project)
        return [
            self._to_environment(project, str(name), raw)
            for name, raw in envs.items()
        ]
