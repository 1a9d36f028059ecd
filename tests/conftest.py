"""Shared pytest fixtures and configuration for the archer-pack test suite.

Guidelines
----------
* No network access and no AWS calls in any test.
* Prompts are mocked at the :class:`Prompter` seam.
* Core tests must be pure — templates come from an in-memory store.
* Filesystem tests use ``tmp_path`` only.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from archer_pack.core.models import Environment
from archer_pack.exceptions import TemplateNotFoundError

FRONTEND_MANIFEST: str = """\
name: frontend
type: Load Balanced Web App
image:
  build: frontend/Dockerfile
  port: 80
cpu: 256
memory: 512
count: 1
"""


class DictTemplateStore:
    """In-memory :class:`TemplateStore` used in place of package data."""

    def __init__(self, templates: dict[str, str]) -> None:
        self.templates = dict(templates)
        self.lookups: list[str] = []

    def find(self, name: str) -> str:
        self.lookups.append(name)
        try:
            return self.templates[name]
        except KeyError as exc:
            raise TemplateNotFoundError(f"template {name} not found") from exc


@pytest.fixture
def test_env() -> Environment:
    return Environment(project="demo", name="test", account_id="123", region="us-east-1")


@pytest.fixture
def frontend_manifest_text() -> str:
    return FRONTEND_MANIFEST


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """A workspace with one application, a project summary and environments."""
    project_dir = tmp_path / "ecs-project"
    project_dir.mkdir()
    (project_dir / ".ecs-workspace").write_text("project: demo\n", encoding="utf-8")
    (project_dir / "frontend-app.yml").write_text(FRONTEND_MANIFEST, encoding="utf-8")
    (project_dir / "environments.yml").write_text(
        "demo:\n"
        "  test:\n"
        "    account_id: '123'\n"
        "    region: us-east-1\n"
        "  prod:\n"
        "    account_id: '456'\n"
        "    region: eu-west-1\n"
        "    prod: true\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def make_store() -> type[DictTemplateStore]:
    return DictTemplateStore
