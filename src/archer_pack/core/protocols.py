"""Protocols (interfaces) consumed by the core and CLI layers.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from archer_pack.core.models import Environment


class Workspace(Protocol):
    """Contract for the local workspace holding application manifests."""

    def app_names(self) -> list[str]:
        """Return the names of all applications in the workspace."""
        ...  # pragma: no cover

    def manifest_file_name(self, app_name: str) -> Path:
        """Return the path of the manifest for *app_name*."""
        ...  # pragma: no cover

    def read_manifest_file(self, path: Path) -> bytes:
        """Return the raw contents of the manifest at *path*.

        Raises
        ------
        ManifestNotFoundError
            When the file does not exist or cannot be read.
        """
        ...  # pragma: no cover


class EnvironmentStore(Protocol):
    """Contract for the store of a project's environments.

    Implementations must map all backend-specific exceptions to
    :class:`~archer_pack.exceptions.EnvironmentLookupError`.
    """

    def get_environment(self, project: str, env_name: str) -> Environment:
        ...  # pragma: no cover

    def list_environments(self, project: str) -> list[Environment]:
        ...  # pragma: no cover


class Prompter(Protocol):
    """Contract for interactive single-choice selection."""

    def select_one(self, message: str, default: str, options: Sequence[str]) -> str:
        """Ask the user to pick one of *options* and return it.

        Raises
        ------
        PromptError
            When the user cancels the selection.
        """
        ...  # pragma: no cover


class TemplateStore(Protocol):
    """Contract for a read-only lookup of template bodies by name."""

    def find(self, name: str) -> str:
        """Return the template body registered under *name*.

        Raises
        ------
        TemplateNotFoundError
            When no template is registered under *name*.
        """
        ...  # pragma: no cover
