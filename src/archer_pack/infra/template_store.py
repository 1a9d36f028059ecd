"""Read-only template store backed by the package's bundled templates.

Templates ship as package data under ``archer_pack/templates`` and are
addressed by ``/``-separated names relative to that directory (e.g.
``lb-fargate-service/cf.yml``).  They are read through
:mod:`importlib.resources`, so the store works from wheels and zip
imports alike.
"""

from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable

from archer_pack.exceptions import TemplateNotFoundError

logger = logging.getLogger(__name__)

TEMPLATES_PACKAGE: str = "archer_pack"
TEMPLATES_DIR: str = "templates"


class PackagedTemplateStore:
    """Concrete :class:`~archer_pack.core.protocols.TemplateStore`.

    Each template is read at most once per store instance; there is no
    writer, so the cache needs no invalidation.
    """

    def __init__(self, package: str = TEMPLATES_PACKAGE) -> None:
        self._package: str = package
        self._cache: dict[str, str] = {}

    def _locate(self, name: str) -> Traversable:
        parts = [part for part in name.split("/") if part]
        if not parts or any(part in (".", "..") for part in parts):
            raise TemplateNotFoundError(f"invalid template name {name!r}")
        node = resources.files(self._package).joinpath(TEMPLATES_DIR)
        for part in parts:
            node = node.joinpath(part)
        return node

    def find(self, name: str) -> str:
        """Return the body of the bundled template *name*.

        Raises
        ------
        TemplateNotFoundError
            If no bundled template is called *name*.
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        node = self._locate(name)
        try:
            if not node.is_file():
                raise FileNotFoundError(name)
            content = node.read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateNotFoundError(
                f"template {name} not found in package {self._package}",
            ) from exc

        logger.debug("Loaded bundled template %s", name)
        self._cache[name] = content
        return content
