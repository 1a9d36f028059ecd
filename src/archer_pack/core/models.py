"""Domain models for archer-pack.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  Manifest variants live in
:mod:`archer_pack.core.manifest`; this module holds the records shared
by every variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Environment:
    """A deployment environment owned by a project."""

    project: str
    """Name of the project the environment belongs to."""

    name: str
    """Environment name (e.g. ``test``, ``prod``)."""

    account_id: str
    """AWS account hosting the environment."""

    region: str
    """AWS region hosting the environment."""

    prod: bool = False
    """Whether the environment serves production traffic."""


# ---------------------------------------------------------------------------
# Stack input and derived template parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StackInput:
    """Everything needed to package one application for one environment."""

    app: Any
    """The decoded application manifest."""

    env: Environment

    image_tag: str


@dataclass(frozen=True, slots=True)
class ImageLocation:
    """Fully-qualified container image reference plus the exposed port."""

    url: str
    port: int


@dataclass(frozen=True, slots=True)
class LBFargateTemplateParams:
    """Data used to render the load-balanced Fargate stack templates.

    ``app`` is the manifest with its configuration already resolved for
    ``env``.  Templates reach fields through dotted lookup, e.g.
    ``{{ app.config.cpu }}`` or ``{{ image.url }}``.
    """

    app: Any
    env: Environment
    image_tag: str
    image: ImageLocation

    priority: int
    """Listener rule priority; lower values are evaluated first."""
