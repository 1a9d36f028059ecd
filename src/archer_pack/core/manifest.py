"""Application manifests and the manifest decoder.

A manifest is a YAML document describing one deployable application.
The ``type`` field selects the variant; today the only supported
variant is the load-balanced Fargate web app::

    name: frontend
    type: Load Balanced Web App
    image:
      build: frontend/Dockerfile
      port: 80
    http:
      path: '*'
    cpu: 256
    memory: 512
    count: 1
    environments:
      prod:
        count: 3

New variants register a decoder in :data:`MANIFEST_DECODERS` and
implement :class:`AppManifest`; nothing downstream switches on type.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Protocol

import yaml

from archer_pack.core.models import Environment
from archer_pack.exceptions import MalformedManifestError, UnsupportedManifestTypeError

if TYPE_CHECKING:
    from archer_pack.core.rendering import TemplateRenderer
    from archer_pack.core.stack import StackConfiguration

logger = logging.getLogger(__name__)

LB_WEB_APP_TYPE: str = "Load Balanced Web App"

DEFAULT_RULE_PATH: str = "*"
DEFAULT_TASK_CPU: int = 256
DEFAULT_TASK_MEMORY: int = 512
DEFAULT_TASK_COUNT: int = 1


class AppManifest(Protocol):
    """Capabilities every manifest variant must provide."""

    name: str
    type: str

    def stack_config(
        self,
        env: Environment,
        image_tag: str,
        renderer: TemplateRenderer,
    ) -> StackConfiguration:
        """Return the CloudFormation stack configuration for *env*."""
        ...  # pragma: no cover


# ---------------------------------------------------------------------------
# Load-balanced Fargate web app
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ImageConfig:
    build: str
    """Docker build context or Dockerfile path."""

    port: int
    """Port the container listens on."""


@dataclass(frozen=True, slots=True)
class LBFargateConfig:
    """Task and routing settings that may be overridden per environment.

    In a base configuration every scalar is set.  In an override only the
    fields present in the manifest are set; the others stay ``None``.
    """

    path: str | None = None
    cpu: int | None = None
    memory: int | None = None
    count: int | None = None
    variables: dict[str, str] = field(default_factory=dict)
    secrets: dict[str, str] = field(default_factory=dict)

    def merged_with(self, override: LBFargateConfig) -> LBFargateConfig:
        """Return a copy where fields set in *override* replace ours."""
        return LBFargateConfig(
            path=override.path if override.path is not None else self.path,
            cpu=override.cpu if override.cpu is not None else self.cpu,
            memory=override.memory if override.memory is not None else self.memory,
            count=override.count if override.count is not None else self.count,
            variables={**self.variables, **override.variables},
            secrets={**self.secrets, **override.secrets},
        )


@dataclass(frozen=True, slots=True)
class LBFargateManifest:
    """A web application served by Fargate tasks behind a load balancer."""

    name: str
    image: ImageConfig
    config: LBFargateConfig
    environments: dict[str, LBFargateConfig] = field(default_factory=dict)
    type: str = LB_WEB_APP_TYPE

    def env_config(self, env_name: str) -> LBFargateConfig:
        """Return the configuration that applies to *env_name*.

        The base configuration is returned unchanged when the manifest
        has no override for the environment.
        """
        override = self.environments.get(env_name)
        if override is None:
            return self.config
        return self.config.merged_with(override)

    def for_env(self, env_name: str) -> LBFargateManifest:
        """Return a copy of the manifest with its config resolved for *env_name*."""
        return replace(self, config=self.env_config(env_name))

    def stack_config(
        self,
        env: Environment,
        image_tag: str,
        renderer: TemplateRenderer,
    ) -> StackConfiguration:
        from archer_pack.core.models import StackInput
        from archer_pack.core.stack import LBFargateStackConfig

        return LBFargateStackConfig(
            StackInput(app=self, env=env, image_tag=image_tag),
            renderer,
        )


# ---------------------------------------------------------------------------
# Field readers (pure)
# ---------------------------------------------------------------------------

def _require_str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise MalformedManifestError(
            f"{where}: field '{key}' must be a non-empty string",
        )
    return value


def _optional_str(data: Mapping[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedManifestError(f"{where}: field '{key}' must be a string")
    return value


def _optional_int(data: Mapping[str, Any], key: str, where: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; "cpu: yes" is not a CPU value.
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedManifestError(f"{where}: field '{key}' must be an integer")
    return value


def _optional_mapping(data: Mapping[str, Any], key: str, where: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedManifestError(f"{where}: field '{key}' must be a mapping")
    return value


def _str_mapping(data: Mapping[str, Any], key: str, where: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for k, v in _optional_mapping(data, key, where).items():
        if v is None:
            # "NAME:" with no value sets an empty variable.
            result[str(k)] = ""
        elif isinstance(v, (dict, list)):
            raise MalformedManifestError(
                f"{where}: value of '{key}.{k}' must be a scalar",
            )
        else:
            result[str(k)] = str(v)
    return result


def _decode_lb_config(data: Mapping[str, Any], where: str) -> LBFargateConfig:
    http = _optional_mapping(data, "http", where)
    return LBFargateConfig(
        path=_optional_str(http, "path", f"{where}.http"),
        cpu=_optional_int(data, "cpu", where),
        memory=_optional_int(data, "memory", where),
        count=_optional_int(data, "count", where),
        variables=_str_mapping(data, "variables", where),
        secrets=_str_mapping(data, "secrets", where),
    )


def _decode_lb_fargate(data: Mapping[str, Any]) -> LBFargateManifest:
    name = _require_str(data, "name", "manifest")
    where = f"manifest '{name}'"

    image = _optional_mapping(data, "image", where)
    port = _optional_int(image, "port", f"{where}.image")
    if port is None:
        raise MalformedManifestError(f"{where}: field 'image.port' is required")

    base = _decode_lb_config(data, where)
    base = LBFargateConfig(
        path=base.path if base.path is not None else DEFAULT_RULE_PATH,
        cpu=base.cpu if base.cpu is not None else DEFAULT_TASK_CPU,
        memory=base.memory if base.memory is not None else DEFAULT_TASK_MEMORY,
        count=base.count if base.count is not None else DEFAULT_TASK_COUNT,
        variables=base.variables,
        secrets=base.secrets,
    )

    overrides: dict[str, LBFargateConfig] = {}
    for env_name, raw in _optional_mapping(data, "environments", where).items():
        env_where = f"{where}.environments.{env_name}"
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise MalformedManifestError(f"{env_where}: must be a mapping")
        overrides[str(env_name)] = _decode_lb_config(raw, env_where)

    return LBFargateManifest(
        name=name,
        image=ImageConfig(build=str(image.get("build") or ""), port=port),
        config=base,
        environments=overrides,
    )


MANIFEST_DECODERS: dict[str, Callable[[Mapping[str, Any]], AppManifest]] = {
    LB_WEB_APP_TYPE: _decode_lb_fargate,
}
"""Known manifest variants keyed by their ``type`` discriminator."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def decode(raw: bytes | str) -> AppManifest:
    """Decode a serialized manifest into its typed variant.

    Raises
    ------
    MalformedManifestError
        If the document is not valid YAML or not shaped like a manifest.
    UnsupportedManifestTypeError
        If the ``type`` discriminator names no known variant.
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MalformedManifestError(f"parse manifest: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedManifestError(
            "parse manifest: document must be a mapping",
        )

    manifest_type = data.get("type")
    decoder = MANIFEST_DECODERS.get(manifest_type) if isinstance(manifest_type, str) else None
    if decoder is None:
        raise UnsupportedManifestTypeError(
            f"manifest type {manifest_type!r} is not supported",
            hint="Supported types: " + ", ".join(sorted(MANIFEST_DECODERS)),
        )

    manifest = decoder(data)
    logger.debug("Decoded manifest %r of type %r", manifest.name, manifest.type)
    return manifest
