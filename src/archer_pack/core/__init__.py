"""Core layer — manifests, parameter building and template rendering.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; templates arrive through a
  :class:`~archer_pack.core.protocols.TemplateStore`.
* No imports from ``cli`` or ``infra``.
* Builders are deterministic and never mutate their inputs.
"""

from archer_pack.core.manifest import AppManifest, LBFargateManifest, decode
from archer_pack.core.models import Environment, StackInput
from archer_pack.core.protocols import EnvironmentStore, Prompter, TemplateStore, Workspace
from archer_pack.core.rendering import TemplateRenderer
from archer_pack.core.stack import LBFargateStackConfig, StackConfiguration, build_template_params

__all__: list[str] = [
    "AppManifest",
    "Environment",
    "EnvironmentStore",
    "LBFargateManifest",
    "LBFargateStackConfig",
    "Prompter",
    "StackConfiguration",
    "StackInput",
    "TemplateRenderer",
    "TemplateStore",
    "Workspace",
    "build_template_params",
    "decode",
]
