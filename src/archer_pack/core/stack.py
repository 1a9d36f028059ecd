"""CloudFormation stack configuration for packaged applications.

A stack configuration turns a :class:`~archer_pack.core.models.StackInput`
into everything CloudFormation needs: the stack name, the rendered
template, the rendered parameter document, and the structured parameter
and tag lists used when submitting a deployment.

Guarantees
----------
* :func:`build_template_params` is pure — no I/O, inputs never mutated.
* Parameters are recomputed on every call; nothing is cached.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple, Protocol

from archer_pack.core.manifest import LBFargateManifest
from archer_pack.core.models import (
    Environment,
    ImageLocation,
    LBFargateTemplateParams,
    StackInput,
)
from archer_pack.core.priority import allocate_rule_priority
from archer_pack.core.rendering import TemplateRenderer

ECR_URL_FORMAT: str = "{account_id}.dkr.ecr.{region}.amazonaws.com/{location}"

MAX_STACK_NAME_LENGTH: int = 128
"""CloudFormation's limit on stack names."""

LB_FARGATE_TEMPLATE_PATH: str = "lb-fargate-service/cf.yml"
LB_FARGATE_PARAMS_PATH: str = "lb-fargate-service/params.json"

# Parameter keys declared by the lb-fargate-service template.
PROJECT_NAME_PARAM: str = "ProjectName"
ENV_NAME_PARAM: str = "EnvName"
APP_NAME_PARAM: str = "AppName"
CONTAINER_IMAGE_PARAM: str = "ContainerImage"
CONTAINER_PORT_PARAM: str = "ContainerPort"
RULE_PRIORITY_PARAM: str = "RulePriority"
RULE_PATH_PARAM: str = "RulePath"
TASK_CPU_PARAM: str = "TaskCPU"
TASK_MEMORY_PARAM: str = "TaskMemory"
TASK_COUNT_PARAM: str = "TaskCount"

PROJECT_TAG_KEY: str = "ecs-project"
ENV_TAG_KEY: str = "ecs-environment"
APP_TAG_KEY: str = "ecs-application"


class StackParameter(NamedTuple):
    key: str
    value: str


class StackTag(NamedTuple):
    key: str
    value: str


class StackConfiguration(Protocol):
    """What the packaging workflow needs from any application stack."""

    def stack_name(self) -> str: ...  # pragma: no cover

    def template(self) -> str: ...  # pragma: no cover

    def serialized_parameters(self) -> str: ...  # pragma: no cover

    def parameters(self) -> list[StackParameter]: ...  # pragma: no cover

    def tags(self) -> list[StackTag]: ...  # pragma: no cover


# ---------------------------------------------------------------------------
# Pure builders
# ---------------------------------------------------------------------------

def stack_name(env: Environment, app_name: str) -> str:
    """Return ``{project}-{env}-{app}-app``, keeping the last 128 characters."""
    name = f"{env.project}-{env.name}-{app_name}-app"
    if len(name) > MAX_STACK_NAME_LENGTH:
        return name[-MAX_STACK_NAME_LENGTH:]
    return name


def image_url(env: Environment, app_name: str, image_tag: str) -> str:
    """Return the ECR URL of the application's image for *env*."""
    location = f"{env.project}/{env.name}/{app_name}:{image_tag}"
    return ECR_URL_FORMAT.format(
        account_id=env.account_id,
        region=env.region,
        location=location,
    )


def build_template_params(
    app: LBFargateManifest,
    env: Environment,
    image_tag: str,
    *,
    existing_paths: Sequence[str] = (),
) -> LBFargateTemplateParams:
    """Derive the template parameters of *app* deployed to *env*.

    *existing_paths* are the routing paths of other applications sharing
    the environment's load balancer listener; they only influence the
    rule priority.
    """
    resolved = app.for_env(env.name)
    return LBFargateTemplateParams(
        app=resolved,
        env=env,
        image_tag=image_tag,
        image=ImageLocation(
            url=image_url(env, app.name, image_tag),
            port=app.image.port,
        ),
        priority=allocate_rule_priority(resolved.config.path or "*", existing_paths),
    )


# ---------------------------------------------------------------------------
# Load-balanced Fargate stack
# ---------------------------------------------------------------------------

class LBFargateStackConfig:
    """Stack configuration for a load-balanced Fargate application.

    Parameters
    ----------
    stack_input:
        The manifest, environment and image tag to package.
    renderer:
        Renderer bound to the store holding the lb-fargate-service templates.
    existing_paths:
        Routing paths already claimed on the environment's listener.
    """

    def __init__(
        self,
        stack_input: StackInput,
        renderer: TemplateRenderer,
        *,
        existing_paths: Sequence[str] = (),
    ) -> None:
        self._input: StackInput = stack_input
        self._renderer: TemplateRenderer = renderer
        self._existing_paths: tuple[str, ...] = tuple(existing_paths)

    @property
    def app(self) -> LBFargateManifest:
        return self._input.app

    @property
    def env(self) -> Environment:
        return self._input.env

    def stack_name(self) -> str:
        return stack_name(self.env, self.app.name)

    def template(self) -> str:
        """Return the CloudFormation template parametrized for the environment."""
        return self._renderer.render(LB_FARGATE_TEMPLATE_PATH, self._template_params())

    def serialized_parameters(self) -> str:
        """Return the stack parameters as a commented YAML document."""
        return self._renderer.render(LB_FARGATE_PARAMS_PATH, self._template_params())

    def parameters(self) -> list[StackParameter]:
        """Return the CloudFormation parameters used by the template."""
        params = self._template_params()
        config = params.app.config
        return [
            StackParameter(PROJECT_NAME_PARAM, params.env.project),
            StackParameter(ENV_NAME_PARAM, params.env.name),
            StackParameter(APP_NAME_PARAM, params.app.name),
            StackParameter(CONTAINER_IMAGE_PARAM, params.image.url),
            StackParameter(CONTAINER_PORT_PARAM, str(params.image.port)),
            StackParameter(RULE_PRIORITY_PARAM, str(params.priority)),
            StackParameter(RULE_PATH_PARAM, str(config.path)),
            StackParameter(TASK_CPU_PARAM, str(config.cpu)),
            StackParameter(TASK_MEMORY_PARAM, str(config.memory)),
            StackParameter(TASK_COUNT_PARAM, str(config.count)),
        ]

    def tags(self) -> list[StackTag]:
        """Return the tags to apply to the CloudFormation stack."""
        return [
            StackTag(PROJECT_TAG_KEY, self.env.project),
            StackTag(ENV_TAG_KEY, self.env.name),
            StackTag(APP_TAG_KEY, self.app.name),
        ]

    def _template_params(self) -> LBFargateTemplateParams:
        return build_template_params(
            self.app,
            self.env,
            self._input.image_tag,
            existing_paths=self._existing_paths,
        )
