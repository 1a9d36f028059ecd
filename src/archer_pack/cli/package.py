"""``archer-pack package`` — transform a manifest into a CloudFormation stack.

The command runs as three stages over one set of options:

1. :meth:`PackageAppOpts.ask` — prompt for a missing application or
   environment name.
2. :meth:`PackageAppOpts.validate` — reject unknown names before any
   rendering happens.
3. :meth:`PackageAppOpts.execute` — render the stack template and the
   parameter document, then write them to stdout or to an output
   directory.

Collaborators are injected; the project is an explicit option rather
than ambient state.  Every failure surfaces as an
:class:`~archer_pack.exceptions.ArcherPackError` carrying the stage and
the name involved.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import TextIO

from archer_pack.core.manifest import decode
from archer_pack.core.models import Environment
from archer_pack.core.protocols import EnvironmentStore, Prompter, Workspace
from archer_pack.core.rendering import TemplateRenderer
from archer_pack.exceptions import (
    EnvironmentLookupError,
    NoApplicationsFoundError,
    NoProjectInWorkspaceError,
    OutputIOError,
    PromptError,
    UnknownApplicationError,
)

logger = logging.getLogger(__name__)

APP_NAME_PROMPT: str = "Which application would you like to generate a CloudFormation template for?"
ENV_NAME_PROMPT: str = "Which environment would you like to create this stack for?"


class _DiscardWriter(io.TextIOBase):
    """Text sink that accepts and drops everything written to it."""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        return len(s)


def template_file_name(app_name: str) -> str:
    return f"{app_name}.stack.yml"


def params_file_name(app_name: str, env_name: str) -> str:
    # The suffix is historical; the content is whatever the params template emits.
    return f"{app_name}-{env_name}.params.json"


class PackageAppOpts:
    """Options and collaborators for one packaging run.

    Parameters
    ----------
    workspace, env_store, prompter, renderer:
        Objects satisfying the corresponding protocols.
    project_name:
        The project the workspace belongs to; empty when unknown.
    app_name, env_name:
        Names supplied on the command line; empty to prompt.
    tag:
        Image tag of the application's container image.
    output_dir:
        Directory for the two output files.  When ``None`` the template
        goes to *template_writer* and the parameters are discarded.
    """

    def __init__(
        self,
        *,
        workspace: Workspace,
        env_store: EnvironmentStore,
        prompter: Prompter,
        renderer: TemplateRenderer,
        project_name: str,
        app_name: str = "",
        env_name: str = "",
        tag: str = "latest",
        output_dir: Path | None = None,
        template_writer: TextIO | None = None,
        params_writer: TextIO | None = None,
    ) -> None:
        self.project_name: str = project_name
        self.app_name: str = app_name
        self.env_name: str = env_name
        self.tag: str = tag
        self.output_dir: Path | None = output_dir

        self._ws: Workspace = workspace
        self._env_store: EnvironmentStore = env_store
        self._prompt: Prompter = prompter
        self._renderer: TemplateRenderer = renderer
        self._template_writer: TextIO = template_writer or sys.stdout
        self._params_writer: TextIO = params_writer or _DiscardWriter()

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def ask(self) -> None:
        """Prompt the user for any missing application or environment name.

        Raises
        ------
        NoApplicationsFoundError
            If the workspace has no applications to choose from.
        PromptError
            If the user cancels a selection.
        """
        if not self.app_name:
            names = self._list_app_names()
            if not names:
                raise NoApplicationsFoundError(
                    "there are no applications in the workspace",
                    hint="Run `archer init` first.",
                )
            self.app_name = self._select(APP_NAME_PROMPT, names, "application name")

        if not self.env_name:
            names = self._list_env_names()
            if not names:
                raise EnvironmentLookupError(
                    f"there are no environments in project {self.project_name}",
                    hint="Run `archer env init` first.",
                )
            self.env_name = self._select(ENV_NAME_PROMPT, names, "environment name")

    def validate(self) -> None:
        """Reject options that name unknown applications or environments.

        Raises
        ------
        NoProjectInWorkspaceError
            If no project is associated with the workspace.
        UnknownApplicationError
            If the application is not part of the workspace.
        EnvironmentLookupError
            If the environment cannot be found in the project.
        """
        if not self.project_name:
            raise NoProjectInWorkspaceError(
                "could not find a project attached to this workspace",
                hint="Run `archer init` or set ARCHER_PROJECT.",
            )
        if self.app_name:
            names = self._list_app_names()
            if self.app_name not in names:
                raise UnknownApplicationError(
                    f"application '{self.app_name}' does not exist in the workspace",
                    hint="Available: " + (", ".join(names) or "none"),
                )
        if self.env_name:
            self._env_store.get_environment(self.project_name, self.env_name)

    def execute(self) -> list[Path]:
        """Render the stack for the environment and write both documents.

        Returns
        -------
        list[Path]
            Files written, empty when writing to the default streams.

        Raises
        ------
        ManifestNotFoundError, MalformedManifestError, UnsupportedManifestTypeError
            If the manifest cannot be read or decoded.
        TemplateNotFoundError, TemplateParseError, TemplateExecutionError
            If a document fails to render.
        OutputIOError
            If the output directory or a file cannot be written.
        """
        env = self._env_store.get_environment(self.project_name, self.env_name)
        template, params = self._render(env)

        if self.output_dir is None:
            self._write_stream(self._template_writer, template, "standard output")
            self._write_stream(self._params_writer, params, "parameters sink")
            return []
        return self._write_files(self.output_dir, template, params)

    def run(self) -> list[Path]:
        """Validate flags, prompt for the rest, validate again, then execute."""
        self.validate()
        self.ask()
        self.validate()
        return self.execute()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _select(self, message: str, options: list[str], what: str) -> str:
        try:
            return self._prompt.select_one(message, "", options)
        except PromptError as exc:
            raise PromptError(f"prompt {what}: {exc}", hint=exc.hint) from exc

    def _list_app_names(self) -> list[str]:
        return self._ws.app_names()

    def _list_env_names(self) -> list[str]:
        try:
            envs = self._env_store.list_environments(self.project_name)
        except EnvironmentLookupError as exc:
            raise EnvironmentLookupError(
                f"list environments for project {self.project_name}: {exc}",
                hint=exc.hint,
            ) from exc
        return [env.name for env in envs]

    def _render(self, env: Environment) -> tuple[str, str]:
        """Return the rendered stack template and parameter document."""
        raw = self._ws.read_manifest_file(self._ws.manifest_file_name(self.app_name))
        manifest = decode(raw)
        stack = manifest.stack_config(env, self.tag, self._renderer)
        logger.debug("Packaging stack %s", stack.stack_name())
        return stack.template(), stack.serialized_parameters()

    @staticmethod
    def _write_stream(writer: TextIO, content: str, what: str) -> None:
        try:
            writer.write(content)
            writer.flush()
        except OSError as exc:
            raise OutputIOError(f"write to {what}: {exc}") from exc

    def _write_files(self, output_dir: Path, template: str, params: str) -> list[Path]:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputIOError(
                f"create directory {output_dir}: {exc.strerror or exc}",
            ) from exc

        outputs = [
            (output_dir / template_file_name(self.app_name), template),
            (output_dir / params_file_name(self.app_name, self.env_name), params),
        ]
        written: list[Path] = []
        for path, content in outputs:
            try:
                with path.open("w", encoding="utf-8") as fh:
                    fh.write(content)
            except OSError as exc:
                raise OutputIOError(
                    f"write file {path}: {exc.strerror or exc}",
                    hint=(
                        "Files written before the failure were kept: "
                        + ", ".join(str(p) for p in written)
                    ) if written else None,
                ) from exc
            logger.debug("Wrote %s", path)
            written.append(path)
        return written
