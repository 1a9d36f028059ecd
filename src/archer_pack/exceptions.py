"""Custom exception hierarchy for archer-pack.

All exceptions that cross layer boundaries must inherit from
:class:`ArcherPackError`.  Raw third-party exceptions (PyYAML, Jinja2,
``OSError``) must NEVER propagate beyond the layer that triggered them —
they must be caught and re-raised as a typed subclass defined here,
with the operation context in the message.

Hierarchy
---------
ArcherPackError
├── MalformedManifestError
├── UnsupportedManifestTypeError
├── ManifestNotFoundError
├── NoProjectInWorkspaceError
├── NoApplicationsFoundError
├── UnknownApplicationError
├── EnvironmentLookupError
├── TemplateNotFoundError
├── TemplateParseError
├── TemplateExecutionError
├── RulePriorityError
├── OutputIOError
├── PromptError
└── DependencyMissingError
"""

from __future__ import annotations


class ArcherPackError(Exception):
    """Base exception for all archer-pack errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Manifest --------------------------------------------------------------

class MalformedManifestError(ArcherPackError):
    """Raised when a manifest cannot be parsed into a known shape."""


class UnsupportedManifestTypeError(ArcherPackError):
    """Raised when the manifest ``type`` discriminator is not recognised."""


class ManifestNotFoundError(ArcherPackError):
    """Raised when an application's manifest file cannot be read."""


# --- Workspace / validation ------------------------------------------------

class NoProjectInWorkspaceError(ArcherPackError):
    """Raised when no project is associated with the current workspace."""


class NoApplicationsFoundError(ArcherPackError):
    """Raised when the workspace contains zero applications."""


class UnknownApplicationError(ArcherPackError):
    """Raised when a requested application is not in the workspace."""


class EnvironmentLookupError(ArcherPackError):
    """Raised when an environment cannot be found or listed."""


# --- Templates -------------------------------------------------------------

class TemplateNotFoundError(ArcherPackError):
    """Raised when the template store has no entry for a name."""


class TemplateParseError(ArcherPackError):
    """Raised when a template body is syntactically invalid."""


class TemplateExecutionError(ArcherPackError):
    """Raised when a template fails while rendering (e.g. missing field)."""


# --- Routing ---------------------------------------------------------------

class RulePriorityError(ArcherPackError):
    """Raised when no listener-rule priority can be allocated for a path."""


# --- Output / interaction --------------------------------------------------

class OutputIOError(ArcherPackError):
    """Raised when an output directory or file cannot be created or written."""


class PromptError(ArcherPackError):
    """Raised when an interactive selection is cancelled or fails."""


class DependencyMissingError(ArcherPackError):
    """Raised when an optional runtime library is not installed."""
