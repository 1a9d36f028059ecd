"""Template rendering against an injected, read-only template store.

Templates use Jinja2 syntax and are rendered with
:class:`jinja2.StrictUndefined`: referencing a field the parameters do
not carry fails the whole render instead of emitting an empty string.

Guarantees
----------
* No filesystem access — template bodies come from a
  :class:`~archer_pack.core.protocols.TemplateStore`.
* Only :class:`~archer_pack.exceptions.ArcherPackError` subclasses escape.
* No partial output: a render either returns the full text or raises.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError

from archer_pack.core.protocols import TemplateStore
from archer_pack.exceptions import TemplateExecutionError, TemplateParseError

logger = logging.getLogger(__name__)


def _as_context(params: Any) -> dict[str, Any]:
    """Expose the top-level fields of *params* as template variables."""
    if isinstance(params, Mapping):
        return dict(params)
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        # Nested dataclasses stay objects; templates reach them by attribute.
        return {f.name: getattr(params, f.name) for f in dataclasses.fields(params)}
    raise TypeError(f"cannot render with parameters of type {type(params).__name__}")


class TemplateRenderer:
    """Render named templates from a :class:`TemplateStore`.

    Parameters
    ----------
    store:
        Any object satisfying the :class:`TemplateStore` protocol.
    """

    def __init__(self, store: TemplateStore) -> None:
        self._store: TemplateStore = store
        self._env = Environment(
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def render(self, template_name: str, params: Any) -> str:
        """Render *template_name* with *params*.

        Raises
        ------
        TemplateNotFoundError
            If the store has no template named *template_name*.
        TemplateParseError
            If the template body is not valid template syntax.
        TemplateExecutionError
            If rendering fails, e.g. on a missing field.
        """
        source = self._store.find(template_name)

        try:
            template = self._env.from_string(source)
        except TemplateSyntaxError as exc:
            raise TemplateParseError(
                f"parse template {template_name} (line {exc.lineno}): {exc.message}",
            ) from exc

        try:
            text = template.render(_as_context(params))
        except (TemplateError, TypeError, ValueError) as exc:
            raise TemplateExecutionError(
                f"execute template {template_name}: {exc}",
            ) from exc

        logger.debug("Rendered template %s (%d bytes)", template_name, len(text))
        return text
