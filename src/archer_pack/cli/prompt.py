"""Interactive selection prompts for the CLI layer.

Implements the :class:`~archer_pack.core.protocols.Prompter` protocol on
top of questionary's arrow-key ``select``.  questionary is imported
lazily so that non-interactive runs (every name passed as a flag) never
need it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from archer_pack.exceptions import DependencyMissingError, PromptError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise DependencyMissingError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryPrompter:
    """Concrete :class:`~archer_pack.core.protocols.Prompter`."""

    def select_one(self, message: str, default: str, options: Sequence[str]) -> str:
        """Prompt for one of *options*; *default* is preselected when listed.

        Raises
        ------
        PromptError
            If there is nothing to choose from or the user cancels (Esc).
        KeyboardInterrupt
            If the user presses Ctrl+C during selection.
        """
        if not options:
            raise PromptError(f"{message} There are no options to choose from.")

        questionary = _import_questionary()
        selected: str | None = questionary.select(
            message,
            choices=list(options),
            default=default if default in options else None,
            use_arrow_keys=True,
            use_shortcuts=False,
        ).ask()  # Returns None on Ctrl+C / Esc

        if selected is None:
            raise PromptError(
                "No option selected.",
                hint="Use arrow keys to pick an option, then press Enter.",
            )
        return selected
