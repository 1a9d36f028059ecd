"""CLI console helpers with optional Rich support.

This module avoids module-level imports of optional UI dependencies so
bootstrap paths (``--help``, ``--version``) remain functional even when
Rich is not installed.  All console output goes to stderr; stdout is
reserved for rendered templates so ``archer-pack package > stack.yml``
stays clean.
"""

from __future__ import annotations

import sys
from typing import Any

from archer_pack.exceptions import ArcherPackError, DependencyMissingError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``DependencyMissingError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise DependencyMissingError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def escape_markup(text: str) -> str:
    """Escape Rich markup in user-provided text such as paths or YAML snippets."""
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except DependencyMissingError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def error(self, exc: ArcherPackError) -> None:
        """Render a known error and its hint, if any."""
        self.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
        if exc.hint:
            self.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")


console = _ConsoleProxy()
