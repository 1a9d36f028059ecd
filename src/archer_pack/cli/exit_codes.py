"""Process exit codes returned by ``archer-pack``.

Scripts wrapping ``archer-pack package`` can tell a bad manifest or
unknown name (``GENERAL_ERROR``) apart from a crash
(``UNEXPECTED_ERROR``).
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command finished; for ``package``, the documents were emitted."""

GENERAL_ERROR: int = 1
"""An :class:`~archer_pack.exceptions.ArcherPackError` was reported, or doctor found a failing check."""

UNEXPECTED_ERROR: int = 2
"""Any other exception reached :func:`archer_pack.cli.app.cli`."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""
