"""``python -m archer_pack`` runs the same entry point as the ``archer-pack`` script."""

from __future__ import annotations

from archer_pack.cli.app import cli

if __name__ == "__main__":
    cli()
