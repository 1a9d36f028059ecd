"""Argument parsing, command dispatch and the process error boundary.

:func:`main` parses arguments, configures logging and hands off to a
command handler.  Handlers build the infrastructure adapters from
:class:`~archer_pack.config.Settings` and pass them into the packaging
workflow, which holds the actual logic.

:func:`cli` is the only place that turns exceptions into exit codes.
Unrecognised exceptions are reported as unexpected errors; their
traceback is logged at debug level.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from archer_pack.cli import exit_codes
from archer_pack.cli.console import console, escape_markup
from archer_pack.exceptions import ArcherPackError
from archer_pack.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Supported commands:
    * ``archer-pack package [-n APP] [-e ENV] [--tag TAG] [--output-dir DIR]``
    * ``archer-pack doctor``
    * ``archer-pack --version``
    """
    parser = argparse.ArgumentParser(
        prog="archer-pack",
        description="Package container applications into AWS CloudFormation stacks.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )
    commands = parser.add_subparsers(dest="command")

    package = commands.add_parser(
        "package",
        help="Print the CloudFormation template of an application.",
        description=(
            "Prints the CloudFormation template used to deploy an application "
            "to an environment."
        ),
        epilog=(
            "examples:\n"
            "  archer-pack package -n frontend -e test\n"
            "  archer-pack package -n frontend -e test --output-dir ./infrastructure"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    package.add_argument("-n", "--name", default="", help="Name of the application.")
    package.add_argument("-e", "--env", default="", help="Name of the environment.")
    package.add_argument(
        "--tag",
        default=None,
        help="Optional. The application's image tag. Defaults to your latest git commit's hash.",
    )
    package.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Optional. Writes the stack template and template configuration to a directory.",
    )

    commands.add_parser("doctor", help="Check the runtime environment and workspace.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_package(args: argparse.Namespace) -> int:
    """Dispatch ``package``.

    Flow:
    1. Resolve settings and instantiate infra adapters.
    2. Validate flags, prompt for missing names, validate again.
    3. Render both documents and write them.
    """
    from archer_pack.cli.package import PackageAppOpts
    from archer_pack.cli.prompt import QuestionaryPrompter
    from archer_pack.config import load_settings
    from archer_pack.core.rendering import TemplateRenderer
    from archer_pack.infra.env_store import FileEnvironmentStore
    from archer_pack.infra.git import default_image_tag
    from archer_pack.infra.template_store import PackagedTemplateStore
    from archer_pack.infra.workspace import FileWorkspace

    settings = load_settings()
    opts = PackageAppOpts(
        workspace=FileWorkspace(settings.workspace_root),
        env_store=FileEnvironmentStore(settings.environments_file),
        prompter=QuestionaryPrompter(),
        renderer=TemplateRenderer(PackagedTemplateStore()),
        project_name=settings.project_name,
        app_name=args.name,
        env_name=args.env,
        tag=args.tag or default_image_tag(settings.workspace_root),
        output_dir=args.output_dir,
    )
    written = opts.run()

    for path in written:
        console.print(f"[green]Wrote[/green] {escape_markup(str(path))}")
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from archer_pack.cli.doctor import run_doctor
    from archer_pack.config import load_settings

    return run_doctor(load_settings())


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the archer-pack CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor()

    return _handle_package(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ArcherPackError as exc:
        console.error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unexpected error", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
