"""``archer-pack doctor`` — environment diagnostics command.

Gathers the runtime and workspace facts packaging depends on and renders
a Rich table summarising whether they are satisfied.  No business logic
resides here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from archer_pack.cli import exit_codes
from archer_pack.cli.console import console
from archer_pack.config import Settings
from archer_pack.exceptions import ArcherPackError
from archer_pack.infra.git import short_commit_id
from archer_pack.infra.template_store import PackagedTemplateStore
from archer_pack.infra.workspace import FileWorkspace
from archer_pack.version import __version__

Check = tuple[str, str, str]

OK: str = "[green]OK[/green]"
WARN: str = "[yellow]WARN[/yellow]"
FAIL: str = "[red]FAIL[/red]"

BUNDLED_TEMPLATES: tuple[str, ...] = (
    "lb-fargate-service/cf.yml",
    "lb-fargate-service/params.json",
)


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 11)
    return "Python", version, OK if ok else "[red]FAIL (>=3.11 required)[/red]"


def _library_check(label: str, module: str) -> Check:
    """Return (label, version, status) for an importable library."""
    try:
        imported = __import__(module)
    except ImportError:
        return label, "NOT INSTALLED", FAIL
    return label, str(getattr(imported, "__version__", "unknown")), OK


def _optional_library_check(label: str, module: str) -> Check:
    label, value, status = _library_check(label, module)
    return label, value, WARN if status == FAIL else status


def _templates_check() -> Check:
    store = PackagedTemplateStore()
    try:
        for name in BUNDLED_TEMPLATES:
            store.find(name)
    except ArcherPackError as exc:
        return "templates", str(exc), FAIL
    return "templates", f"{len(BUNDLED_TEMPLATES)} bundled", OK


def _git_check() -> Check:
    commit = short_commit_id()
    if commit is None:
        return "git", "no commit (tag defaults to latest)", WARN
    return "git", f"HEAD {commit}", OK


def _workspace_check(settings: Settings) -> Check:
    try:
        apps = FileWorkspace(settings.workspace_root).app_names()
    except ArcherPackError as exc:
        return "workspace", str(exc), FAIL
    if not apps:
        return "workspace", f"no applications in {settings.workspace_root}", WARN
    return "workspace", ", ".join(apps), OK


def _project_check(settings: Settings) -> Check:
    if not settings.project_name:
        return "project", "not set", WARN
    return "project", settings.project_name, OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\narcher-pack doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings never fail.
    """
    checks = [
        ("archer-pack", __version__, OK),
        _python_version_check(),
        _library_check("jinja2", "jinja2"),
        _library_check("pyyaml", "yaml"),
        _optional_library_check("rich", "rich"),
        _optional_library_check("questionary", "questionary"),
        _templates_check(),
        _git_check(),
        _project_check(settings),
        _workspace_check(settings),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="archer-pack doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
