"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from archer_pack import __version__
from archer_pack.cli import exit_codes
from archer_pack.cli.app import cli, main
from archer_pack.exceptions import (
    ArcherPackError,
    DependencyMissingError,
    EnvironmentLookupError,
    MalformedManifestError,
    ManifestNotFoundError,
    NoApplicationsFoundError,
    NoProjectInWorkspaceError,
    OutputIOError,
    PromptError,
    RulePriorityError,
    TemplateExecutionError,
    TemplateNotFoundError,
    TemplateParseError,
    UnknownApplicationError,
    UnsupportedManifestTypeError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            MalformedManifestError,
            UnsupportedManifestTypeError,
            ManifestNotFoundError,
            NoProjectInWorkspaceError,
            NoApplicationsFoundError,
            UnknownApplicationError,
            EnvironmentLookupError,
            TemplateNotFoundError,
            TemplateParseError,
            TemplateExecutionError,
            RulePriorityError,
            OutputIOError,
            PromptError,
            DependencyMissingError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[ArcherPackError]
    ) -> None:
        assert issubclass(exc_class, ArcherPackError)

    def test_hint_is_stored(self) -> None:
        err = ArcherPackError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert ArcherPackError("boom").hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_values(self) -> None:
        assert exit_codes.SUCCESS == 0
        assert exit_codes.GENERAL_ERROR == 1
        assert exit_codes.UNEXPECTED_ERROR == 2
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_prints_help(self) -> None:
        assert main([]) == exit_codes.SUCCESS

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_package_help(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["package", "--help"])
        assert exc_info.value.code == 0

    @patch("archer_pack.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: object) -> None:
        assert main(["doctor"]) == exit_codes.SUCCESS

    def test_package_routes_with_flags(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from archer_pack.cli import app as app_module

        seen = {}

        def fake_handle(args: object) -> int:
            seen["args"] = args
            return exit_codes.SUCCESS

        monkeypatch.setattr(app_module, "_handle_package", fake_handle)
        code = main(["package", "-n", "frontend", "-e", "test", "--tag", "v1"])
        assert code == exit_codes.SUCCESS
        args = seen["args"]
        assert (args.name, args.env, args.tag, args.output_dir) == (
            "frontend", "test", "v1", None,
        )


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    @patch("archer_pack.cli.app.main", side_effect=UnknownApplicationError("nope"))
    def test_known_error_exits_general(self, _mock_main: object) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR

    @patch("archer_pack.cli.app.main", side_effect=KeyboardInterrupt)
    def test_ctrl_c(self, _mock_main: object) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    @patch("archer_pack.cli.app.main", side_effect=RuntimeError("bug"))
    def test_unexpected_error(self, _mock_main: object) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR

    @patch("archer_pack.cli.app.main", return_value=exit_codes.SUCCESS)
    def test_success(self, _mock_main: object) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS
