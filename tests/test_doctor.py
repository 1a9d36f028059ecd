"""Tests for the ``archer-pack doctor`` command (cli/doctor.py).

git is mocked; the workspace is a ``tmp_path`` tree.

Coverage:
* Individual check functions return (label, value, status) tuples.
* Doctor returns SUCCESS when nothing fails, even with warnings.
* Doctor returns GENERAL_ERROR when a required check fails.
* The plain-text table is used when Rich is unavailable.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from archer_pack.cli import exit_codes
from archer_pack.config import Settings


def _settings(root: Path, project: str = "demo") -> Settings:
    return Settings(
        workspace_root=root,
        project_name=project,
        environments_file=root / "ecs-project" / "environments.yml",
    )


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from archer_pack.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status or "FAIL" in status


class TestLibraryCheck:
    def test_installed(self) -> None:
        from archer_pack.cli.doctor import _library_check

        label, value, status = _library_check("jinja2", "jinja2")
        assert label == "jinja2"
        assert "OK" in status

    @patch.dict("sys.modules", {"yaml": None})
    def test_not_installed(self) -> None:
        from archer_pack.cli.doctor import _library_check

        _label, value, status = _library_check("pyyaml", "yaml")
        assert value == "NOT INSTALLED"
        assert "FAIL" in status

    @patch.dict("sys.modules", {"questionary": None})
    def test_optional_library_only_warns(self) -> None:
        from archer_pack.cli.doctor import _optional_library_check

        _label, _value, status = _optional_library_check("questionary", "questionary")
        assert "WARN" in status


class TestTemplatesCheck:
    def test_bundled_templates_found(self) -> None:
        from archer_pack.cli.doctor import _templates_check

        label, value, status = _templates_check()
        assert label == "templates"
        assert value == "2 bundled"
        assert "OK" in status


class TestGitCheck:
    @patch("archer_pack.cli.doctor.short_commit_id", return_value="abc1234")
    def test_commit(self, _mock_commit: MagicMock) -> None:
        from archer_pack.cli.doctor import _git_check

        _label, value, status = _git_check()
        assert value == "HEAD abc1234"
        assert "OK" in status

    @patch("archer_pack.cli.doctor.short_commit_id", return_value=None)
    def test_no_commit(self, _mock_commit: MagicMock) -> None:
        from archer_pack.cli.doctor import _git_check

        _label, value, status = _git_check()
        assert "latest" in value
        assert "WARN" in status


class TestWorkspaceChecks:
    def test_workspace_lists_applications(self, workspace_root: Path) -> None:
        from archer_pack.cli.doctor import _workspace_check

        _label, value, status = _workspace_check(_settings(workspace_root))
        assert value == "frontend"
        assert "OK" in status

    def test_empty_workspace_warns(self, tmp_path: Path) -> None:
        from archer_pack.cli.doctor import _workspace_check

        _label, _value, status = _workspace_check(_settings(tmp_path))
        assert "WARN" in status

    def test_missing_project_warns(self, tmp_path: Path) -> None:
        from archer_pack.cli.doctor import _project_check

        _label, value, status = _project_check(_settings(tmp_path, project=""))
        assert value == "not set"
        assert "WARN" in status


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @patch("archer_pack.cli.doctor.short_commit_id", return_value="abc1234")
    def test_all_pass_returns_success(self, _mock_commit: MagicMock, workspace_root: Path) -> None:
        from archer_pack.cli.doctor import run_doctor

        assert run_doctor(_settings(workspace_root)) == exit_codes.SUCCESS

    @patch("archer_pack.cli.doctor.short_commit_id", return_value=None)
    def test_warnings_still_succeed(self, _mock_commit: MagicMock, tmp_path: Path) -> None:
        from archer_pack.cli.doctor import run_doctor

        assert run_doctor(_settings(tmp_path, project="")) == exit_codes.SUCCESS

    @patch("archer_pack.cli.doctor.short_commit_id", return_value="abc1234")
    @patch("archer_pack.cli.doctor._templates_check", return_value=("templates", "missing", "[red]FAIL[/red]"))
    def test_failure_returns_general_error(
        self, _mock_templates: MagicMock, _mock_commit: MagicMock, workspace_root: Path,
    ) -> None:
        from archer_pack.cli.doctor import run_doctor

        assert run_doctor(_settings(workspace_root)) == exit_codes.GENERAL_ERROR

    @patch("archer_pack.cli.doctor.short_commit_id", return_value="abc1234")
    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_plain_output(
        self,
        _mock_commit: MagicMock,
        workspace_root: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from archer_pack.cli.doctor import run_doctor

        code = run_doctor(_settings(workspace_root))

        captured = capsys.readouterr()
        assert code == exit_codes.SUCCESS
        assert "archer-pack doctor" in captured.err
        assert "frontend" in captured.err
        assert "All checks passed." in captured.err
        assert captured.out == ""
