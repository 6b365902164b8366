"""
Tests for the click CLI.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from architect.main import cli
from tests.conftest import POST_DRAFT


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "architect.yml").write_text("stack: inertia-react\nledger_persist_backoff: 0\n")
    (tmp_path / "draft.yaml").write_text(POST_DRAFT)
    return tmp_path.resolve()


def _invoke(project: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(project / "architect.yml"), *args], obj={})


class TestGlobalOptions:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_missing_config(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.yml"), "validate"], obj={})
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestBuildCommand:
    def test_build_then_noop(self, project: Path):
        result = _invoke(project, "build")
        assert result.exit_code == 0, result.output
        assert "Build complete: 9 written" in result.output
        assert (project / "app/Models/Post.php").is_file()

        again = _invoke(project, "build")
        assert again.exit_code == 0
        assert "No changes since the last build" in again.output

    def test_build_json(self, project: Path):
        result = _invoke(project, "build", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["success"] is True
        assert len(data["generated"]) == 9
        assert "backup" not in data

    def test_build_only(self, project: Path):
        result = _invoke(project, "build", "--only", "model,migration")
        assert result.exit_code == 0
        assert "Build complete: 2 written" in result.output

    def test_build_unknown_generator(self, project: Path):
        result = _invoke(project, "build", "--only", "bogus")
        assert result.exit_code == 1
        assert "Build failed" in result.output
        assert "Unknown generator 'bogus'" in result.output

    def test_build_shows_ownership_warnings(self, project: Path):
        _invoke(project, "build")
        (project / "draft.yaml").write_text(POST_DRAFT + "    summary: text\n")

        result = _invoke(project, "build")
        assert result.exit_code == 0
        assert "Warnings:" in result.output
        assert "scaffold_only" in result.output

    def test_build_missing_draft(self, project: Path):
        (project / "draft.yaml").unlink()
        result = _invoke(project, "build")
        assert result.exit_code == 1
        assert "Draft file not found" in result.output


class TestPlanAndValidate:
    def test_plan(self, project: Path):
        result = _invoke(project, "plan")
        assert result.exit_code == 0
        assert "Plan for" in result.output
        assert "app/Models/Post.php  (new)" in result.output
        assert not (project / "app").exists()

    def test_plan_after_build(self, project: Path):
        _invoke(project, "build")
        result = _invoke(project, "plan")
        assert "a build would do nothing" in result.output

    def test_plan_json(self, project: Path):
        data = json.loads(_invoke(project, "plan", "--json", "--only", "model").output)
        assert data["success"] is True
        assert [a["decision"] for a in data["actions"]] == ["write"]

    def test_validate(self, project: Path):
        result = _invoke(project, "validate")
        assert result.exit_code == 0
        assert "Draft is valid" in result.output

    def test_validate_invalid(self, project: Path):
        (project / "bad.yaml").write_text("schema_version: '1.0'\n")
        result = _invoke(project, "validate", "bad.yaml")
        assert result.exit_code == 1
        assert "at least one of: models, actions, pages" in result.output

    def test_validate_json(self, project: Path):
        data = json.loads(_invoke(project, "validate", "--json").output)
        assert data == {"valid": True, "errors": []}


class TestStatusRevertDraft:
    def test_status(self, project: Path):
        _invoke(project, "build")
        result = _invoke(project, "status")
        assert result.exit_code == 0
        assert "Files: 9" in result.output
        assert "(up to date)" in result.output

    def test_status_json(self, project: Path):
        _invoke(project, "build")
        data = json.loads(_invoke(project, "status", "--json").output)
        assert data["files"] == 9
        assert data["draft_changed"] is False
        assert data["revertible"] == 9
        assert [b["status"] for b in data["recent_builds"]] == ["ok"]

    def test_revert(self, project: Path):
        _invoke(project, "build")
        result = _invoke(project, "revert")
        assert result.exit_code == 0
        assert not (project / "app/Models/Post.php").exists()

        again = _invoke(project, "revert")
        assert "Nothing to revert." in again.output

    def test_draft_to_stdout(self, project: Path):
        result = _invoke(project, "draft", "invoice tracker")
        assert result.exit_code == 0
        assert "Invoice:" in result.output

    def test_draft_to_file(self, project: Path):
        result = _invoke(project, "draft", "invoice tracker", "-o", "new.yaml")
        assert result.exit_code == 0
        assert "Draft written to" in result.output
        assert "CreateInvoice" in (project / "new.yaml").read_text()
