from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from relgit import __version__
from relgit.cli.app import app
from relgit.cli.context import CLIContext
from relgit.core.errors import ErrorCode
from relgit.core.result import Ok, Result
from relgit.output.console import MockConsole
from relgit.platform.process import CommandResult
from relgit.release.model import (
    Artifact,
    ArtifactId,
    Project,
    Publication,
    PublishWorkflow,
)
from relgit.release.transport import PublishError
from relgit.release.version import Version

runner = CliRunner()


class _Git:
    def __init__(self, *, porcelain: str = "", tags: tuple[str, ...] = ()) -> None:
        self.porcelain = porcelain
        self.tags = set(tags)
        self.tagged: list[str] = []

    def pull(self) -> CommandResult:
        return CommandResult(("git", "pull"), 0, "Already up to date.")

    def fetch_tags(self) -> CommandResult:
        return CommandResult(("git", "fetch"), 0, "")

    def status(self, flag: str) -> CommandResult:
        text = "## main...origin/main" if flag == "-sb" else self.porcelain
        return CommandResult(("git", "status", flag), 0, text)

    def tag(self, name: str, message: str) -> CommandResult:
        self.tagged.append(name)
        return CommandResult(("git", "tag"), 0, "")

    def list_tags(self, pattern: str) -> CommandResult:
        listed = "\n".join(t for t in self.tags if t == pattern)
        return CommandResult(("git", "tag", "--list", pattern), 0, listed)


class _Transport:
    def publish(
        self, publication: Publication, workflow: PublishWorkflow
    ) -> Result[tuple[Path, ...], PublishError]:
        return Ok((workflow.repository / publication.file.name,))


def _install(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, git: _Git, *, workflow: bool = True
) -> MockConsole:
    import relgit.cli.commands.release_cmd as release_cmd

    (tmp_path / ".git").mkdir(exist_ok=True)
    artifact = Artifact(ArtifactId("org.example", "demo"), Version(2, 0, 0))
    project = Project(
        root=tmp_path,
        artifact=artifact,
        publish_workflow=PublishWorkflow("release", tmp_path / "repo") if workflow else None,
        publications=(Publication("demo", artifact, tmp_path / "demo-2.0.0.jar"),),
    )
    console = MockConsole()
    ctx = CLIContext(project=project, git=git, transport=_Transport(), console=console)
    monkeypatch.setattr(release_cmd, "build_context", lambda project_dir: ctx)
    return console


def test_release_success(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    git = _Git()
    console = _install(monkeypatch, tmp_path, git)

    result = runner.invoke(app, ["release", "--project-dir", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert git.tagged == ["2.0.0"]
    assert console.find("released demo 2.0.0")
    assert console.find(str(tmp_path / "repo" / "demo-2.0.0.jar"))


def test_release_dirty_exits_with_user_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    git = _Git(porcelain=" M file.txt")
    console = _install(monkeypatch, tmp_path, git)

    result = runner.invoke(app, ["release"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert git.tagged == []
    assert console.has_error()
    assert console.find("hint: Commit or stash")


def test_missing_workflow_exits_with_env_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    _install(monkeypatch, tmp_path, _Git(), workflow=False)

    result = runner.invoke(app, ["release"])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_check_is_a_dry_run(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    git = _Git()
    console = _install(monkeypatch, tmp_path, git)

    result = runner.invoke(app, ["check"])

    assert result.exit_code == 0, result.output
    assert git.tagged == []
    assert console.find("2.0.0 can be released")


def test_release_dry_run_flag(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    git = _Git(tags=("2.0.0",))
    _install(monkeypatch, tmp_path, git)

    result = runner.invoke(app, ["release", "--dry-run"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert git.tagged == []


def test_invalid_project_file_exits_with_env_error(tmp_path: Path) -> None:
    (tmp_path / "release.toml").write_text("[project\n", encoding="utf-8")

    result = runner.invoke(app, ["release", "-C", str(tmp_path)])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
    assert "Invalid TOML" in result.output
    assert "hint: Fix release.toml" in result.output


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__
