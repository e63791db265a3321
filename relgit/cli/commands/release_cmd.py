from __future__ import annotations

from pathlib import Path

import typer

from relgit.cli.context import build_context, fail
from relgit.core.result import Err
from relgit.output.console import Style
from relgit.release.service import run_release


def _run(project_dir: Path, *, dry_run: bool) -> None:
    ctx = build_context(project_dir)
    result = run_release(
        project=ctx.project,
        git=ctx.git,
        transport=ctx.transport,
        console=ctx.console,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        fail(result.error, console=ctx.console)

    outcome = result.value
    if outcome.dry_run:
        ctx.console.success(f"{outcome.tag} can be released")
        return
    for path in outcome.published:
        ctx.console.print(str(path), Style.DIM)


def release(
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-C", help="Project root containing release.toml"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Run every check, but do not tag or publish."
    ),
) -> None:
    """Tag the current version and publish its artifacts."""
    _run(project_dir, dry_run=dry_run)


def check(
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-C", help="Project root containing release.toml"
    ),
) -> None:
    """Verify the project could be released (same as release --dry-run)."""
    _run(project_dir, dry_run=True)
