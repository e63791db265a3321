from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer

from relgit.core.errors import ErrorCode
from relgit.core.result import Err
from relgit.git.client import GitClient, VcsClient
from relgit.output.console import ConsoleProtocol, RichConsole, Style
from relgit.release.errors import ReleaseError, release_error_code
from relgit.release.model import Project
from relgit.release.project_file import PROJECT_FILE_NAME, load_project
from relgit.release.transport import DirectoryTransport, PublicationTransport


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    git: VcsClient
    transport: PublicationTransport
    console: ConsoleProtocol


def fail(error: ReleaseError, *, console: ConsoleProtocol) -> NoReturn:
    """Report error with its hint and exit with the code for its kind."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error.kind)))


def build_context(project_dir: Path) -> CLIContext:
    try:
        root = project_dir.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --project-dir: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    console = RichConsole()
    project_result = load_project(root).map_err(
        lambda e: ReleaseError(
            kind="configuration",
            message=str(e),
            hint=f"Fix {PROJECT_FILE_NAME} in {root}.",
        )
    )
    if isinstance(project_result, Err):
        fail(project_result.error, console=console)

    return CLIContext(
        project=project_result.value,
        git=GitClient(root),
        transport=DirectoryTransport(),
        console=console,
    )
