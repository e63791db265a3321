"""Release orchestration.

run_release drives a project through the release stages in order:

    guard -> synced_clean -> tag_available -> no_integration_deps
          -> tagged -> published

Every stage returns a Result; the first Err aborts the run and nothing after
it executes. Tagging is the point of no return: a publish failure after it
leaves the tag in place and says so in the error hint.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from relgit.core.result import Err, Ok, Result
from relgit.git.client import VcsClient
from relgit.output.console import ConsoleProtocol, Style
from relgit.release.checks import (
    check_dependencies_for_integration_versions,
    check_plugins_for_integration_versions,
    check_repository,
    check_tag_available,
    update_and_check_working_copy,
)
from relgit.release.errors import ReleaseError, vcs_error
from relgit.release.model import Project
from relgit.release.transport import PublicationTransport, PublishError

ReleaseStage = Literal[
    "guard",
    "synced_clean",
    "tag_available",
    "no_integration_deps",
    "tagged",
    "published",
]


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    """Where a successful run ended.

    Attributes:
        tag: The release tag (the project version string)
        stage: Last stage reached; "no_integration_deps" for a dry run
        published: Paths written by the publication transport
        dry_run: True if no tag was created and nothing was published
    """

    tag: str
    stage: ReleaseStage
    published: tuple[Path, ...] = ()
    dry_run: bool = False


def release_message(tag: str) -> str:
    return f"Release version [{tag}]."


def create_release_tag(
    git: VcsClient, tag: str, *, console: ConsoleProtocol
) -> Result[None, ReleaseError]:
    console.info(f"Creating tag [{tag}]")

    result = git.tag(tag, release_message(tag))
    if not result.ok:
        return vcs_error("Unable to create git tag for the release", result)
    return Ok(None)


def publish_project(
    project: Project,
    transport: PublicationTransport,
    *,
    console: ConsoleProtocol,
) -> Result[tuple[Path, ...], ReleaseError]:
    """Publish every publication; all are attempted even if one fails."""
    console.info("Publishing project artifacts")

    workflow = project.publish_workflow
    if workflow is None:
        return Err(ReleaseError(kind="configuration", message="no publish workflow configured"))

    written: list[Path] = []
    failures: list[PublishError] = []
    for publication in project.publications:
        result = transport.publish(publication, workflow)
        if isinstance(result, Err):
            console.error(str(result.error))
            failures.append(result.error)
            continue
        console.print(f"published {publication.name} -> {workflow.name}", Style.DIM)
        written.extend(result.value)

    if failures:
        tag = project.version.to_tag()
        names = ", ".join(f.publication for f in failures)
        return Err(
            ReleaseError(
                kind="publish_failed",
                message=f"failed to publish: {names}",
                hint=(
                    f"Tag [{tag}] was already created. Fix the problem and publish again, "
                    f"or remove the tag with: git tag -d {tag} && git push --delete origin {tag}"
                ),
            )
        )

    return Ok(tuple(written))


def run_release(
    *,
    project: Project,
    git: VcsClient,
    transport: PublicationTransport,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[ReleaseOutcome, ReleaseError]:
    tag = project.version.to_tag()
    console.header(f"Releasing {project.name} {tag}")

    guard = check_repository(project)
    if isinstance(guard, Err):
        return guard

    clean = update_and_check_working_copy(git, console=console)
    if isinstance(clean, Err):
        return clean

    available = check_tag_available(git, tag, console=console)
    if isinstance(available, Err):
        return available

    deps = check_dependencies_for_integration_versions(project, console=console)
    if isinstance(deps, Err):
        return deps

    plugins = check_plugins_for_integration_versions(project, console=console)
    if isinstance(plugins, Err):
        return plugins

    if dry_run:
        console.print(f"dry-run: would create tag [{tag}]: {release_message(tag)}", Style.DIM)
        for publication in project.publications:
            console.print(f"dry-run: would publish {publication.name}", Style.DIM)
        return Ok(ReleaseOutcome(tag=tag, stage="no_integration_deps", dry_run=True))

    tagged = create_release_tag(git, tag, console=console)
    if isinstance(tagged, Err):
        return tagged

    published = publish_project(project, transport, console=console)
    if isinstance(published, Err):
        return published

    console.success(f"released {project.name} {tag}")
    return Ok(ReleaseOutcome(tag=tag, stage="published", published=published.value))
