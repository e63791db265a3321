"""Release precondition checks.

Each check returns Ok(None) when the project may proceed to the next stage,
or Err(ReleaseError) naming the reason it may not. Checks never raise and
never retry; the first failure ends the release.
"""

from __future__ import annotations

from relgit.core.result import Err, Ok, Result
from relgit.git.client import VcsClient
from relgit.output.console import ConsoleProtocol
from relgit.release.errors import ReleaseError, vcs_error
from relgit.release.graph import DependencyEdge
from relgit.release.model import Artifact, Project

__all__ = [
    "check_dependencies_for_integration_versions",
    "check_plugins_for_integration_versions",
    "check_repository",
    "check_tag_available",
    "update_and_check_working_copy",
]


def check_repository(project: Project) -> Result[None, ReleaseError]:
    if not (project.root / ".git").exists():
        return Err(
            ReleaseError(
                kind="configuration",
                message=f"{project.root} is not a git repository",
                hint="You can only run a release from a git repository.",
            )
        )

    if project.publish_workflow is None:
        return Err(
            ReleaseError(
                kind="configuration",
                message="no publish workflow configured",
                hint="Add a [publish_workflow] table with a repository to release.toml.",
            )
        )

    return Ok(None)


def update_and_check_working_copy(
    git: VcsClient, *, console: ConsoleProtocol
) -> Result[None, ReleaseError]:
    """Pull, then refuse unpushed commits and local modifications."""
    console.info("Updating working copy and verifying it can be released")

    pulled = git.pull()
    if not pulled.ok:
        return vcs_error("Unable to pull from the remote git repository", pulled)

    short = git.status("-sb")
    if not short.ok:
        return vcs_error("Unable to check the status of the local git repository", short)
    if "ahead" in short.text.lower():
        return Err(
            ReleaseError(
                kind="dirty_state",
                message="local commits have not been pushed",
                hint="Push your commits before releasing.",
            )
        )

    porcelain = git.status("--porcelain")
    if not porcelain.ok:
        return vcs_error("Unable to check the status of the local git repository", porcelain)
    status = porcelain.text.strip()
    if status:
        return Err(
            ReleaseError(
                kind="dirty_state",
                message=f"cannot release from a dirty working copy. Git status output is:\n\n{status}",
                hint="Commit or stash your changes before releasing.",
            )
        )

    return Ok(None)


def check_tag_available(
    git: VcsClient, tag: str, *, console: ConsoleProtocol
) -> Result[None, ReleaseError]:
    console.info(f"Checking if tag [{tag}] already exists")

    fetched = git.fetch_tags()
    if not fetched.ok:
        return vcs_error("Unable to fetch tags from the remote git repository", fetched)

    listed = git.list_tags(tag)
    if not listed.ok:
        return vcs_error("Unable to list the tags of the local git repository", listed)
    if any(line.strip() == tag for line in listed.text.splitlines()):
        return Err(
            ReleaseError(
                kind="duplicate_release",
                message=f"version [{tag}] has already been released",
                hint="Bump the project version in release.toml.",
            )
        )

    return Ok(None)


def check_dependencies_for_integration_versions(
    project: Project, *, console: ConsoleProtocol
) -> Result[None, ReleaseError]:
    console.info("Checking dependencies for integration versions")

    graph = project.artifact_graph
    if graph is None:
        return Ok(None)

    offenders: list[Artifact] = []

    def visit(origin: Artifact, destination: Artifact, edge: DependencyEdge, depth: int) -> bool:
        if destination.version.is_integration:
            offenders.append(destination)
            return False
        return True

    graph.traverse(graph.root, True, visit)
    if offenders:
        return Err(
            ReleaseError(
                kind="unreleasable_dependency",
                message=(
                    f"project depends on the artifact [{offenders[0]}] which is an integration "
                    "release"
                ),
                hint="Release the dependency (or pin a released version) first.",
            )
        )

    return Ok(None)


def check_plugins_for_integration_versions(
    project: Project, *, console: ConsoleProtocol
) -> Result[None, ReleaseError]:
    console.info("Checking plugins for integration versions")

    for plugin in project.plugins:
        if plugin.version.is_integration:
            return Err(
                ReleaseError(
                    kind="unreleasable_dependency",
                    message=f"project depends on the integration version of the plugin [{plugin}]",
                    hint="Plugins must be released versions when releasing a project.",
                )
            )

    return Ok(None)
