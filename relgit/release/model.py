from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from relgit.release.version import Version

if TYPE_CHECKING:
    from relgit.release.graph import ArtifactGraph


@dataclass(frozen=True, slots=True)
class ArtifactId:
    group: str
    name: str

    def __str__(self) -> str:
        return f"{self.group}:{self.name}"


@dataclass(frozen=True, slots=True)
class Artifact:
    """A resolved artifact; node identity in the dependency graph."""

    id: ArtifactId
    version: Version

    def __str__(self) -> str:
        return f"{self.id}:{self.version}"


@dataclass(frozen=True, slots=True)
class PluginDependency:
    id: ArtifactId
    version: Version

    def __str__(self) -> str:
        return f"{self.id}:{self.version}"


@dataclass(frozen=True, slots=True)
class Publication:
    """A build output to upload, with an optional source bundle."""

    name: str
    artifact: Artifact
    file: Path
    source: Path | None = None

    def files(self) -> tuple[Path, ...]:
        if self.source is None:
            return (self.file,)
        return (self.file, self.source)


@dataclass(frozen=True, slots=True)
class PublishWorkflow:
    name: str
    repository: Path


@dataclass(frozen=True, slots=True)
class Project:
    """Everything the release engine needs to know about the project.

    Attributes:
        root: Project directory (expected to be a git working copy)
        artifact: The project's own artifact (group, name, version)
        publish_workflow: Where publications go; None if not configured
        publications: Artifacts to upload after tagging
        plugins: Build-time plugin dependencies
        artifact_graph: Transitive dependencies; None when there are none
    """

    root: Path
    artifact: Artifact
    publish_workflow: PublishWorkflow | None = None
    publications: tuple[Publication, ...] = ()
    plugins: tuple[PluginDependency, ...] = ()
    artifact_graph: ArtifactGraph | None = None

    @property
    def version(self) -> Version:
        return self.artifact.version

    @property
    def name(self) -> str:
        return self.artifact.id.name
