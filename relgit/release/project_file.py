"""Load the release.toml project definition.

Layout:

    [project]              group, name, version
    [publish_workflow]     name, repository (relative to the project root)
    [[publications]]       name, file, source
    [[plugins]]            id ("group:name"), version
    [[dependencies]]       artifact ("group:name:version"), group, optional
    [[artifacts]]          artifact, dependencies (list of coordinates)

[[dependencies]] are edges from the project itself; [[artifacts]] describe
transitive edges. Without [[dependencies]] the project has no graph.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from relgit.core.result import Err, Ok, Result
from relgit.core.structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_list,
    get_str,
    get_table,
    get_tables,
)
from relgit.release.graph import ArtifactGraph
from relgit.release.model import (
    Artifact,
    ArtifactId,
    PluginDependency,
    Project,
    Publication,
    PublishWorkflow,
)
from relgit.release.version import Version, parse_version

PROJECT_FILE_NAME = "release.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """release.toml could not be loaded or is invalid."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message} ({self.path})"


class _Invalid(Exception):
    """Internal: aborts parsing with a message; converted to ConfigError."""


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"{PROJECT_FILE_NAME} not found", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading {PROJECT_FILE_NAME}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading {PROJECT_FILE_NAME}: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Project file root must be a TOML table", path=path))
    return Ok(data)


def _require_str(table: StrDict, key: str, where: str) -> str:
    value = get_str(table, key)
    if value is None:
        raise _Invalid(f"{where}: missing or empty '{key}'")
    return value


def _version(text: str, where: str) -> Version:
    version = parse_version(text)
    if version is None:
        raise _Invalid(f"{where}: invalid version '{text}'")
    return version


def _artifact_id(text: str, where: str) -> ArtifactId:
    parts = text.split(":")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise _Invalid(f"{where}: expected 'group:name', got '{text}'")
    return ArtifactId(group=parts[0].strip(), name=parts[1].strip())


def _artifact(text: str, where: str) -> Artifact:
    """Parse a 'group:name:version' coordinate."""
    group_name, sep, version = text.rpartition(":")
    if not sep:
        raise _Invalid(f"{where}: expected 'group:name:version', got '{text}'")
    return Artifact(id=_artifact_id(group_name, where), version=_version(version, where))


def _resolve(root: Path, value: str) -> Path:
    p = Path(value).expanduser()
    return p if p.is_absolute() else root / p


def _publish_workflow(data: StrDict, root: Path) -> PublishWorkflow | None:
    table = get_table(data, "publish_workflow")
    if table is None:
        return None
    name = get_str(table, "name") or "release"
    repository = _require_str(table, "repository", "[publish_workflow]")
    return PublishWorkflow(name=name, repository=_resolve(root, repository))


def _publications(data: StrDict, root: Path, artifact: Artifact) -> tuple[Publication, ...]:
    tables = _tables(data, "publications")
    out: list[Publication] = []
    for i, t in enumerate(tables):
        where = f"[[publications]] #{i + 1}"
        file = _resolve(root, _require_str(t, "file", where))
        source = get_str(t, "source")
        source_path = _resolve(root, source) if source else None
        if source_path is not None and source_path.name == file.name:
            raise _Invalid(f"{where}: file and source must have different names")
        out.append(
            Publication(
                name=get_str(t, "name") or artifact.id.name,
                artifact=artifact,
                file=file,
                source=source_path,
            )
        )
    return tuple(out)


def _plugins(data: StrDict) -> tuple[PluginDependency, ...]:
    out: list[PluginDependency] = []
    for i, t in enumerate(_tables(data, "plugins")):
        where = f"[[plugins]] #{i + 1}"
        out.append(
            PluginDependency(
                id=_artifact_id(_require_str(t, "id", where), where),
                version=_version(_require_str(t, "version", where), where),
            )
        )
    return tuple(out)


def _artifact_graph(data: StrDict, root_artifact: Artifact) -> ArtifactGraph | None:
    direct = _tables(data, "dependencies")
    if not direct:
        return None

    graph = ArtifactGraph(root=root_artifact)
    for i, t in enumerate(direct):
        where = f"[[dependencies]] #{i + 1}"
        graph.add_edge(
            root_artifact,
            _artifact(_require_str(t, "artifact", where), where),
            group=get_str(t, "group") or "compile",
            optional=get_bool(t, "optional"),
        )

    for i, t in enumerate(_tables(data, "artifacts")):
        where = f"[[artifacts]] #{i + 1}"
        origin = _artifact(_require_str(t, "artifact", where), where)
        deps = get_list(t, "dependencies") or []
        for dep in deps:
            if not isinstance(dep, str):
                raise _Invalid(f"{where}: dependencies must be strings")
            graph.add_edge(
                origin,
                _artifact(dep, where),
                group=get_str(t, "group") or "compile",
                optional=get_bool(t, "optional"),
            )

    return graph


def _tables(data: StrDict, key: str) -> list[StrDict]:
    if key not in data:
        return []
    tables = get_tables(data, key)
    if tables is None:
        raise _Invalid(f"'{key}' must be an array of tables ([[{key}]])")
    return tables


def load_project(root: Path) -> Result[Project, ConfigError]:
    """Load <root>/release.toml into a Project.

    Returns:
        Ok(Project) on success, Err(ConfigError) on any read or validation error
    """
    path = root / PROJECT_FILE_NAME
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed
    data = parsed.value

    try:
        table = get_table(data, "project")
        if table is None:
            raise _Invalid("missing [project] table")
        artifact = Artifact(
            id=ArtifactId(
                group=_require_str(table, "group", "[project]"),
                name=_require_str(table, "name", "[project]"),
            ),
            version=_version(_require_str(table, "version", "[project]"), "[project]"),
        )
        project = Project(
            root=root,
            artifact=artifact,
            publish_workflow=_publish_workflow(data, root),
            publications=_publications(data, root, artifact),
            plugins=_plugins(data),
            artifact_graph=_artifact_graph(data, artifact),
        )
    except _Invalid as e:
        return Err(ConfigError(str(e), path=path))

    return Ok(project)
