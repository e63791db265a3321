"""Publication transports.

A transport uploads one publication to the target described by a publish
workflow. DirectoryTransport implements a plain directory layout usable for
local or network-mounted artifact repositories:

    <repository>/<group as path>/<name>/<version>/<file>
    <repository>/<group as path>/<name>/<version>/<file>.sha256
"""

from __future__ import annotations

import hashlib
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relgit.core.result import Err, Ok, Result
from relgit.release.model import Publication, PublishWorkflow

__all__ = ["DirectoryTransport", "PublicationTransport", "PublishError", "artifact_dir"]


@dataclass(frozen=True, slots=True)
class PublishError:
    publication: str
    message: str

    def __str__(self) -> str:
        return f"{self.publication}: {self.message}"


class PublicationTransport(Protocol):
    def publish(
        self, publication: Publication, workflow: PublishWorkflow
    ) -> Result[tuple[Path, ...], PublishError]:
        """Upload publication; return the paths written at the target."""
        ...


def artifact_dir(publication: Publication, workflow: PublishWorkflow) -> Path:
    artifact = publication.artifact
    group_path = Path(*artifact.id.group.split("."))
    return workflow.repository / group_path / artifact.id.name / str(artifact.version)


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _write_text_atomic(path: Path, content: str) -> None:
    tmp = Path(f"{path}.tmp")
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, path)


class DirectoryTransport:
    """Copy publication files into a directory-based artifact repository."""

    def publish(
        self, publication: Publication, workflow: PublishWorkflow
    ) -> Result[tuple[Path, ...], PublishError]:
        for src in publication.files():
            if not src.is_file():
                return Err(PublishError(publication.name, f"file not found: {src}"))
        names = [src.name for src in publication.files()]
        if len(set(names)) != len(names):
            return Err(
                PublishError(publication.name, f"files share a name and would overwrite: {names}")
            )

        dest_dir = artifact_dir(publication, workflow)
        written: list[Path] = []
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            for src in publication.files():
                dest = dest_dir / src.name
                shutil.copyfile(src, dest)
                checksum = dest.with_name(f"{dest.name}.sha256")
                _write_text_atomic(checksum, f"{_sha256_file(dest)}  {dest.name}\n")
                written.extend((dest, checksum))
        except OSError as e:
            return Err(PublishError(publication.name, f"copy to {dest_dir} failed: {e}"))

        return Ok(tuple(written))
