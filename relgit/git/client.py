"""Version-control client used by the release engine.

The engine only needs five operations, captured by the VcsClient protocol.
GitClient implements them by shelling out to the git binary; tests inject
fakes that record calls and return canned CommandResults.

Usage:
    git = GitClient(Path("/path/to/project"))
    result = git.status("--porcelain")
    if result.ok and not result.text.strip():
        print("Working tree clean")
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from relgit.platform.process import CommandResult
from relgit.platform.process import run as run_process

GIT_TIMEOUT_SECONDS = 30.0
GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

_NETWORK_COMMANDS = {"fetch", "pull", "push", "clone"}

__all__ = [
    "GIT_NETWORK_TIMEOUT_SECONDS",
    "GIT_TIMEOUT_SECONDS",
    "GitClient",
    "VcsClient",
]


@runtime_checkable
class VcsClient(Protocol):
    """Operations the release engine performs on the working copy."""

    def pull(self) -> CommandResult:
        """Bring the local branch up to date with its upstream."""
        ...

    def fetch_tags(self) -> CommandResult:
        """Fetch every tag from the remote."""
        ...

    def status(self, flag: str) -> CommandResult:
        """Run a status query, e.g. "-sb" or "--porcelain"."""
        ...

    def tag(self, name: str, message: str) -> CommandResult:
        """Create an annotated tag at HEAD and publish it to the remote."""
        ...

    def list_tags(self, pattern: str) -> CommandResult:
        """List local tags matching pattern, one per line."""
        ...


class GitClient:
    """VcsClient backed by the git command line.

    Attributes:
        path: Repository root (containing .git)
        remote: Remote used when pushing the release tag
    """

    def __init__(self, path: Path, *, remote: str = "origin") -> None:
        self.path = path
        self.remote = remote

    def pull(self) -> CommandResult:
        return self._run(["pull"])

    def fetch_tags(self) -> CommandResult:
        return self._run(["fetch", "--tags", self.remote])

    def status(self, flag: str) -> CommandResult:
        return self._run(["status", flag])

    def tag(self, name: str, message: str) -> CommandResult:
        created = self._run(["tag", "-a", name, "-m", message])
        if not created.ok:
            return created

        pushed = self._run(["push", self.remote, f"refs/tags/{name}"])
        if pushed.ok:
            return pushed

        # Keep the local tag namespace in sync with the remote so a retry
        # is not rejected as a duplicate release.
        deleted = self._run(["tag", "-d", name])
        if deleted.ok:
            return pushed
        text = (
            f"{pushed.text.rstrip()}\n"
            f"Local tag [{name}] could not be removed and is still present:\n"
            f"{deleted.text.strip()}"
        )
        return CommandResult(pushed.command, pushed.returncode, text)

    def list_tags(self, pattern: str) -> CommandResult:
        return self._run(["tag", "--list", pattern])

    def _run(self, args: list[str]) -> CommandResult:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
