"""Error types for the release engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relgit.core.errors import ErrorCode
from relgit.core.result import Err
from relgit.platform.process import CommandResult

ReleaseErrorKind = Literal[
    "configuration",
    "vcs_operation",
    "dirty_state",
    "duplicate_release",
    "unreleasable_dependency",
    "publish_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Why a release was refused or aborted.

    Attributes:
        kind: Error category; drives the CLI exit code.
        message: Human-readable reason, naming the offending entity.
        hint: What the user should do next (optional).
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def vcs_error(message: str, result: CommandResult) -> Err[ReleaseError]:
    """vcs_operation error carrying the command output verbatim, if there is any."""
    output = result.text.strip()
    if output:
        message = f"{message}. Git output is:\n\n{output}"
    return Err(ReleaseError(kind="vcs_operation", message=message))


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    if kind == "configuration":
        return ErrorCode.ENV_ERROR
    if kind == "vcs_operation":
        return ErrorCode.NETWORK_ERROR
    if kind == "publish_failed":
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR
