"""Subprocess execution that always yields a CommandResult.

Git failures are part of normal release flow (a rejected pull, a tag that
cannot be pushed), so the runner never raises: it captures stdout and stderr
together and reports the exit code. Launch errors and timeouts are reported
as returncode -1 with a descriptive text.

Usage:
    result = run(["git", "status", "--porcelain"], cwd=repo_root, timeout=30.0)
    if not result.ok:
        console.error(result.text)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

__all__ = ["CommandResult", "run"]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of an external command.

    Attributes:
        command: The command that was executed.
        returncode: Exit code; 0 means success, -1 means the process could
            not be started or timed out.
        text: Combined stdout and stderr.
    """

    command: tuple[str, ...]
    returncode: int
    text: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.ok:
            return f"{cmd_str} succeeded"
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> CommandResult:
    """Execute a command, capturing combined output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        CommandResult with the exit code and captured text.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.output if isinstance(e.output, str) else ""
        return CommandResult(
            command=tuple(cmd),
            returncode=-1,
            text=f"{partial}Command timed out after {timeout}s",
        )
    except OSError as e:
        return CommandResult(command=tuple(cmd), returncode=-1, text=str(e))

    return CommandResult(command=tuple(cmd), returncode=proc.returncode, text=proc.stdout or "")
