"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for relgit commands.

    - 0: Release (or dry run) completed
    - 1: User error (dirty working copy, version already released,
         integration dependencies)
    - 2: Environment error (not a git repository, bad release.toml,
         no publish workflow)
    - 4: Network error (git pull/fetch/tag/push failed)
    - 5: I/O error (publication could not be copied to the target)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
