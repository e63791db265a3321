"""Git operations used by the release engine.

Usage:
    from relgit.git import GitClient

    git = GitClient(project_root)
    if not git.fetch_tags().ok:
        ...
"""

from relgit.git.client import (
    GIT_NETWORK_TIMEOUT_SECONDS,
    GIT_TIMEOUT_SECONDS,
    GitClient,
    VcsClient,
)

__all__ = [
    "GIT_NETWORK_TIMEOUT_SECONDS",
    "GIT_TIMEOUT_SECONDS",
    "GitClient",
    "VcsClient",
]
