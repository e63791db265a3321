"""relgit: guarded releases of git-tracked projects."""

__version__ = "0.3.0"
