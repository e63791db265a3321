"""Guarded release of a git-tracked project.

- model / version / graph: the project facts the engine reads
- project_file: release.toml loading
- checks: read-only precondition stages
- service: stage ordering, tagging and publishing
- transport: where publications are uploaded
"""

from __future__ import annotations
