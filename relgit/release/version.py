from __future__ import annotations

import re
from dataclasses import dataclass

_VERSION_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z{}.-]+))?"
    r"(?:\+([0-9A-Za-z.-]+))?$"
)


@dataclass(frozen=True, slots=True)
class Version:
    """A semantic version as declared in release.toml.

    Any pre-release part ("1.0.0-RC.1", "1.0.0-{integration}") marks the
    version as an integration build. Build metadata is kept for the tag
    string but does not affect integration status.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @property
    def is_integration(self) -> bool:
        return self.prerelease is not None

    def to_tag(self) -> str:
        return str(self)

    def __str__(self) -> str:
        s = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            s += f"-{self.prerelease}"
        if self.build is not None:
            s += f"+{self.build}"
        return s


def parse_version(text: str) -> Version | None:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return Version(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        prerelease=m.group(4),
        build=m.group(5),
    )
