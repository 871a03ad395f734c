"""Data models for Ruby source archives and their versions."""

from dataclasses import dataclass
from typing import NamedTuple

import semantic_version


class InvalidVersionError(ValueError):
    """Raised when an archive URL does not carry a recognizable Ruby version."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"invalid ruby version: {url!r}")


class ConfigError(ValueError):
    """Raised when the build configuration is malformed."""


class UnknownSourceError(ConfigError):
    """Raised when the selected Ruby label has no configured archive."""

    def __init__(self, label: str, available):
        self.label = label
        self.available = sorted(available)
        super().__init__(
            f"unknown ruby source {label!r} (available: {', '.join(self.available) or 'none'})"
        )


class VersionTriple(NamedTuple):
    """Upstream (major, minor, patch) parsed from an archive URL."""
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_semver(self) -> semantic_version.Version:
        """Return the triple as a comparable semantic version."""
        return semantic_version.Version(major=self.major, minor=self.minor, patch=self.patch)


@dataclass(frozen=True)
class ArchiveSource:
    """One downloadable upstream tarball and its integrity hash."""
    label: str  # selection key, e.g. "2.5"
    url: str
    sha256: str  # 64 hex chars; not checked here
