"""Ruby archive version resolution."""

from .models import (
    ArchiveSource,
    ConfigError,
    InvalidVersionError,
    UnknownSourceError,
    VersionTriple,
)
from .parser import extended_version, parse_version_triple, upstream_version
from .sources import DEFAULT_SOURCES, SourceTable

__all__ = [
    "ArchiveSource",
    "ConfigError",
    "InvalidVersionError",
    "UnknownSourceError",
    "VersionTriple",
    "extended_version",
    "parse_version_triple",
    "upstream_version",
    "DEFAULT_SOURCES",
    "SourceTable",
]
