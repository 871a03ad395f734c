"""Table of upstream Ruby source archives selectable by version label."""

import logging
import re
from typing import Any, Dict, Iterator, List, Mapping

from .models import ArchiveSource, ConfigError, UnknownSourceError
from .parser import parse_version_triple

logger = logging.getLogger(__name__)

SHA256_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")

DEFAULT_SOURCES: Dict[str, Dict[str, str]] = {
    "2.6": {
        "url": "https://cache.ruby-lang.org/pub/ruby/2.6/ruby-2.6.1.tar.gz",
        "sha256": "17024fb7bb203d9cf7a5a42c78ff6ce77140f9d083676044a7db67f1e5191cb8",
    },
    "2.5": {
        "url": "https://cache.ruby-lang.org/pub/ruby/2.5/ruby-2.5.5.tar.gz",
        "sha256": "28a945fdf340e6ba04fc890b98648342e3cccfd6d223a48f3810572f11b2514c",
    },
    "2.4": {
        "url": "https://cache.ruby-lang.org/pub/ruby/2.4/ruby-2.4.6.tar.gz",
        "sha256": "de0dc8097023716099f7c8a6ffc751511b90de7f5694f401b59f2d071db910be",
    },
}


class SourceTable:
    """Immutable mapping of label -> ArchiveSource."""

    def __init__(self, sources: List[ArchiveSource]):
        self._sources: Dict[str, ArchiveSource] = {s.label: s for s in sources}

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> "SourceTable":
        """Build a table from ``{label: {"url": ..., "sha256": ...}}``.

        Raises:
            ConfigError: If an entry is not a mapping or lacks a string url/sha256.
        """
        if not isinstance(mapping, Mapping):
            raise ConfigError("sources must be a mapping of label -> {url, sha256}")
        sources = []
        for raw_label, entry in mapping.items():
            label = str(raw_label)
            if not isinstance(entry, Mapping):
                raise ConfigError(f"source {label!r} must be a mapping with url and sha256")
            url = entry.get("url")
            sha256 = entry.get("sha256")
            if not isinstance(url, str) or not url.strip():
                raise ConfigError(f"source {label!r} is missing a url")
            if not isinstance(sha256, str) or not sha256.strip():
                raise ConfigError(f"source {label!r} is missing a sha256")
            if not SHA256_PATTERN.match(sha256.strip()):
                logger.warning("Source %s has a malformed sha256 digest: %s", label, sha256)
            sources.append(ArchiveSource(label=label, url=url.strip(), sha256=sha256.strip()))
        return cls(sources)

    @classmethod
    def defaults(cls) -> "SourceTable":
        return cls.from_mapping(DEFAULT_SOURCES)

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[ArchiveSource]:
        return iter(self._sources.values())

    def __contains__(self, label: object) -> bool:
        return label in self._sources

    def labels(self) -> List[str]:
        return list(self._sources)

    def select(self, label: str) -> ArchiveSource:
        """Return the archive configured for ``label``.

        Raises:
            UnknownSourceError: If no archive is configured for the label.
        """
        try:
            return self._sources[str(label)]
        except KeyError:
            raise UnknownSourceError(str(label), self._sources) from None

    def ordered(self) -> List[ArchiveSource]:
        """Return sources sorted newest upstream version first.

        Raises:
            InvalidVersionError: If any source URL carries no recognizable version.
        """
        return sorted(
            self._sources.values(),
            key=lambda s: parse_version_triple(s.url).to_semver(),
            reverse=True,
        )
