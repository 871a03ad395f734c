"""Version parsing for Ruby source archive URLs.

The packaged version embeds the maintainer patch offset into the upstream
patch component: ``2.6.3`` with offset ``2`` becomes ``2.6.302``.
"""

import logging
import re

from common.logging_utils import extra_context, is_debug_enabled, safe_url
from .models import InvalidVersionError, VersionTriple

logger = logging.getLogger(__name__)

# Components are single digits only; artifact names downstream depend on this.
RUBY_ARCHIVE_PATTERN = re.compile(r"ruby-(\d)\.(\d)\.(\d)(?:-\w*)?\.tar\.gz", re.ASCII)

PATCH_MULTIPLIER = 100


def parse_version_triple(url: str) -> VersionTriple:
    """Extract the upstream (major, minor, patch) from an archive URL.

    Args:
        url: Archive URL containing ``ruby-X.Y.Z[-suffix].tar.gz``.

    Raises:
        InvalidVersionError: If the URL carries no recognizable version.

    Returns:
        VersionTriple: Parsed upstream version.
    """
    match = RUBY_ARCHIVE_PATTERN.search(url) if isinstance(url, str) else None
    if not match or len(match.groups()) != 3:
        raise InvalidVersionError(url)
    triple = VersionTriple(*(int(g) for g in match.groups()))
    if is_debug_enabled(logger):
        logger.debug(
            "Parsed ruby version",
            extra=extra_context(
                event="parse",
                component="versioning",
                action="parse_version_triple",
                target=safe_url(url),
                version=str(triple),
            ),
        )
    return triple


def upstream_version(url: str) -> str:
    """Return the dotted upstream version, e.g. ``2.5.5``."""
    return str(parse_version_triple(url))


def extended_version(url: str, patch_offset: int) -> str:
    """Return the packaged version string for ``url`` and ``patch_offset``.

    Raises:
        InvalidVersionError: Propagated from :func:`parse_version_triple`.
    """
    *heads, patch = parse_version_triple(url)
    return ".".join(str(part) for part in [*heads, patch * PATCH_MULTIPLIER + patch_offset])
