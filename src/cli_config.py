"""Build configuration assembly for the CLI.

Precedence (highest first):
1) CLI flags (--ruby, --pod-version)
2) Environment (CRUBY_RUBY_LABEL, CRUBY_POD_VERSION)
3) Config file (explicit --config or default YAML locations)
4) Built-in defaults from constants and versioning.sources
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants
from versioning.models import ArchiveSource, ConfigError, VersionTriple
from versioning.parser import extended_version, parse_version_triple
from versioning.sources import SourceTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildConfig:
    """Resolved configuration handed to the packaging process."""
    sources: SourceTable
    ruby_label: str
    pod_version: int
    github_url: str

    @property
    def source(self) -> ArchiveSource:
        return self.sources.select(self.ruby_label)

    @property
    def version_triple(self) -> VersionTriple:
        return parse_version_triple(self.source.url)

    @property
    def version(self) -> str:
        return extended_version(self.source.url, self.pod_version)


def default_config_paths() -> List[str]:
    """Return candidate config file locations in lookup order."""
    paths = [os.path.join(os.getcwd(), name) for name in Constants.CONFIG_FILE_NAMES]
    xdg = os.environ.get(Constants.ENV_XDG_CONFIG_HOME) or os.path.join(
        os.path.expanduser("~"), ".config"
    )
    paths.extend(
        os.path.join(xdg, Constants.CONFIG_DIR_NAME, name) for name in Constants.CONFIG_FILE_NAMES
    )
    return paths


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a YAML or JSON config file.

    Args:
        path: Explicit config path. When None, default locations are searched
            and a missing file simply yields an empty config.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigError: If the file cannot be parsed or is not a mapping.

    Returns:
        dict: Parsed configuration.
    """
    if path is None:
        for candidate in default_config_paths():
            if os.path.isfile(candidate):
                path = candidate
                break
        else:
            return {}
    elif not os.path.isfile(path):
        raise FileNotFoundError(path)

    logger.debug("Loading config file: %s", path)
    with open(path, "r", encoding="utf-8") as fh:
        try:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
            raise ConfigError(f"cannot parse config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a mapping at top level")
    return data


def _coerce_pod_version(value: Any, origin: str) -> int:
    """Convert a pod version from any origin into a validated int."""
    if isinstance(value, bool):
        raise ConfigError(f"pod version from {origin} must be an integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigError(f"pod version from {origin} must be an integer, got {value!r}") from None
    if not 0 <= number < Constants.POD_VERSION_LIMIT:
        raise ConfigError(
            f"pod version from {origin} must be in [0, {Constants.POD_VERSION_LIMIT}), got {number}"
        )
    return number


def build_config(args: Any = None, environ: Optional[Dict[str, str]] = None) -> BuildConfig:
    """Assemble a BuildConfig from CLI args, environment and config file.

    Raises:
        FileNotFoundError: If an explicit --config path does not exist.
        ConfigError: If any layer supplies an invalid value.
    """
    env = os.environ if environ is None else environ
    cfg = load_config_file(getattr(args, "CONFIG", None))

    if "sources" in cfg:
        sources = SourceTable.from_mapping(cfg["sources"])
    else:
        sources = SourceTable.defaults()

    label: Any = Constants.DEFAULT_RUBY_LABEL
    pod_version: Any = Constants.POD_VERSION
    origin = "defaults"
    if cfg.get("ruby") is not None:
        label = cfg["ruby"]
    if cfg.get("pod_version") is not None:
        pod_version, origin = cfg["pod_version"], "config"

    if env.get(Constants.ENV_RUBY_LABEL):
        label = env[Constants.ENV_RUBY_LABEL]
    if env.get(Constants.ENV_POD_VERSION):
        pod_version, origin = env[Constants.ENV_POD_VERSION], Constants.ENV_POD_VERSION

    if getattr(args, "RUBY", None):
        label = args.RUBY
    if getattr(args, "POD_VERSION", None) is not None:
        pod_version, origin = args.POD_VERSION, "--pod-version"

    github_url = cfg.get("github_url") or Constants.GITHUB_URL
    if not isinstance(github_url, str):
        raise ConfigError(f"github_url must be a string, got {github_url!r}")

    config = BuildConfig(
        sources=sources,
        ruby_label=str(label),
        pod_version=_coerce_pod_version(pod_version, origin),
        github_url=github_url,
    )
    # Unknown labels surface here as UnknownSourceError.
    config.sources.select(config.ruby_label)
    return config
