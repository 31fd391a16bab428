"""Load configuration from .size-label.toml and environment variables.

The environment is passed in as a mapping; nothing below the CLI reads
``os.environ`` directly.
"""

from __future__ import annotations

import dataclasses
import json
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from sizelabel.config.schema import (
    AnalysisConfig,
    GitHubConfig,
    IgnoreConfig,
    LabelerConfig,
)
from sizelabel.labeling.sizes import SizeThresholdTable

CONFIG_FILENAME = ".size-label.toml"

_SECTIONS = ("sizes", "ignore", "analysis", "github")
_FILE_ONLY_KEYS = {"github": {"api_url"}}


class ConfigError(Exception):
    """Raised when config is malformed, unreadable, or missing required input."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def parse_sizes(raw: Union[str, Mapping[Any, Any]]) -> SizeThresholdTable:
    """Validate a threshold table given as a JSON string or a mapping."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid sizes JSON: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError("Sizes must be an object mapping thresholds to tier names")
    if not raw:
        raise ConfigError("Sizes must define at least one threshold")

    pairs: List[Tuple[int, str]] = []
    for key, tier in raw.items():
        if isinstance(key, bool) or not (
            isinstance(key, int) or (isinstance(key, str) and key.strip().isdecimal())
        ):
            raise ConfigError(f"Size threshold must be a non-negative integer, got {key!r}")
        if not isinstance(tier, str) or not tier.strip():
            raise ConfigError(f"Size tier for {key!r} must be a non-empty string, got {tier!r}")
        try:
            bound = int(key)
        except ValueError as exc:
            raise ConfigError(f"Size threshold must be a non-negative integer, got {key!r}") from exc
        pairs.append((bound, tier.strip()))

    try:
        return SizeThresholdTable(tuple(pairs))
    except ValueError as exc:
        raise ConfigError(f"Invalid sizes: {exc}") from exc


def parse_pattern(pattern: Any) -> str:
    """Validate the regex counted on added lines."""
    if not isinstance(pattern, str) or not pattern:
        raise ConfigError(f"Analysis pattern must be a non-empty string, got {pattern!r}")
    try:
        re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"Invalid analysis pattern {pattern!r}: {exc}") from exc
    return pattern


def _parse_patterns(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError("ignore.patterns must be a string or a list of strings")


def _section(raw: Dict[str, Any], section: str, cls: type) -> Dict[str, Any]:
    """Return a TOML section, rejecting keys the dataclass does not know."""
    data = raw.get(section, {})
    if not isinstance(data, dict):
        raise ConfigError(f"[{section}] must be a table")
    allowed = _FILE_ONLY_KEYS.get(section) or {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(f"Unknown key(s) in [{section}]: {', '.join(unknown)}")
    return data


def _from_toml(raw: Dict[str, Any]) -> LabelerConfig:
    unknown = sorted(set(raw) - set(_SECTIONS))
    if unknown:
        raise ConfigError(f"Unknown section(s): {', '.join(unknown)}")

    cfg = LabelerConfig()
    if "sizes" in raw:
        cfg.sizes = parse_sizes(raw["sizes"])

    ignore = _section(raw, "ignore", IgnoreConfig)
    if "patterns" in ignore:
        cfg.ignore.patterns = _parse_patterns(ignore["patterns"])

    analysis = _section(raw, "analysis", AnalysisConfig)
    if "pattern" in analysis:
        cfg.analysis.pattern = parse_pattern(analysis["pattern"])

    github = _section(raw, "github", GitHubConfig)
    if "api_url" in github:
        if not isinstance(github["api_url"], str):
            raise ConfigError("github.api_url must be a string")
        cfg.github.api_url = github["api_url"]
    return cfg


def _merge_env_overrides(cfg: LabelerConfig, environ: Mapping[str, str]) -> None:
    """Apply action inputs and GitHub runner variables."""
    if val := environ.get("INPUT_SIZES"):
        cfg.sizes = parse_sizes(val)
    if val := environ.get("IGNORED"):
        cfg.ignore.patterns.append(val)
    if val := environ.get("INPUT_PATTERN"):
        cfg.analysis.pattern = parse_pattern(val)
    if val := environ.get("GITHUB_TOKEN"):
        cfg.github.token = val
    if val := environ.get("GITHUB_EVENT_PATH"):
        cfg.github.event_path = val
    if val := environ.get("GITHUB_API_URL"):
        cfg.github.api_url = val
    if environ.get("DEBUG_ACTION"):
        cfg.debug = True


def load_config(
    repo_root: Optional[Path] = None,
    config_override: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> LabelerConfig:
    """Load, validate, and return a LabelerConfig."""
    config_path = find_config_file(repo_root or Path.cwd(), config_override)
    cfg = LabelerConfig() if config_path is None else _from_toml(_parse_toml(config_path))
    _merge_env_overrides(cfg, environ or {})
    return cfg


def require_github(cfg: LabelerConfig) -> Tuple[str, str]:
    """Return (token, event_path), raising ConfigError if either is missing."""
    if not cfg.github.token:
        raise ConfigError("Environment variable GITHUB_TOKEN not set!")
    if not cfg.github.event_path:
        raise ConfigError("Environment variable GITHUB_EVENT_PATH not set!")
    return cfg.github.token, cfg.github.event_path
