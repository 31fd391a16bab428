"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from sizelabel.labeling.analyzer import CYRILLIC_PATTERN
from sizelabel.labeling.sizes import DEFAULT_SIZES, SizeThresholdTable

DEFAULT_API_URL = "https://api.github.com"


@dataclass
class IgnoreConfig:
    patterns: List[str] = field(default_factory=list)  # glob lines, '!' re-includes


@dataclass
class AnalysisConfig:
    pattern: str = CYRILLIC_PATTERN  # regex counted on every added line


@dataclass
class GitHubConfig:
    token: Optional[str] = None  # environment only, never read from a file
    event_path: Optional[str] = None
    api_url: str = DEFAULT_API_URL


@dataclass
class LabelerConfig:
    sizes: SizeThresholdTable = DEFAULT_SIZES
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    debug: bool = False
