"""Labeling core — ignore patterns, diff analysis, size tiers, reconciliation."""

from sizelabel.labeling.analyzer import (
    CYRILLIC_PATTERN,
    DiffAnalysis,
    FileDelta,
    analyze,
    analyze_files,
)
from sizelabel.labeling.patterns import (
    IgnoreMatcher,
    IgnoreRule,
    PatternError,
    compile_ignore_rules,
)
from sizelabel.labeling.reconciler import LabelDelta, reconcile
from sizelabel.labeling.sizes import (
    DEFAULT_SIZES,
    SizeThresholdTable,
    classify,
    size_label,
)

__all__ = [
    "CYRILLIC_PATTERN",
    "DEFAULT_SIZES",
    "DiffAnalysis",
    "FileDelta",
    "IgnoreMatcher",
    "IgnoreRule",
    "LabelDelta",
    "PatternError",
    "SizeThresholdTable",
    "analyze",
    "analyze_files",
    "classify",
    "compile_ignore_rules",
    "reconcile",
    "size_label",
]
