"""Size tiers — map a change metric onto a threshold table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple, Union

SIZE_PREFIX = "size/"


@dataclass(frozen=True)
class SizeThresholdTable:
    """Lower bound → tier name pairs, always sorted ascending by bound."""

    thresholds: Tuple[Tuple[int, str], ...]

    def __post_init__(self) -> None:
        bounds = [bound for bound, _ in self.thresholds]
        if any(bound < 0 for bound in bounds):
            raise ValueError("size thresholds must be non-negative")
        if len(set(bounds)) != len(bounds):
            raise ValueError("size thresholds must be unique")
        object.__setattr__(self, "thresholds", tuple(sorted(self.thresholds)))

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, str]) -> "SizeThresholdTable":
        return cls(tuple((int(bound), tier) for bound, tier in mapping.items()))

    def tiers(self) -> List[str]:
        return [tier for _, tier in self.thresholds]

    def as_dict(self) -> dict[str, str]:
        return {str(bound): tier for bound, tier in self.thresholds}


DEFAULT_SIZES = SizeThresholdTable.from_mapping({
    1: "XXS",
    10: "XS",
    100: "S",
    1000: "M",
    5000: "L",
    10000: "XL",
    20000: "XXL",
})


def classify(
    metric: int,
    table: Union[SizeThresholdTable, Mapping[int, str]] = DEFAULT_SIZES,
) -> Optional[str]:
    """Return the tier of the greatest lower bound <= *metric*.

    Returns None when *metric* is below every bound; with the default table
    a metric of 0 gets no tier at all.
    """
    if metric < 0:
        raise ValueError(f"metric must be non-negative, got {metric}")
    if not isinstance(table, SizeThresholdTable):
        table = SizeThresholdTable.from_mapping(table)

    tier: Optional[str] = None
    for bound, name in table.thresholds:
        if metric >= bound:
            tier = name
    return tier


def size_label(tier: Optional[str]) -> Optional[str]:
    """Compose the ``size/<tier>`` label name."""
    return None if tier is None else f"{SIZE_PREFIX}{tier}"


def is_size_label(name: str) -> bool:
    return name.startswith(SIZE_PREFIX)
