"""Label reconciliation — turn desired labels into a minimal add/remove delta."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from sizelabel.labeling.sizes import is_size_label

TRANSLATION_LABEL = "translation"
UPDATE_LABEL = "update"
TRIVIAL_SIZE_LABEL = "size/XXS"


@dataclass
class LabelDelta:
    """Labels to attach and detach. The two lists never share a name."""

    add: List[str] = field(default_factory=list)
    remove: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.add and not self.remove

    def apply_to(self, labels: Iterable[str]) -> Set[str]:
        """Return the label set that results from applying this delta."""
        return (set(labels) - set(self.remove)) | set(self.add)


def _dedupe(names: List[str]) -> List[str]:
    return list(dict.fromkeys(names))


def reconcile(
    desired_size_label: Optional[str],
    current_labels: Iterable[str],
    touched_stable_markdown: bool,
) -> LabelDelta:
    """Compute the delta that brings *current_labels* to the desired state.

    Each label family is handled independently:

    * ``size/*`` — only *desired_size_label* may remain; when it is None
      every size label is removed and none is added.
    * ``translation`` — dropped for trivially small changes (``size/XXS``),
      required otherwise.
    * ``update`` — tracks *touched_stable_markdown*.
    """
    current = _dedupe(list(current_labels))
    present = set(current)
    add: List[str] = []
    remove: List[str] = []

    # --- size family ---
    already_sized = False
    for name in current:
        if not is_size_label(name):
            continue
        if name == desired_size_label:
            already_sized = True
        else:
            remove.append(name)
    if desired_size_label is not None and not already_sized:
        add.append(desired_size_label)

    # --- translation marker ---
    if desired_size_label == TRIVIAL_SIZE_LABEL:
        if TRANSLATION_LABEL in present:
            remove.append(TRANSLATION_LABEL)
    elif TRANSLATION_LABEL not in present:
        add.append(TRANSLATION_LABEL)

    # --- update marker ---
    if touched_stable_markdown:
        if UPDATE_LABEL not in present:
            add.append(UPDATE_LABEL)
    elif UPDATE_LABEL in present:
        remove.append(UPDATE_LABEL)

    return LabelDelta(add=_dedupe(add), remove=_dedupe(remove))
