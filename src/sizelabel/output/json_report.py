"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict

from sizelabel.runner import LabelRun


def to_dict(run: LabelRun) -> Dict[str, Any]:
    """Convert a LabelRun to a JSON-serialisable dict."""
    analysis = run.analysis
    return {
        "version": "1.0",
        "skipped": run.skipped,
        "total": analysis.total if analysis else 0,
        "size_label": run.size_label,
        "touched_stable_markdown": analysis.touched_stable_markdown if analysis else False,
        "files": [
            {"path": item.path, "delta": item.delta}
            for item in (analysis.per_file if analysis else [])
        ],
        "add": list(run.delta.add),
        "remove": list(run.delta.remove),
        "failed_removals": list(run.failed_removals),
        "applied": run.applied,
    }


def render(run: LabelRun) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(run), indent=2, ensure_ascii=False)
