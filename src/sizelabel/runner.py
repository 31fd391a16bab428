"""Labeler pipeline — fetch diff, analyse, classify, reconcile, apply.

Errors from the core (PatternError, ParseError, ConfigError) and from the
diff fetch or label addition (UpstreamError) propagate to the caller. A
failed label removal is the one tolerated failure: it is logged and the
remaining removals still run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from sizelabel.config.schema import LabelerConfig
from sizelabel.github.client import GitHubClient, UpstreamError
from sizelabel.github.event import PullRequestEvent
from sizelabel.labeling.analyzer import DiffAnalysis, analyze
from sizelabel.labeling.patterns import compile_ignore_rules
from sizelabel.labeling.reconciler import LabelDelta, reconcile
from sizelabel.labeling.sizes import classify, size_label

logger = logging.getLogger(__name__)


@dataclass
class LabelRun:
    """Outcome of one labeler invocation."""

    skipped: bool = False
    analysis: Optional[DiffAnalysis] = None
    size_label: Optional[str] = None
    delta: LabelDelta = field(default_factory=LabelDelta)
    applied: bool = False
    failed_removals: List[str] = field(default_factory=list)


def plan_labels(
    diff_text: str,
    config: LabelerConfig,
    current_labels: Iterable[str],
) -> LabelRun:
    """Compute the label delta for *diff_text* without touching the network."""
    is_ignored = compile_ignore_rules(config.ignore.patterns)
    analysis = analyze(diff_text, is_ignored, config.analysis.pattern)
    label = size_label(classify(analysis.total, config.sizes))
    logger.info("Matching label: %s", label)

    delta = reconcile(label, current_labels, analysis.touched_stable_markdown)
    return LabelRun(analysis=analysis, size_label=label, delta=delta)


def apply_delta(client: GitHubClient, event: PullRequestEvent, delta: LabelDelta) -> List[str]:
    """Apply *delta* to the pull request; return the labels that failed to detach."""
    if delta.add:
        client.add_labels(event.owner, event.repo, event.number, delta.add)

    failed: List[str] = []
    for name in delta.remove:
        try:
            client.remove_label(event.owner, event.repo, event.number, name)
        except UpstreamError as exc:
            logger.warning("Ignoring error while removing label %s: %s", name, exc)
            failed.append(name)
    return failed


def run_labeler(
    config: LabelerConfig,
    event: PullRequestEvent,
    client: GitHubClient,
    *,
    dry_run: bool = False,
) -> LabelRun:
    """Run the full labeler for one pull request event."""
    if not event.is_handled:
        logger.info("Action will be ignored: %s", event.action)
        return LabelRun(skipped=True)

    diff_text = client.get_pull_request_diff(event.owner, event.repo, event.number)
    run = plan_labels(diff_text, config, event.labels)

    if run.delta.is_empty:
        logger.info("Correct labels already assigned")
        return run
    if dry_run:
        logger.info("Dry run: would add %s, remove %s", run.delta.add, run.delta.remove)
        return run

    run.failed_removals = apply_delta(client, event, run.delta)
    run.applied = True
    logger.debug("Labels updated on %s", event.slug)
    return run
