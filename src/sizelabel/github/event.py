"""Pull request event payload loading."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Union

from sizelabel.config.loader import ConfigError

HANDLED_ACTIONS = ("opened", "synchronize", "reopened")


@dataclass(frozen=True)
class PullRequestEvent:
    """The parts of a ``pull_request`` webhook payload the labeler needs."""

    action: str
    owner: str
    repo: str
    number: int
    labels: FrozenSet[str] = frozenset()

    @property
    def is_handled(self) -> bool:
        return self.action in HANDLED_ACTIONS

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


def parse_event(data: Dict[str, Any]) -> PullRequestEvent:
    """Build a PullRequestEvent from a decoded payload."""
    pull_request = data.get("pull_request") if isinstance(data, dict) else None
    if not isinstance(pull_request, dict) or not isinstance(pull_request.get("base"), dict):
        raise ConfigError("Invalid event payload: missing pull_request.base")
    try:
        repo = pull_request["base"]["repo"]
        return PullRequestEvent(
            action=str(data.get("action", "")),
            owner=repo["owner"]["login"],
            repo=repo["name"],
            number=int(pull_request["number"]),
            labels=frozenset(label["name"] for label in pull_request.get("labels") or []),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid event payload: {exc!r}") from exc


def load_event(path: Union[str, Path]) -> PullRequestEvent:
    """Read and parse the event JSON written by the Actions runner."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read event file {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid event JSON in {path}: {exc}") from exc
    return parse_event(data)
