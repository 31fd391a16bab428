"""GitHub boundary — event payloads and the REST client."""

from sizelabel.github.client import GitHubClient, UpstreamError
from sizelabel.github.event import HANDLED_ACTIONS, PullRequestEvent, load_event, parse_event

__all__ = [
    "HANDLED_ACTIONS",
    "GitHubClient",
    "PullRequestEvent",
    "UpstreamError",
    "load_event",
    "parse_event",
]
