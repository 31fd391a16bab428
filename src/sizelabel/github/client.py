"""GitHub REST client — pull request diff retrieval and label mutations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from sizelabel import __version__
from sizelabel.config.schema import DEFAULT_API_URL

logger = logging.getLogger(__name__)

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


class UpstreamError(Exception):
    """GitHub API or transport failure."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    """Minimal GitHub API client for the labeler.

    Transient failures (429, 5xx) are retried by the session adapter; any
    other non-2xx response raises UpstreamError.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_API_URL, timeout: float = 30.0) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=None,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": f"size-label/{__version__}",
        })
        return session

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise UpstreamError(f"Request failed: {method} {url}: {exc}") from exc

        if not response.ok:
            message = response.reason or "Unknown error"
            try:
                message = response.json().get("message", message)
            except ValueError:
                pass
            raise UpstreamError(
                f"GitHub API error: {response.status_code} - {message}",
                status_code=response.status_code,
            )
        return response

    def get_pull_request_diff(self, owner: str, repo: str, number: int) -> str:
        """Return the unified diff of a pull request."""
        logger.debug("Fetching diff for %s/%s#%d", owner, repo, number)
        response = self._request(
            "GET",
            f"/repos/{owner}/{repo}/pulls/{number}",
            headers={"Accept": DIFF_MEDIA_TYPE},
        )
        response.encoding = "utf-8"
        return response.text

    def add_labels(self, owner: str, repo: str, number: int, labels: List[str]) -> List[Dict[str, Any]]:
        """Attach *labels* to the issue/pull request; returns the resulting labels."""
        logger.debug("Adding labels: %s", labels)
        response = self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{number}/labels",
            json={"labels": labels},
        )
        return response.json()

    def remove_label(self, owner: str, repo: str, number: int, name: str) -> None:
        """Detach a single label."""
        logger.debug("Removing label: %s", name)
        self._request(
            "DELETE",
            f"/repos/{owner}/{repo}/issues/{number}/labels/{quote(name, safe='')}",
        )
