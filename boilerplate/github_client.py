"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

It is used after a tag push to see whether CI published the release.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

logger = logging.getLogger(__name__)


class GitHubError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class ReleaseInfo:
    tag: str
    name: str
    html_url: str
    draft: bool
    prerelease: bool
    published_at: str | None
    assets: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WorkflowRun:
    name: str
    status: str
    conclusion: str | None
    head_branch: str
    html_url: str


class GitHubClient:
    def __init__(self, token: str | None = None, api_base: str = "https://api.github.com", timeout: float = 30) -> None:
        # Public repositories can be read anonymously, at a lower rate limit.
        self._token = (token or "").strip() or None
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "boilerplate-kit",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_base}{path}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            r = requests.request(method, url, headers=self._headers(), params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(
                f"GitHub API error {r.status_code} {method} {path}: {message}",
                status_code=r.status_code,
            )
        if r.status_code == 204:
            return None
        return r.json()

    def get_release(self, owner: str, name: str, tag: str) -> ReleaseInfo | None:
        """
        Return the release published for `tag`, or None if there is none (yet).
        """
        try:
            data = self._request("GET", f"/repos/{owner}/{name}/releases/tags/{tag}")
        except GitHubError as e:
            if e.status_code == 404:
                return None
            raise
        return ReleaseInfo(
            tag=data.get("tag_name") or tag,
            name=data.get("name") or tag,
            html_url=data["html_url"],
            draft=bool(data.get("draft")),
            prerelease=bool(data.get("prerelease")),
            published_at=data.get("published_at"),
            assets=[a["name"] for a in data.get("assets") or []],
        )

    def list_workflow_runs(self, owner: str, name: str, *, branch: str, limit: int = 5) -> list[WorkflowRun]:
        """
        Most recent workflow runs for `branch`; for tag pushes GitHub reports the
        tag name as the run's head branch.
        """
        data = self._request(
            "GET",
            f"/repos/{owner}/{name}/actions/runs",
            params={"branch": branch, "per_page": limit},
        )
        runs = (data or {}).get("workflow_runs") or []
        return [
            WorkflowRun(
                name=run.get("name") or "",
                status=run.get("status") or "",
                conclusion=run.get("conclusion"),
                head_branch=run.get("head_branch") or branch,
                html_url=run.get("html_url") or "",
            )
            for run in runs[:limit]
        ]
