"""
github_api.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

It is an alternative repository source for machines without the `gh` CLI.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from repo_bookmarks.errors import UpstreamUnavailableError
from repo_bookmarks.sources import RepoInfo

logger = logging.getLogger(__name__)

PER_PAGE = 100


class GitHubError(UpstreamUnavailableError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    def __init__(self, token: str, api_base: str = "https://api.github.com") -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required.")
        self._token = token
        self._api_base = api_base.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "repo-bookmarks",
        }

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_base}{path}"
        try:
            r = requests.request(method, url, headers=self._headers(), params=params, timeout=30)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {message}", r.status_code)
        if r.status_code == 204:
            return None
        return r.json()

    def get_repo(self, owner: str, name: str) -> RepoInfo | None:
        """
        Return RepoInfo if the repo exists and is accessible; otherwise None.
        """
        try:
            data = self._request("GET", f"/repos/{owner}/{name}")
        except GitHubError as e:
            if e.status_code == 404:
                return None
            raise
        return RepoInfo(name=data["name"], url=data["html_url"])

    def _list_pages(self, path: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = self._request("GET", path, params={"per_page": PER_PAGE, "page": page}) or []
            items.extend(batch)
            if len(batch) < PER_PAGE:
                return items
            page += 1

    def list_repos(self, owner: str) -> list[RepoInfo]:
        """
        List repositories of an organization, or of a user when `owner` is
        not an organization.
        """
        try:
            data = self._list_pages(f"/orgs/{owner}/repos")
        except GitHubError as e:
            if e.status_code != 404:
                raise
            logger.debug("%s is not an organization; listing user repositories", owner)
            data = self._list_pages(f"/users/{owner}/repos")
        return [RepoInfo(name=item["name"], url=item["html_url"]) for item in data]


def fetch_github_api_repos(project_id: str, token: str) -> list[RepoInfo]:
    """
    Resolve `project_id` as `owner/name` (one repository) or `owner` (all of
    the owner's repositories).
    """
    client = GitHubClient(token)
    if "/" in project_id:
        owner, name = project_id.split("/", 1)
        repo = client.get_repo(owner, name)
        if repo is None:
            raise GitHubError(f"Repository not found: {project_id}", 404)
        return [repo]
    return client.list_repos(project_id)
