"""
sources.py

Responsibility: fetch repository descriptors from hosting-provider CLIs.

This module is the only place that shells out to `gh` or `bitbucket`.
Failures surface as `UpstreamUnavailableError`; callers decide whether to
skip the affected template. No retries.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from typing import Any

from repo_bookmarks.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepoInfo:
    name: str
    url: str


def can_run(binary: str) -> bool:
    """Return True if `<binary> --version` exits successfully."""
    try:
        subprocess.run([binary, "--version"], check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return False
    return True


def _run_json(cmd: list[str]) -> Any:
    """
    Run a CLI command and parse its stdout as JSON.
    """
    try:
        proc = subprocess.run(cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
    except FileNotFoundError as e:
        raise UpstreamUnavailableError(f"Command not found: {cmd[0]}") from e
    except subprocess.CalledProcessError as e:
        raise UpstreamUnavailableError(f"Command failed: {' '.join(cmd)}\n\n{e.stderr or e.stdout}") from e
    try:
        return json.loads(proc.stdout)
    except json.JSONDecodeError as e:
        raise UpstreamUnavailableError(f"Command returned invalid JSON: {' '.join(cmd)}") from e


def parse_repos(data: Any) -> list[RepoInfo]:
    """Accept a single repository object or a list of them."""
    records = data if isinstance(data, list) else [data]
    repos: list[RepoInfo] = []
    for record in records:
        if not isinstance(record, dict) or not record.get("name") or not record.get("url"):
            raise UpstreamUnavailableError(f"Repository record is missing `name`/`url`: {record!r}")
        repos.append(RepoInfo(name=str(record["name"]), url=str(record["url"]).rstrip("/")))
    return repos


def _fetch(provider: str, cmd: list[str], project_id: str) -> list[RepoInfo]:
    try:
        repos = parse_repos(_run_json(cmd))
    except UpstreamUnavailableError as e:
        logger.error("Failed to fetch %s data for project ID %s. Reason: %s", provider, project_id, e)
        raise
    logger.debug("Fetched %d %s repositories for %s", len(repos), provider, project_id)
    return repos


def _target(project_id: str) -> list[str]:
    # Without a project ID the CLIs fall back to the repository in the current directory.
    return [project_id] if project_id else []


def fetch_github_repos(project_id: str) -> list[RepoInfo]:
    return _fetch("GitHub", ["gh", "repo", "view", *_target(project_id), "--json", "name,url"], project_id)


def fetch_bitbucket_repos(project_id: str) -> list[RepoInfo]:
    return _fetch("Bitbucket", ["bitbucket", "repo", "view", *_target(project_id), "--json"], project_id)
