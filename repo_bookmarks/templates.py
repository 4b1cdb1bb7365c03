"""
templates.py

Responsibility: lay out bookmarks for each hosting provider.

A template takes repository descriptors and drives a `BookmarkTreeBuilder`:
one `<project>/<Provider>/<repo>` folder chain per repository, holding a pull
request link and one link per configured branch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from repo_bookmarks.errors import MalformedInputError, UpstreamUnavailableError
from repo_bookmarks.github_api import fetch_github_api_repos
from repo_bookmarks.props import Props
from repo_bookmarks.sources import RepoInfo, can_run, fetch_bitbucket_repos, fetch_github_repos
from repo_bookmarks.tree_builder import BookmarkTreeBuilder, Node

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, str | None], list[RepoInfo]]
Apply = Callable[[BookmarkTreeBuilder, Props, Iterable[RepoInfo]], list[Node]]


def _provider_template(
    builder: BookmarkTreeBuilder,
    props: Props,
    repos: Iterable[RepoInfo],
    *,
    provider: str,
    pulls_suffix: str,
    branch_prefix: str,
) -> list[Node]:
    for repo in repos:
        builder.go_to_root().add_folders([props.project_id, provider, repo.name])
        builder.add_link("Pull Requests", f"{repo.url}{pulls_suffix}")
        builder.compute_links(
            props.branches,
            lambda branch, url=repo.url: {"name": f"Branch: {branch}", "href": f"{url}{branch_prefix}{branch}"},
        )
    return builder.build()


def github_template(builder: BookmarkTreeBuilder, props: Props, repos: Iterable[RepoInfo]) -> list[Node]:
    return _provider_template(
        builder, props, repos, provider="GitHub", pulls_suffix="/pulls", branch_prefix="/tree/"
    )


def bitbucket_template(builder: BookmarkTreeBuilder, props: Props, repos: Iterable[RepoInfo]) -> list[Node]:
    return _provider_template(
        builder, props, repos, provider="Bitbucket", pulls_suffix="/pull-requests", branch_prefix="/branch/"
    )


def _fetch_github_api(project_id: str, token: str | None) -> list[RepoInfo]:
    if not token:
        raise UpstreamUnavailableError("GitHub token is required (use --github-token or set GITHUB_TOKEN)")
    return fetch_github_api_repos(project_id, token)


@dataclass(frozen=True)
class Template:
    name: str
    binary: str | None
    fetch: Fetcher
    apply: Apply


TEMPLATES: dict[str, Template] = {
    "github": Template("github", "gh", lambda pid, _token: fetch_github_repos(pid), github_template),
    "bitbucket": Template("bitbucket", "bitbucket", lambda pid, _token: fetch_bitbucket_repos(pid), bitbucket_template),
    "github-api": Template("github-api", None, _fetch_github_api, github_template),
}


def missing_binaries(templates: Iterable[str], *, registry: Mapping[str, Template] | None = None) -> list[str]:
    """Binaries needed by `templates` that cannot be run, in template order."""
    registry = TEMPLATES if registry is None else registry
    missing: list[str] = []
    for name in templates:
        template = registry.get(name)
        if template is None:
            logger.warning("Unknown template: %s", name)
            continue
        # github-api talks HTTP and needs no binary.
        if template.binary is None:
            continue
        if not can_run(template.binary) and template.binary not in missing:
            missing.append(template.binary)
    return missing


def generate_bookmarks(
    templates: Sequence[str],
    props: Props,
    *,
    github_token: str | None = None,
    registry: Mapping[str, Template] | None = None,
) -> list[Node]:
    """
    Run each named template with its own builder and concatenate the results
    in template order.

    A template whose source is unavailable contributes nothing.
    """
    registry = TEMPLATES if registry is None else registry
    if templates and not props.project_id:
        raise MalformedInputError("A project ID is required (use --project-id or `projectId` in props).")

    forest: list[Node] = []
    for name in templates:
        template = registry.get(name)
        if template is None:
            logger.warning("Unknown template: %s", name)
            continue
        try:
            repos = template.fetch(props.project_id, github_token)
        except UpstreamUnavailableError as e:
            logger.warning("Skipping template %s: %s", name, e)
            continue
        nodes = template.apply(BookmarkTreeBuilder(), props, repos)
        logger.info("Template %s produced %d top-level entries from %d repositories", name, len(nodes), len(repos))
        forest.extend(nodes)
    return forest
