"""
cli.py

Responsibility: CLI entrypoint for repo-bookmarks.

High-level flow (`generate-json` / `generate-html`):
1) Load props (inline JSON or JSON/YAML file) and apply CLI overrides
2) For each template, fetch repositories and build its bookmark forest
3) Render JSON or Netscape HTML
4) Print, or replace the output artifact on disk

This module should orchestrate behavior but keep concerns isolated:
- Props parsing: `props.py`
- Repository data: `sources.py`, `github_api.py`
- Bookmark layout: `templates.py`
- Rendering / writing: `renderer.py`
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import os
import sys
from pathlib import Path

from repo_bookmarks.errors import MalformedInputError, UpstreamUnavailableError
from repo_bookmarks.props import Props, load_props
from repo_bookmarks.renderer import RenderError, render_html, render_json, write_output
from repo_bookmarks.serialize import load_forest
from repo_bookmarks.sources import RepoInfo, fetch_bitbucket_repos, fetch_github_repos
from repo_bookmarks.templates import generate_bookmarks, missing_binaries
from repo_bookmarks.tree_builder import Node

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, verbose: bool = False, log_file: str | None = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT, handlers=handlers, force=True)


def _templates(args: argparse.Namespace) -> list[str]:
    out: list[str] = []
    for raw in args.templates or []:
        out.extend(t.strip() for t in raw.split(",") if t.strip())
    return out


def _props(args: argparse.Namespace) -> Props:
    props = load_props(args.props, args.props_file)
    if args.project_id:
        props = dataclasses.replace(props, project_id=args.project_id)
    return props


def _generate(args: argparse.Namespace, props: Props | None = None) -> list[Node]:
    token = args.github_token or os.environ.get("GITHUB_TOKEN") or None
    return generate_bookmarks(_templates(args), props or _props(args), github_token=token)


def _print_repos(repos: list[RepoInfo]) -> None:
    print(json.dumps([dataclasses.asdict(r) for r in repos], indent=2))


def precheck_cmd(args: argparse.Namespace) -> int:
    missing = missing_binaries(_templates(args))
    if missing:
        logger.error("Missing binaries to run template. Binary: %s", ", ".join(missing))
        return 1
    logger.info("All required binaries are installed.")
    return 0


def fetch_github_cmd(args: argparse.Namespace) -> int:
    try:
        repos = fetch_github_repos(_props(args).project_id)
    except UpstreamUnavailableError:
        return 1
    logger.info("Fetched GitHub data: %d repositories", len(repos))
    _print_repos(repos)
    return 0


def fetch_bitbucket_cmd(args: argparse.Namespace) -> int:
    try:
        repos = fetch_bitbucket_repos(_props(args).project_id)
    except UpstreamUnavailableError:
        return 1
    logger.info("Fetched Bitbucket data: %d repositories", len(repos))
    _print_repos(repos)
    return 0


def generate_json_cmd(args: argparse.Namespace) -> int:
    content = render_json(_generate(args))
    if args.output and not args.output_json:
        write_output(args.output, content + "\n")
    else:
        print(content)
    return 0


def generate_html_cmd(args: argparse.Namespace) -> int:
    props = _props(args)
    if args.input:
        # Render a previously exported forest; templates are not run.
        forest = load_forest(args.input)
        logger.info("Loaded %d top-level entries from %s", len(forest), args.input)
    else:
        forest = _generate(args, props)
    if args.output_json:
        print(render_json(forest))
        return 0
    write_output(args.output or "index.html", render_html(forest, title=args.title or props.title))
    return 0


def _common_parser() -> argparse.ArgumentParser:
    c = argparse.ArgumentParser(add_help=False)
    c.add_argument("--project-id", default=None, help="The project ID for GitHub or Bitbucket")
    c.add_argument("--props", default=None, help="Additional JSON metadata")
    c.add_argument("--props-file", default=None, help="File containing additional JSON or YAML metadata")
    c.add_argument(
        "--templates",
        action="append",
        default=None,
        help="Comma-separated list of templates to use (github, bitbucket, github-api); repeatable",
    )
    c.add_argument("--github-token", default=None, help="GitHub token for github-api (or set env GITHUB_TOKEN)")
    c.add_argument("--output-json", action="store_true", help="Print JSON data to stdout for debugging")
    c.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    c.add_argument("--log-file", default=None, help="Also write logs to this file")
    return c


def _build_parser() -> argparse.ArgumentParser:
    common = _common_parser()
    p = argparse.ArgumentParser(prog="repo-bookmarks", description="Generate browser bookmarks for repositories")
    sub = p.add_subparsers(dest="command", required=True)

    pc = sub.add_parser("precheck", parents=[common], help="Check required binaries are installed")
    pc.set_defaults(func=precheck_cmd)

    fg = sub.add_parser("fetch-github", parents=[common], help="Fetch GitHub repository data")
    fg.set_defaults(func=fetch_github_cmd)

    fb = sub.add_parser("fetch-bitbucket", parents=[common], help="Fetch Bitbucket repository data")
    fb.set_defaults(func=fetch_bitbucket_cmd)

    gj = sub.add_parser("generate-json", parents=[common], help="Generate JSON bookmarks")
    gj.add_argument("--output", default=None, help="Write JSON to this file instead of stdout")
    gj.set_defaults(func=generate_json_cmd)

    gh = sub.add_parser("generate-html", parents=[common], help="Generate HTML bookmarks")
    gh.add_argument("--output", default=None, help="HTML output path (default: index.html)")
    gh.add_argument("--title", default=None, help="Bookmark file title (overrides `title` in props; default: Bookmarks)")
    gh.add_argument("--input", default=None, help="Render this JSON forest (from generate-json) instead of running templates")
    gh.set_defaults(func=generate_html_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, log_file=args.log_file)
    try:
        return int(args.func(args))
    except (MalformedInputError, RenderError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
