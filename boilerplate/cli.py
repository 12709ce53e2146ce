"""
cli.py

Responsibility: CLI entrypoint for boilerplate-kit.

Commands:
- `setup`: install project templates, init git, create the develop branch
- `release`: validate a version, tag the release branch, push the tag
- `release-status`: ask GitHub whether CI published the release for a tag
- `image-tags`: print the image references CI publishes for a version or branch

This module should orchestrate behavior but keep concerns isolated:
- Setup flow: `bootstrap.py`
- Release flow: `release.py`
- git commands: `git.py`
- GitHub API: `github_client.py`
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from boilerplate import __version__
from boilerplate.bootstrap import PackageManager, ProjectType, run_setup
from boilerplate.config import Config, ConfigError, load_config
from boilerplate.git import Git, GitError
from boilerplate.github_client import GitHubClient, GitHubError
from boilerplate.prompts import Prompter
from boilerplate.release import ReleaseError, ReleaseOptions, create_release
from boilerplate.remote import RemoteError, RepoSlug, parse_remote_url
from boilerplate.templates import DEFAULT_TEMPLATES_DIR, TemplateError
from boilerplate.versioning import VersionError, branch_image_tag, normalize_version, release_image_tags

logger = logging.getLogger(__name__)

HANDLED_ERRORS = (
    ConfigError,
    GitError,
    GitHubError,
    ReleaseError,
    RemoteError,
    TemplateError,
    VersionError,
)


class CLIError(RuntimeError):
    pass


def _project_root(args: argparse.Namespace) -> Path:
    root = Path(args.directory).resolve()
    if not root.is_dir():
        raise CLIError(f"Not a directory: {root}")
    return root


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _resolve_slug(repo: str | None, git: Git, config: Config) -> RepoSlug | None:
    if repo:
        owner, sep, name = repo.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise CLIError(f"Repository must be given as OWNER/NAME, got {repo!r}")
        return RepoSlug(host="github.com", owner=owner, name=name)
    url = git.remote_url(config.remote)
    return parse_remote_url(url) if url else None


def setup_cmd(args: argparse.Namespace, console: Console) -> int:
    root = _project_root(args)
    config = load_config(root)
    run_setup(
        root,
        config=config,
        console=console,
        prompter=Prompter(console, assume_yes=bool(args.yes)),
        templates_dir=Path(args.templates_dir),
        project_type=ProjectType(args.project_type) if args.project_type else None,
        package_manager=PackageManager(args.package_manager) if args.package_manager else None,
    )
    return 0


def release_cmd(args: argparse.Namespace, console: Console) -> int:
    root = _project_root(args)
    config = load_config(root)
    create_release(
        args.version,
        git=Git(root),
        config=config,
        console=console,
        prompter=Prompter(console, assume_yes=bool(args.yes)),
        options=ReleaseOptions(
            message=args.message,
            pull=not bool(args.no_pull),
            push=not bool(args.no_push),
            dry_run=bool(args.dry_run),
        ),
    )
    # A cancelled release is not an error.
    return 0


def release_status_cmd(args: argparse.Namespace, console: Console) -> int:
    root = _project_root(args)
    config = load_config(root)
    tag = normalize_version(args.version)
    slug = _resolve_slug(args.repo, Git(root), config)
    if slug is None:
        raise CLIError(f"No '{config.remote}' remote configured (use --repo OWNER/NAME)")

    token = args.token or os.environ.get("GITHUB_TOKEN") or None
    gh = GitHubClient(token)

    runs = gh.list_workflow_runs(slug.owner, slug.name, branch=tag, limit=args.limit)
    if runs:
        table = Table(title=f"Workflow runs for {tag}")
        table.add_column("Workflow", style="cyan")
        table.add_column("Status")
        table.add_column("Conclusion")
        table.add_column("URL", style="magenta")
        for run in runs:
            conclusion = run.conclusion or "-"
            style = "green" if conclusion == "success" else "red" if conclusion == "failure" else "yellow"
            table.add_row(run.name, run.status, f"[{style}]{conclusion}[/{style}]", run.html_url)
        console.print(table)
    else:
        console.print(f"[yellow]No workflow runs found for {tag}[/yellow]")

    release = gh.get_release(slug.owner, slug.name, tag)
    if release is None:
        console.print(f"[yellow]Release {tag} is not published yet[/yellow]")
        return 1

    kind = "draft" if release.draft else "pre-release" if release.prerelease else "release"
    console.print(f"[green]✅ {release.name} ({kind})[/green] {release.html_url}")
    if release.published_at:
        console.print(f"Published: {release.published_at}")
    for asset in release.assets:
        console.print(f"  - {asset}", markup=False)
    console.print(f"Image: {slug.image_ref(tag, registry=config.registry)}", markup=False)
    return 0


def image_tags_cmd(args: argparse.Namespace, console: Console) -> int:
    if bool(args.version) == bool(args.branch):
        raise CLIError("Give either a VERSION or --branch NAME")

    tags = release_image_tags(args.version) if args.version else [branch_image_tag(args.branch)]

    root = _project_root(args)
    config = load_config(root)
    try:
        slug = _resolve_slug(args.image, Git(root), config)
    except (GitError, RemoteError) as e:
        logger.debug("No repository for image name: %s", e)
        slug = None

    for tag in tags:
        line = slug.image_ref(tag, registry=config.registry) if slug else tag
        console.print(line, markup=False, highlight=False)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="boilerplate", description="Project setup and release helper")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-C", "--directory", default=".", help="Project directory (default: current directory)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log git commands and API calls")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("setup", help="Install templates, initialize git and create the develop branch")
    s.add_argument("--project-type", choices=[t.value for t in ProjectType], default=None)
    s.add_argument("--package-manager", choices=[m.value for m in PackageManager], default=None)
    s.add_argument("-y", "--yes", action="store_true", help="Answer yes to every question")
    s.add_argument(
        "--templates-dir",
        default=str(DEFAULT_TEMPLATES_DIR),
        help="Directory holding the template files (default: bundled templates)",
    )
    s.set_defaults(func=setup_cmd)

    r = sub.add_parser("release", help="Create and push an annotated release tag")
    r.add_argument("version", help="Release version, e.g. 1.0.0 or v1.0.0")
    r.add_argument("-m", "--message", default=None, help="Tag message (default: 'Release vX.Y.Z')")
    r.add_argument("-y", "--yes", action="store_true", help="Answer yes to every question")
    r.add_argument("--no-pull", action="store_true", help="Do not pull the release branch first")
    r.add_argument("--no-push", action="store_true", help="Create the tag locally only")
    r.add_argument("--dry-run", action="store_true", help="Run the checks and preview, create nothing")
    r.set_defaults(func=release_cmd)

    st = sub.add_parser("release-status", help="Show CI runs and the GitHub release for a tag")
    st.add_argument("version", help="Release version, e.g. 1.0.0 or v1.0.0")
    st.add_argument("--repo", default=None, help="OWNER/NAME (default: derived from the remote)")
    st.add_argument("--token", default=None, help="GitHub token (or set env GITHUB_TOKEN)")
    st.add_argument("--limit", type=_positive_int, default=5, help="Number of workflow runs to show (default: 5)")
    st.set_defaults(func=release_status_cmd)

    t = sub.add_parser("image-tags", help="Print the image tags published for a version or branch")
    t.add_argument("version", nargs="?", default=None, help="Release version")
    t.add_argument("--branch", default=None, help="Branch name instead of a version")
    t.add_argument("--image", default=None, help="OWNER/NAME (default: derived from the remote)")
    t.set_defaults(func=image_tags_cmd)

    return p


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    console = console or Console()

    try:
        return int(args.func(args, console))
    except (CLIError, *HANDLED_ERRORS) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    except EOFError:
        console.print("\n[red]Error: no input available (use --yes for non-interactive runs)[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted[/yellow]")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
