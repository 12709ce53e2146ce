"""
release.py

Responsibility: Cut a release by creating and pushing an annotated SemVer tag.

High-level flow:
1) Validate the version -> `vX.Y.Z`
2) Require the release branch (offer to switch) and a clean working tree
3) Pull, refuse an existing tag, preview commits since the previous tag
4) Confirm, ask for a message, tag, push
5) Print where to watch the CI build and pull the image

Pushing the tag is what triggers the release workflow in CI; nothing here
builds images or talks to the GitHub API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console

from boilerplate.config import Config
from boilerplate.git import Git
from boilerplate.prompts import Prompter
from boilerplate.remote import RemoteError, RepoSlug, parse_remote_url
from boilerplate.versioning import normalize_version

logger = logging.getLogger(__name__)


class ReleaseError(RuntimeError):
    pass


@dataclass(frozen=True)
class ReleaseResult:
    tag: str
    previous_tag: str | None = None
    message: str = ""
    created: bool = False
    pushed: bool = False
    cancelled: bool = False
    dry_run: bool = False


@dataclass(frozen=True)
class ReleaseOptions:
    message: str | None = None
    pull: bool = True
    push: bool = True
    dry_run: bool = False


class Release:
    def __init__(
        self,
        *,
        git: Git,
        config: Config,
        console: Console,
        prompter: Prompter,
        options: ReleaseOptions | None = None,
    ) -> None:
        self.git = git
        self.config = config
        self.console = console
        self.prompter = prompter
        self.options = options or ReleaseOptions()

    def ensure_release_branch(self) -> None:
        main = self.config.main_branch
        current = self.git.current_branch()
        if current == main:
            return
        self.console.print(f"[red]Error: Must be on {main} branch to create release[/red]")
        self.console.print(f"Current branch: [yellow]{current}[/yellow]\n")
        if not self.prompter.confirm(f"Switch to {main} branch?"):
            raise ReleaseError(f"Release must be created from the {main} branch (current: {current})")
        self.git.checkout(main)

    def ensure_clean_tree(self) -> None:
        dirty = self.git.status_short()
        if dirty:
            listing = "\n".join(f"  {line}" for line in dirty)
            raise ReleaseError(
                f"Working directory is not clean\nPlease commit or stash your changes first\n{listing}"
            )

    def preview_changes(self) -> str | None:
        previous = self.git.latest_tag()
        if previous is None:
            self.console.print("\n[yellow]This will be the first release[/yellow]")
            return None

        limit = self.config.changelog_limit
        self.console.print(f"\n[yellow]Previous version:[/yellow] {previous}")
        self.console.print("\n[yellow]Changes since last release:[/yellow]")
        for line in self.git.log_oneline(previous, limit=limit):
            self.console.print(line, markup=False, highlight=False)
        total = self.git.count_commits(previous)
        if total > limit:
            self.console.print(f"... and {total - limit} more commits")
        return previous

    def next_steps(self, tag: str) -> None:
        url = self.git.remote_url(self.config.remote)
        slug: RepoSlug | None = None
        if url:
            try:
                slug = parse_remote_url(url)
            except RemoteError as e:
                logger.debug("Cannot derive repository links: %s", e)
        if slug is None:
            self.console.print(f"[yellow]No usable '{self.config.remote}' remote; skipping repository links[/yellow]")
            return

        self.console.print(
            "\nNext steps:\n"
            "1. Check GitHub Actions for build status:\n"
            f"   {slug.actions_url}\n\n"
            "2. View the release when ready:\n"
            f"   {slug.releases_url}\n\n"
            "3. Pull the image:\n"
            f"   docker pull {slug.image_ref(tag, registry=self.config.registry)}",
            markup=False,
            highlight=False,
        )

    def run(self, raw_version: str) -> ReleaseResult:
        opts = self.options
        self.console.print("[green]=== Release Creation ===[/green]\n")

        tag = normalize_version(raw_version)
        self.console.print(f"[yellow]Version:[/yellow] {tag}")

        self.ensure_release_branch()
        self.ensure_clean_tree()

        if opts.pull:
            self.console.print("\n[yellow]Pulling latest changes...[/yellow]")
            self.git.pull(self.config.remote, self.config.main_branch)

        if self.git.tag_exists(tag):
            raise ReleaseError(f"Tag {tag} already exists")

        previous = self.preview_changes()

        if opts.dry_run:
            self.console.print(f"\n[yellow]Dry run: release {tag} not created[/yellow]")
            return ReleaseResult(tag=tag, previous_tag=previous, dry_run=True)

        self.console.print(f"\n[yellow]Ready to create release {tag}[/yellow]")
        if not self.prompter.confirm("Continue?"):
            self.console.print("Release cancelled")
            return ReleaseResult(tag=tag, previous_tag=previous, cancelled=True)

        default_message = f"Release {tag}"
        message = opts.message
        if not message:
            message = self.prompter.ask("\nEnter release message (press Enter for default):", default=default_message)

        self.console.print("\n[yellow]Creating tag...[/yellow]")
        self.git.create_annotated_tag(tag, message)

        if not opts.push:
            self.console.print(f"\n[green]✅ Tag {tag} created locally (not pushed)[/green]")
            self.console.print(f"Push it with: git push {self.config.remote} {tag}", markup=False)
            return ReleaseResult(tag=tag, previous_tag=previous, message=message, created=True)

        self.console.print("[yellow]Pushing tag to remote...[/yellow]")
        self.git.push(self.config.remote, tag)

        self.console.print(f"\n[green]✅ Release {tag} created successfully![/green]")
        self.next_steps(tag)
        return ReleaseResult(tag=tag, previous_tag=previous, message=message, created=True, pushed=True)


def create_release(
    raw_version: str,
    *,
    git: Git,
    config: Config,
    console: Console,
    prompter: Prompter,
    options: ReleaseOptions | None = None,
) -> ReleaseResult:
    release = Release(git=git, config=config, console=console, prompter=prompter, options=options)
    return release.run(raw_version)
