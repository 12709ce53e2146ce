"""
bootstrap.py

Responsibility: Interactive first-time setup of a project created from the boilerplate.

High-level flow:
1) Offer `git init` when the directory is not a repository
2) Pick a project type (Python or Next.js) and install its templates
3) Offer a CHANGELOG.md
4) Offer a develop branch
5) Print next steps

Templates are never overwritten: an existing file is reported and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from boilerplate.config import Config
from boilerplate.git import Git, GitError
from boilerplate.prompts import Prompter
from boilerplate.templates import DEFAULT_TEMPLATES_DIR, InstallResult, install_template

logger = logging.getLogger(__name__)


class ProjectType(str, Enum):
    PYTHON = "python"
    NEXTJS = "nextjs"


class PackageManager(str, Enum):
    UV = "uv"
    PIP = "pip"


PROJECT_TYPE_ANSWERS = {
    "1": ProjectType.PYTHON,
    "python": ProjectType.PYTHON,
    "2": ProjectType.NEXTJS,
    "nextjs": ProjectType.NEXTJS,
    "next.js": ProjectType.NEXTJS,
}

UV_NEXT_STEPS = [
    "Install uv: curl -LsSf https://astral.sh/uv/install.sh | sh",
    "Edit pyproject.toml and uncomment dependencies",
    "Run: uv venv && source .venv/bin/activate",
    'Run: uv pip install -e ".[dev]"',
    "Update Dockerfile port and start command",
]

PIP_NEXT_STEPS = [
    "Edit requirements.txt and add your dependencies",
    "Create venv: python -m venv venv",
    "Activate: source venv/bin/activate",
    "Install: pip install -r requirements.txt",
    "Update Dockerfile port and start command",
]

NEXTJS_NEXT_STEPS = [
    "Ensure next.config.js has: output: 'standalone'",
    "Update package.json with your dependencies",
    "Edit .github/workflows/ci.yml to add test commands",
]


@dataclass
class SetupReport:
    project_type: ProjectType | None = None
    package_manager: PackageManager | None = None
    git_initialized: bool = False
    develop_created: bool = False
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    next_steps: list[str] = field(default_factory=list)


class Setup:
    def __init__(
        self,
        root: str | Path,
        *,
        config: Config,
        console: Console,
        prompter: Prompter,
        git: Git | None = None,
        templates_dir: str | Path = DEFAULT_TEMPLATES_DIR,
    ) -> None:
        self.root = Path(root)
        self.config = config
        self.console = console
        self.prompter = prompter
        self.git = git or Git(self.root)
        self.templates_dir = Path(templates_dir)
        self.report = SetupReport()

    def _install(self, template: str, destination: str, *, alternatives: tuple[str, ...] = ()) -> InstallResult:
        result = install_template(
            template,
            self.root / destination,
            context=self.config.template_context(),
            templates_dir=self.templates_dir,
            alternatives=[self.root / a for a in alternatives],
        )
        if result.created:
            self.report.created.append(destination)
            self.console.print(f"[green]✅ {destination} created[/green]")
        else:
            self.report.skipped.append(destination)
            existing = result.existing.name if result.existing else destination
            self.console.print(f"[yellow]⚠ {existing} already exists, skipping[/yellow]")
        return result

    def ensure_repository(self) -> None:
        if self.git.is_repository():
            return
        self.console.print("[yellow]Git repository not initialized[/yellow]")
        if self.prompter.confirm("Initialize git repository?"):
            self.git.init()
            self.report.git_initialized = True
            self.console.print("[green]✅ Git repository initialized[/green]")

    def select_project_type(self, preset: ProjectType | None) -> ProjectType | None:
        if preset is not None:
            return preset
        self.console.print("\n[blue]Step 1: Select your project type[/blue]")
        self.console.print("1) Python")
        self.console.print("2) Next.js")
        answer = self.prompter.ask("Enter choice (1 or 2):")
        return PROJECT_TYPE_ANSWERS.get(answer.strip().lower())

    def select_package_manager(self, preset: PackageManager | None) -> PackageManager:
        if preset is not None:
            return preset
        self.console.print("\n[blue]Choose package manager:[/blue]")
        self.console.print("1) uv + pyproject.toml (faster, modern - recommended)")
        self.console.print("2) pip + requirements.txt (traditional)")
        default = "1" if self.prompter.assume_yes else ""
        answer = self.prompter.ask("Enter choice (1 or 2):", default=default).strip().lower()
        # Anything other than uv, an empty answer included, falls back to pip.
        return PackageManager.UV if answer in ("1", "uv") else PackageManager.PIP

    def setup_python(self, package_manager: PackageManager | None) -> None:
        self.console.print("[yellow]Setting up Python project...[/yellow]")
        self._install("Dockerfile.python", "Dockerfile")

        manager = self.select_package_manager(package_manager)
        self.report.package_manager = manager
        if manager is PackageManager.UV:
            self._install("pyproject.toml", "pyproject.toml")
            self.report.next_steps.extend(UV_NEXT_STEPS)
        else:
            self._install("requirements.txt", "requirements.txt")
            self._install("requirements-dev.txt", "requirements-dev.txt")
            self.report.next_steps.extend(PIP_NEXT_STEPS)

    def setup_nextjs(self) -> None:
        self.console.print("[yellow]Setting up Next.js project...[/yellow]")
        self._install("Dockerfile.nextjs", "Dockerfile")
        self._install("next.config.js", "next.config.js", alternatives=("next.config.mjs",))
        self._install("package.json", "package.json")
        self.report.next_steps.extend(NEXTJS_NEXT_STEPS)

    def offer_changelog(self) -> None:
        if (self.root / "CHANGELOG.md").exists():
            return
        self.console.print("\n[blue]Step 2: Create CHANGELOG.md?[/blue]")
        if self.prompter.confirm("Create CHANGELOG.md?"):
            self._install("CHANGELOG.md", "CHANGELOG.md")

    def offer_develop_branch(self) -> None:
        self.console.print("\n[blue]Step 3: Create branches[/blue]")
        try:
            current = self.git.current_branch()
        except GitError as e:
            # No commits yet, or not a repository at all.
            logger.debug("Cannot determine current branch: %s", e)
            return

        develop = self.config.develop_branch
        self.console.print(f"Current branch: [yellow]{current}[/yellow]")
        if self.git.branch_exists(develop):
            self.console.print(f"[green]✅ {develop.capitalize()} branch already exists[/green]")
            return
        if not self.prompter.confirm(f"Create {develop} branch?"):
            return
        try:
            self.git.create_branch(develop)
        except GitError:
            self.git.checkout(develop)
        self.report.develop_created = True
        self.console.print(f"[green]✅ {develop.capitalize()} branch created[/green]")

    def print_summary(self) -> None:
        cfg = self.config
        if self.report.next_steps:
            if self.report.package_manager is None:
                label = "Next.js"
            else:
                label = f"Python + {self.report.package_manager.value}"
            self.console.print(f"\n[yellow]Next steps for {label}:[/yellow]")
            for i, step in enumerate(self.report.next_steps, start=1):
                self.console.print(f"{i}. {step}", markup=False)

        self.console.print(Panel("Setup Complete!", border_style="green", expand=False))
        self.console.print("[yellow]Next Steps:[/yellow]\n")
        self.console.print(
            "1. Push to GitHub:\n"
            "   git add .\n"
            '   git commit -m "chore: initial setup"\n'
            f"   git push {cfg.remote} {cfg.main_branch}\n"
            f"   git push {cfg.remote} {cfg.develop_branch}\n\n"
            "2. Configure GitHub:\n"
            "   - Go to repository Settings → Actions → General\n"
            "   - Enable 'Read and write permissions'\n\n"
            "3. Start developing:\n"
            f"   git checkout {cfg.develop_branch}\n"
            "   # Make your changes\n"
            f"   git push {cfg.remote} {cfg.develop_branch}\n\n"
            "4. Create your first release:\n"
            "   boilerplate release 1.0.0\n",
            markup=False,
        )
        self.console.print("[green]Happy coding! 🚀[/green]")

    def run(
        self,
        *,
        project_type: ProjectType | None = None,
        package_manager: PackageManager | None = None,
    ) -> SetupReport:
        self.console.print(Panel("Boilerplate Setup", border_style="green", expand=False))
        self.ensure_repository()

        selected = self.select_project_type(project_type)
        self.report.project_type = selected
        if selected is ProjectType.PYTHON:
            self.setup_python(package_manager)
        elif selected is ProjectType.NEXTJS:
            self.setup_nextjs()
        else:
            self.console.print("[yellow]Invalid choice, skipping project setup[/yellow]")

        self.offer_changelog()
        self.offer_develop_branch()
        self.print_summary()
        logger.debug("Setup report: %s", self.report)
        return self.report


def run_setup(
    root: str | Path,
    *,
    config: Config,
    console: Console,
    prompter: Prompter,
    git: Git | None = None,
    templates_dir: str | Path = DEFAULT_TEMPLATES_DIR,
    project_type: ProjectType | None = None,
    package_manager: PackageManager | None = None,
) -> SetupReport:
    setup = Setup(root, config=config, console=console, prompter=prompter, git=git, templates_dir=templates_dir)
    return setup.run(project_type=project_type, package_manager=package_manager)
