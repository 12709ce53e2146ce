"""
git.py

Responsibility: Run the git commands used by setup and release.

Every method maps to a single git invocation. Nothing here prompts or prints;
callers decide how to react to the returned values or to a `GitError`.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitError(RuntimeError):
    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class Git:
    def __init__(self, cwd: str | Path, *, env: dict[str, str] | None = None) -> None:
        self.cwd = Path(cwd)
        self._env = env

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """
        Run `git <args>` in the working directory, raising a GitError on failure.
        """
        cmd = ["git", *args]
        logger.debug("$ %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.cwd),
                env=self._env,
                check=check,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found on PATH") from e
        except subprocess.CalledProcessError as e:
            output = (e.stderr or e.stdout or "").strip()
            raise GitError(f"Command failed: {' '.join(cmd)}\n\n{output}", returncode=e.returncode) from e
        return result

    def _output(self, *args: str) -> str:
        return self._run(*args).stdout.strip()

    def is_repository(self) -> bool:
        return (self.cwd / ".git").exists()

    def init(self) -> None:
        self._run("init")

    def current_branch(self) -> str:
        return self._output("rev-parse", "--abbrev-ref", "HEAD")

    def status_short(self) -> list[str]:
        return [line for line in self._run("status", "--short").stdout.splitlines() if line.strip()]

    def checkout(self, branch: str) -> None:
        self._run("checkout", branch)

    def create_branch(self, branch: str) -> None:
        self._run("checkout", "-b", branch)

    def branch_exists(self, branch: str) -> bool:
        result = self._run("show-ref", "--verify", "--quiet", f"refs/heads/{branch}", check=False)
        return result.returncode == 0

    def pull(self, remote: str, branch: str) -> None:
        self._run("pull", remote, branch)

    def tag_exists(self, tag: str) -> bool:
        result = self._run("rev-parse", "--verify", "--quiet", f"refs/tags/{tag}", check=False)
        return result.returncode == 0

    def latest_tag(self) -> str | None:
        """
        Most recent tag reachable from HEAD, or None when there is none.
        """
        result = self._run("describe", "--tags", "--abbrev=0", check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def log_oneline(self, since: str, *, limit: int) -> list[str]:
        out = self._output("log", f"{since}..HEAD", "--oneline", "--no-merges", f"--max-count={limit}")
        return [line for line in out.splitlines() if line]

    def count_commits(self, since: str) -> int:
        return int(self._output("rev-list", f"{since}..HEAD", "--count", "--no-merges") or "0")

    def create_annotated_tag(self, tag: str, message: str) -> None:
        self._run("tag", "-a", tag, "-m", message)

    def push(self, remote: str, ref: str) -> None:
        self._run("push", remote, ref)

    def remote_url(self, remote: str = "origin") -> str | None:
        result = self._run("config", "--get", f"remote.{remote}.url", check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None
