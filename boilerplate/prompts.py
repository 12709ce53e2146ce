"""
prompts.py

Responsibility: Interactive questions asked by setup and release.

`assume_yes` answers every yes/no question with yes and every free-text
question with its default, for use in CI or scripted runs.
"""

from __future__ import annotations

from rich.console import Console


class Prompter:
    def __init__(self, console: Console, *, assume_yes: bool = False) -> None:
        self.console = console
        self.assume_yes = assume_yes

    def confirm(self, question: str) -> bool:
        """Yes/no question; only an answer starting with y/Y counts as yes."""
        if self.assume_yes:
            self.console.print(f"{question} (y/n) y")
            return True
        answer = self.console.input(f"{question} (y/n) ")
        return answer.strip()[:1] in ("y", "Y")

    def ask(self, question: str, default: str = "") -> str:
        if self.assume_yes:
            return default
        answer = self.console.input(f"{question} ").strip()
        return answer or default
