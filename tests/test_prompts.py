import pytest

from boilerplate.prompts import Prompter
from tests.fakes import make_console, output


@pytest.mark.parametrize(("answer", "expected"), [("y", True), ("Yes", True), ("n", False), ("", False), ("ok", False)])
def test_confirm(monkeypatch: pytest.MonkeyPatch, answer: str, expected: bool) -> None:
    console = make_console()
    monkeypatch.setattr(console, "input", lambda prompt: answer)
    assert Prompter(console).confirm("Continue?") is expected


def test_ask_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    console = make_console()
    answers = iter(["  ", "custom message"])
    monkeypatch.setattr(console, "input", lambda prompt: next(answers))
    prompter = Prompter(console)
    assert prompter.ask("Message:", default="Release v1.0.0") == "Release v1.0.0"
    assert prompter.ask("Message:", default="Release v1.0.0") == "custom message"


def test_assume_yes_never_reads_input(monkeypatch: pytest.MonkeyPatch) -> None:
    console = make_console()

    def fail(prompt: str) -> str:
        raise AssertionError("input should not be read")

    monkeypatch.setattr(console, "input", fail)
    prompter = Prompter(console, assume_yes=True)
    assert prompter.confirm("Create CHANGELOG.md?")
    assert prompter.ask("Enter choice (1 or 2):", default="1") == "1"
    assert "Create CHANGELOG.md? (y/n) y" in output(console)
