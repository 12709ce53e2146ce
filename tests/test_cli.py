import shutil
from pathlib import Path

import pytest

from boilerplate import github_client
from boilerplate.cli import main
from tests.fakes import FakeApi, FakeResponse, make_console, output


def _run(*argv: str) -> tuple[int, str]:
    console = make_console()
    code = main(list(argv), console=console)
    return code, output(console)


def test_image_tags_for_release(tmp_path: Path) -> None:
    code, out = _run("-C", str(tmp_path), "image-tags", "1.2.3", "--image", "Acme/Widget")
    assert code == 0
    assert out.splitlines() == [
        "ghcr.io/acme/widget:v1.2.3",
        "ghcr.io/acme/widget:1.2",
        "ghcr.io/acme/widget:1",
        "ghcr.io/acme/widget:latest",
    ]


def test_image_tags_for_branch_uses_configured_registry(tmp_path: Path) -> None:
    (tmp_path / ".boilerplate.yml").write_text("registry: registry.example.com\n", encoding="utf-8")
    code, out = _run("-C", str(tmp_path), "image-tags", "--branch", "develop", "--image", "acme/widget")
    assert code == 0
    assert out.strip() == "registry.example.com/acme/widget:develop"


def test_image_tags_needs_exactly_one_source(tmp_path: Path) -> None:
    code, out = _run("-C", str(tmp_path), "image-tags", "1.0.0", "--branch", "main")
    assert code == 1
    assert "Error:" in out


def test_release_rejects_bad_version(tmp_path: Path) -> None:
    code, out = _run("-C", str(tmp_path), "release", "1.0")
    assert code == 1
    assert "Invalid version format" in out


def test_bad_config_is_reported(tmp_path: Path) -> None:
    (tmp_path / ".boilerplate.yml").write_text("colour: blue\n", encoding="utf-8")
    code, out = _run("-C", str(tmp_path), "release", "1.0.0")
    assert code == 1
    assert "Unknown key(s)" in out


def test_missing_directory(tmp_path: Path) -> None:
    code, out = _run("-C", str(tmp_path / "nope"), "image-tags", "1.0.0")
    assert code == 1
    assert "Not a directory" in out


def test_unknown_command_exits() -> None:
    with pytest.raises(SystemExit):
        main(["deploy"], console=make_console())


@pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")
def test_setup_non_interactive(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("HOME", str(tmp_path))
    project = tmp_path / "my-service"
    project.mkdir()

    code, out = _run(
        "-C", str(project), "setup", "--yes", "--project-type", "python", "--package-manager", "pip"
    )

    assert code == 0
    assert (project / ".git").is_dir()
    assert (project / "Dockerfile").exists()
    assert (project / "requirements.txt").exists()
    assert (project / "requirements-dev.txt").exists()
    assert (project / "CHANGELOG.md").read_text(encoding="utf-8").count("my-service") == 1
    assert not (project / "pyproject.toml").exists()
    assert "Setup Complete!" in out


@pytest.fixture()
def api(monkeypatch: pytest.MonkeyPatch) -> FakeApi:
    fake = FakeApi()
    monkeypatch.setattr(github_client.requests, "request", fake.request)
    return fake


def test_release_status_published(tmp_path: Path, api: FakeApi, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    api.responses.append(
        FakeResponse(
            200,
            {
                "workflow_runs": [
                    {
                        "name": "Release",
                        "status": "completed",
                        "conclusion": "success",
                        "head_branch": "v1.0.0",
                        "html_url": "https://github.com/Acme/Widget/actions/runs/1",
                    }
                ]
            },
        )
    )
    api.responses.append(
        FakeResponse(
            200,
            {
                "tag_name": "v1.0.0",
                "name": "Release v1.0.0",
                "html_url": "https://github.com/Acme/Widget/releases/tag/v1.0.0",
                "published_at": "2024-01-01T00:00:00Z",
                "assets": [{"name": "sbom.spdx.json"}],
            },
        )
    )

    code, out = _run("-C", str(tmp_path), "release-status", "1.0.0", "--repo", "Acme/Widget", "--limit", "3")

    assert code == 0
    assert "Workflow runs for v1.0.0" in out
    assert "success" in out
    assert "Release v1.0.0 (release)" in out
    assert "sbom.spdx.json" in out
    assert "Image: ghcr.io/acme/widget:v1.0.0" in out
    runs_request = api.requests[0]
    assert runs_request["url"] == "https://api.github.com/repos/Acme/Widget/actions/runs"
    assert runs_request["params"] == {"branch": "v1.0.0", "per_page": 3}
    assert runs_request["headers"]["Authorization"] == "Bearer env-token"


def test_release_status_not_published(tmp_path: Path, api: FakeApi, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    api.responses.append(FakeResponse(200, {"workflow_runs": []}))
    api.responses.append(FakeResponse(404, {"message": "Not Found"}))

    code, out = _run(
        "-C", str(tmp_path), "release-status", "v2.0.0", "--repo", "Acme/Widget", "--token", "cli-token"
    )

    assert code == 1
    assert "No workflow runs found for v2.0.0" in out
    assert "Release v2.0.0 is not published yet" in out
    assert all(r["headers"]["Authorization"] == "Bearer cli-token" for r in api.requests)


@pytest.mark.parametrize("limit", ["0", "-2", "many"])
def test_release_status_limit_must_be_positive(tmp_path: Path, limit: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-C", str(tmp_path), "release-status", "1.0.0", "--limit", limit], console=make_console())
    assert excinfo.value.code == 2


def test_ctrl_c_exits_130(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    console = make_console()

    def interrupt(prompt: str) -> str:
        raise KeyboardInterrupt

    monkeypatch.setattr(console, "input", interrupt)

    code = main(["-C", str(tmp_path), "setup"], console=console)

    assert code == 130
    assert "Aborted" in output(console)
    assert not (tmp_path / ".git").exists()
