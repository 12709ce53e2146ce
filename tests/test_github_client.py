from typing import Any

import pytest
import requests

from boilerplate import github_client
from boilerplate.github_client import GitHubClient, GitHubError
from tests.fakes import FakeApi, FakeResponse


@pytest.fixture()
def api(monkeypatch: pytest.MonkeyPatch) -> FakeApi:
    fake = FakeApi()
    monkeypatch.setattr(github_client.requests, "request", fake.request)
    return fake


def test_get_release(api: FakeApi) -> None:
    api.responses.append(
        FakeResponse(
            200,
            {
                "tag_name": "v1.0.0",
                "name": "Release v1.0.0",
                "html_url": "https://github.com/Acme/Widget/releases/tag/v1.0.0",
                "draft": False,
                "prerelease": False,
                "published_at": "2024-01-01T00:00:00Z",
                "assets": [{"name": "sbom.spdx.json"}],
            },
        ),
    )
    release = GitHubClient("tok").get_release("Acme", "Widget", "v1.0.0")
    assert release is not None
    assert release.assets == ["sbom.spdx.json"]
    req = api.requests[0]
    assert req["url"] == "https://api.github.com/repos/Acme/Widget/releases/tags/v1.0.0"
    assert req["headers"]["Authorization"] == "Bearer tok"
    assert req["timeout"] == 30


def test_missing_release_is_none(api: FakeApi) -> None:
    api.responses.append(FakeResponse(404, {"message": "Not Found"}))
    assert GitHubClient().get_release("Acme", "Widget", "v9.9.9") is None
    assert "Authorization" not in api.requests[0]["headers"]


def test_api_error(api: FakeApi) -> None:
    api.responses.append(FakeResponse(502, None, text="Bad gateway"))
    with pytest.raises(GitHubError, match="Bad gateway") as excinfo:
        GitHubClient().get_release("Acme", "Widget", "v1.0.0")
    assert excinfo.value.status_code == 502


def test_list_workflow_runs(api: FakeApi) -> None:
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
                    },
                    {"name": "Scan", "status": "in_progress", "conclusion": None},
                ]
            },
        ),
    )
    runs = GitHubClient().list_workflow_runs("Acme", "Widget", branch="v1.0.0", limit=5)
    assert [r.name for r in runs] == ["Release", "Scan"]
    assert runs[1].conclusion is None
    assert runs[1].head_branch == "v1.0.0"
    assert api.requests[0]["params"] == {"branch": "v1.0.0", "per_page": 5}


def test_network_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(*args: Any, **kwargs: Any) -> None:
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(github_client.requests, "request", boom)
    with pytest.raises(GitHubError, match="unreachable"):
        GitHubClient().list_workflow_runs("Acme", "Widget", branch="v1.0.0")
