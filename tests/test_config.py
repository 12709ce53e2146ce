from pathlib import Path

import pytest

from boilerplate.config import CONFIG_FILENAME, Config, ConfigError, load_config


def test_defaults_without_file(tmp_path: Path) -> None:
    cfg = load_config(tmp_path)
    assert cfg == Config(project_name=tmp_path.name)
    assert cfg.main_branch == "main"
    assert cfg.develop_branch == "develop"
    assert cfg.registry == "ghcr.io"
    assert cfg.changelog_limit == 10


def test_reads_yaml(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(
        "project_name: widget\n"
        "description: A widget service\n"
        "main_branch: trunk\n"
        "changelog_limit: '5'\n"
        "port: 9000\n"
        "python_version: '3.11'\n",
        encoding="utf-8",
    )
    cfg = load_config(tmp_path)
    assert cfg.project_name == "widget"
    assert cfg.main_branch == "trunk"
    assert cfg.changelog_limit == 5
    assert cfg.template_context() == {
        "project_name": "widget",
        "description": "A widget service",
        "python_version": "3.11",
        "node_version": "20",
        "port": 9000,
    }


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")
    assert load_config(tmp_path).project_name == tmp_path.name


@pytest.mark.parametrize(
    "text",
    [
        "- a\n- b\n",
        "unknown_key: 1\n",
        "port: eighty\n",
        "changelog_limit: -1\n",
        "main_branch: ''\n",
        "project_name: [unclosed\n",
    ],
)
def test_invalid_config(tmp_path: Path, text: str) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
