from pathlib import Path

import pytest

from devcore.config import Settings
from devcore.errors import ConfigError


def test_relative_projects_path_is_under_home():
    s = Settings(_env_file=None, projects_path="Development")
    assert s.projects_root() == Path.home() / "Development"


def test_absolute_and_tilde_paths(tmp_path: Path):
    s = Settings(_env_file=None, projects_path=str(tmp_path), templates_path="~/tpl")
    assert s.projects_root() == tmp_path
    assert s.templates_root() == Path.home() / "tpl"


def test_missing_projects_path_is_an_error(monkeypatch):
    monkeypatch.delenv("PROJECTS_PATH", raising=False)
    s = Settings(_env_file=None)
    with pytest.raises(ConfigError):
        s.projects_root()


def test_unknown_key_is_an_error():
    s = Settings(_env_file=None, projects_path="dev")
    with pytest.raises(ConfigError):
        s.get("editor")
    assert s.get("projects_path") == "dev"


def test_reads_key_value_config_file(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("PROJECTS_PATH", raising=False)
    conf = tmp_path / "devcore.conf"
    conf.write_text("# DevCore config\nprojects_path = /srv/projects\n")

    s = Settings(_env_file=str(conf))

    assert s.get("projects_path") == "/srv/projects"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PROJECTS_PATH", "/env/projects")
    assert Settings(_env_file=None).projects_root() == Path("/env/projects")


def test_workspace_from_settings_creates_roots(tmp_path: Path):
    from devcore.indexer.workspace import Workspace

    s = Settings(
        _env_file=None,
        projects_path=str(tmp_path / "dev"),
        templates_path=str(tmp_path / "tpl"),
        devmap_path=str(tmp_path / "cfg" / "devmap.json"),
    )

    ws = Workspace.from_settings(s)

    assert ws.projects_root.is_dir()
    assert ws.templates_root.is_dir()
    assert ws.store.path == tmp_path / "cfg" / "devmap.json"
    assert ws.sync().events == []
