from __future__ import annotations

import os
from pathlib import Path

import pytest

from promu.settings import ConfigError, PromuSettings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PROMU_WORKSPACE_ROOT", raising=False)
    monkeypatch.delenv("GOPATH", raising=False)


def test_workspace_root_unset_by_default() -> None:
    assert load_settings().workspace_root is None


def test_workspace_root_from_gopath(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GOPATH", str(tmp_path))
    assert load_settings().workspace_root == tmp_path


def test_promu_variable_overrides_gopath(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GOPATH", str(tmp_path / "go"))
    monkeypatch.setenv("PROMU_WORKSPACE_ROOT", str(tmp_path / "ws"))
    assert load_settings().workspace_root == tmp_path / "ws"


def test_blank_gopath_is_unset(monkeypatch) -> None:
    monkeypatch.setenv("GOPATH", "  ")
    assert load_settings().workspace_root is None


def test_gopath_list_uses_first_entry(monkeypatch, tmp_path: Path) -> None:
    first = tmp_path / "first"
    monkeypatch.setenv("GOPATH", f"{first}{os.pathsep}{tmp_path / 'second'}")
    assert load_settings().workspace_root == first


def test_workspace_root_expands_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("PROMU_WORKSPACE_ROOT", "~/go")
    assert load_settings().workspace_root == tmp_path / "go"


def test_settings_by_field_name(tmp_path: Path) -> None:
    assert PromuSettings(workspace_root=tmp_path).workspace_root == tmp_path


def test_invalid_settings_raise_config_error(monkeypatch) -> None:
    def _broken(*_args, **_kwargs):
        return PromuSettings.model_validate({"workspace_root": 42})

    monkeypatch.setattr("promu.settings.PromuSettings", _broken)
    with pytest.raises(ConfigError, match="Invalid promu settings"):
        load_settings()
