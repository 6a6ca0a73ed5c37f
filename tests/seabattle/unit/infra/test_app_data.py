from __future__ import annotations

from seabattle.game.infra.app_data import (
    ensure_app_data_dirs,
    resolve_app_data_root,
    resolve_logs_dir,
)


def test_resolve_app_data_root_prefers_configured_dir(monkeypatch, tmp_path) -> None:
    custom = tmp_path / "custom_root"
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(custom))
    assert resolve_app_data_root() == custom


def test_resolve_app_data_root_defaults_to_game_root_appdata(monkeypatch) -> None:
    monkeypatch.delenv("SEABATTLE_APP_DATA_DIR", raising=False)
    root = resolve_app_data_root()
    assert root.name == "appdata"
    assert root.parent.name == "seabattle"


def test_ensure_app_data_dirs_creates_unified_paths(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("SEABATTLE_LOG_DIR", raising=False)
    monkeypatch.delenv("SEABATTLE_SAVES_DIR", raising=False)

    paths = ensure_app_data_dirs()

    assert paths["root"] == tmp_path / "data"
    assert paths["logs"] == tmp_path / "data" / "logs"
    assert paths["saves"] == tmp_path / "data" / "saves"
    assert all(path.exists() for path in paths.values())


def test_relative_dir_overrides_resolve_under_root(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEABATTLE_APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SEABATTLE_LOG_DIR", "run_logs")
    assert resolve_logs_dir() == tmp_path / "run_logs"
