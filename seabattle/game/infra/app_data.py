"""Unified app-data paths."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for runtime state."""
    configured = os.getenv("SEABATTLE_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_game_root() / candidate
    return resolve_game_root() / "appdata"


def resolve_game_root() -> Path:
    return Path(__file__).resolve().parents[2]


def resolve_logs_dir() -> Path:
    return _resolve_dir_env("SEABATTLE_LOG_DIR", "logs")


def resolve_saves_dir() -> Path:
    return _resolve_dir_env("SEABATTLE_SAVES_DIR", "saves")


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create app-data directories and return resolved paths."""
    paths = {
        "root": resolve_app_data_root(),
        "logs": resolve_logs_dir(),
        "saves": resolve_saves_dir(),
    }
    for path in paths.values():
        path.mkdir(parents=True, exist_ok=True)
    return paths


def _resolve_dir_env(var_name: str, default_name: str) -> Path:
    raw = os.getenv(var_name, "").strip()
    if not raw:
        return resolve_app_data_root() / default_name
    candidate = Path(raw)
    if candidate.is_absolute():
        return candidate
    return resolve_app_data_root() / candidate
