"""Persistence layer for suspended matches."""

from __future__ import annotations

import json
from pathlib import Path


class SaveRepository:
    """JSON file repository for saved match payloads."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    def list_names(self) -> list[str]:
        """List available save names."""
        names: list[str] = []
        for path in self._root.glob("*.json"):
            ui_name = self._read_ui_name(path)
            names.append(ui_name or path.stem)
        return sorted(names, key=str.lower)

    def load_payload(self, name: str) -> dict[str, object]:
        """Load a save payload by name."""
        path = self._path_for_name(name)
        if path is None:
            raise FileNotFoundError(f"Save '{name}' not found.")
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError(f"Save '{name}' is not a JSON object.")
        return payload

    def save_payload(self, name: str, payload: dict[str, object]) -> Path:
        """Write a save payload, replacing an existing save with the same name."""
        ui_name = _validate_name(name)
        path = self._path_for_name(ui_name) or self._allocate_path(ui_name)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        return path

    def delete(self, name: str) -> None:
        """Delete a save by name if it exists."""
        path = self._path_for_name(name)
        if path is not None and path.exists():
            path.unlink()

    def _path_for_name(self, name: str) -> Path | None:
        ui_name = _validate_name(name)
        direct = self._root / f"{_normalize_for_filename(ui_name)}.json"
        if direct.exists() and self._read_ui_name(direct) in (ui_name, None):
            return direct
        for path in self._root.glob("*.json"):
            if self._read_ui_name(path) == ui_name:
                return path
        return None

    def _allocate_path(self, ui_name: str) -> Path:
        base = _normalize_for_filename(ui_name)
        candidate = self._root / f"{base}.json"
        index = 2
        while candidate.exists():
            candidate = self._root / f"{base}_{index}.json"
            index += 1
        return candidate

    @staticmethod
    def _read_ui_name(path: Path) -> str | None:
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError):
            return None
        if not isinstance(payload, dict):
            return None
        value = payload.get("name")
        if isinstance(value, str):
            return value.strip() or None
        return None


def _validate_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Save name cannot be empty.")
    return cleaned


def _normalize_for_filename(name: str) -> str:
    chars = [char if char.isalnum() or char in {"-", "_"} else "_" for char in name]
    normalized = "".join(chars).strip("_")
    return normalized or "save"
