"""Settings read from `.env` files in the working directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Keys consumed by app_data and logging; anything else in an env file is ignored.
SETTING_KEYS = frozenset(
    {
        "SEABATTLE_APP_DATA_DIR",
        "SEABATTLE_LOG_DIR",
        "SEABATTLE_SAVES_DIR",
        "SEABATTLE_LOG_LEVEL",
        "LOG_LEVEL",
        "LOG_FORMAT",
    }
)

DEFAULT_ENV_FILES = (".env", ".env.local")


def read_settings(path: Path) -> dict[str, str]:
    """Return the known settings defined in one env file.

    Missing files yield no settings. Lines without `=` and unknown keys are
    skipped; an optional `export ` prefix and matching quotes are stripped.
    """
    if not path.is_file():
        return {}
    settings: dict[str, str] = {}
    for lineno, raw_line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ").lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            logger.warning("env_line_ignored path=%s line=%d", path, lineno)
            continue
        if key not in SETTING_KEYS:
            logger.debug("env_key_unknown path=%s key=%s", path, key)
            continue
        settings[key] = _unquote(value.strip())
    return settings


def load_settings(
    paths: Iterable[str | Path] = DEFAULT_ENV_FILES, *, override_existing: bool = False
) -> dict[str, str]:
    """Export settings from env files into the process environment.

    Later files win over earlier ones. Variables already set in the
    environment are kept unless override_existing is true. Returns the
    settings that were applied.
    """
    merged: dict[str, str] = {}
    for path in paths:
        merged.update(read_settings(Path(path)))

    applied: dict[str, str] = {}
    for key, value in merged.items():
        if override_existing or key not in os.environ:
            os.environ[key] = value
            applied[key] = value
    return applied


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value
