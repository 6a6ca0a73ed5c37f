"""Save and resume use cases."""

from __future__ import annotations

import logging
import random

from seabattle.game.core.match import Match
from seabattle.game.saves.repository import SaveRepository
from seabattle.game.saves.schema import match_to_payload, payload_to_match

logger = logging.getLogger(__name__)


class SaveService:
    """High-level save operations with schema validation."""

    def __init__(self, repository: SaveRepository) -> None:
        self._repository = repository

    def list_saves(self) -> list[str]:
        return self._repository.list_names()

    def save_match(self, name: str, match: Match) -> None:
        """Serialize and persist a match under the given name."""
        cleaned = name.strip()
        path = self._repository.save_payload(cleaned, match_to_payload(cleaned, match))
        logger.info("match_saved name=%s path=%s", cleaned, path)

    def load_match(self, name: str, rng: random.Random | None = None) -> Match:
        """Load a saved match. Timers and attempt counters restart from zero."""
        try:
            _, match = payload_to_match(self._repository.load_payload(name), rng=rng)
        except ValueError as exc:
            raise ValueError(f"Save '{name}' is invalid: {exc}") from exc
        return match

    def delete_save(self, name: str) -> None:
        self._repository.delete(name)
