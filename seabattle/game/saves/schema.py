"""Saved match payload schema and conversion helpers."""

from __future__ import annotations

import random

import numpy as np

from seabattle.game.ai.factory import build_opponent
from seabattle.game.ai.strategy import OpponentStrategy
from seabattle.game.core.errors import InvalidConfigurationError
from seabattle.game.core.grid import GameGrid
from seabattle.game.core.match import Match
from seabattle.game.core.models import (
    SHIP_LENGTHS,
    Belief,
    Coord,
    Direction,
    GameMode,
    Inventory,
    Player,
)
from seabattle.game.core.ships import Ship

SAVE_VERSION = 1


def match_to_payload(name: str, match: Match) -> dict[str, object]:
    """Convert a match to a JSON-serializable payload."""
    return {
        "version": SAVE_VERSION,
        "name": name,
        "grid_size": match.grid_size,
        "mode": match.mode.value,
        "inventory": list(match.inventory),
        "active_player": match.active_player.value,
        "winner": match.winner.value if match.winner is not None else None,
        "grids": [_grid_to_payload(match.grid_for(player)) for player in (Player.ONE, Player.TWO)],
        "opponent": _opponent_to_payload(match.opponent) if match.opponent is not None else None,
    }


def payload_to_match(
    payload: dict[str, object], rng: random.Random | None = None
) -> tuple[str, Match]:
    """Convert a loaded payload back into a match with fresh timers and attempts."""
    version = _as_int(payload.get("version", -1), "version")
    if version != SAVE_VERSION:
        raise ValueError("Unsupported save version.")
    name = str(payload.get("name", "")).strip()
    if not name:
        raise ValueError("Save name is required.")
    grid_size = _as_int(payload.get("grid_size"), "grid_size")
    if grid_size < 1:
        raise ValueError("Save grid_size must be positive.")
    try:
        mode = GameMode(str(payload.get("mode")))
        active_player = Player(str(payload.get("active_player")))
        raw_winner = payload.get("winner")
        winner = Player(str(raw_winner)) if raw_winner is not None else None
    except ValueError as exc:
        raise ValueError("Malformed mode or player in save payload.") from exc

    inventory = _inventory_from_payload(payload.get("inventory"))
    raw_grids = payload.get("grids")
    if not isinstance(raw_grids, list) or len(raw_grids) != 2:
        raise ValueError("Save grids must be a 2-item list.")
    first_grid, second_grid = (
        _grid_from_payload(raw_grid, grid_size, inventory) for raw_grid in raw_grids
    )

    rng = rng or random.Random()
    opponent = None
    raw_opponent = payload.get("opponent")
    if raw_opponent is not None:
        opponent = _opponent_from_payload(raw_opponent, grid_size, rng)

    try:
        match = Match.restore(
            grid_size=grid_size,
            mode=mode,
            inventory=inventory,
            first_grid=first_grid,
            second_grid=second_grid,
            active_player=active_player,
            winner=winner,
            opponent=opponent,
            rng=rng,
        )
    except InvalidConfigurationError as exc:
        raise ValueError(f"Inconsistent save payload: {exc}") from exc
    return name, match


def _grid_to_payload(grid: GameGrid) -> dict[str, object]:
    return {
        "ships": [
            {
                "length": ship.length,
                "bow": [ship.bow.col, ship.bow.row],
                "heading": ship.heading.value,
            }
            for ship in grid.ship_set.ships
        ],
        "hits": [[coord.col, coord.row] for coord in grid.hit_coords()],
    }


def _grid_from_payload(raw: object, grid_size: int, inventory: Inventory) -> GameGrid:
    if not isinstance(raw, dict):
        raise ValueError("Each saved grid must be an object.")
    raw_ships = raw.get("ships")
    raw_hits = raw.get("hits")
    if not isinstance(raw_ships, list) or not isinstance(raw_hits, list):
        raise ValueError("Saved grid needs 'ships' and 'hits' lists.")

    grid = GameGrid(grid_size, inventory)
    for item in raw_ships:
        if not isinstance(item, dict):
            raise ValueError("Each saved ship must be an object.")
        try:
            length = int(item["length"])
            bow = _coord_from_payload(item["bow"])
            heading = Direction(str(item["heading"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError("Malformed ship entry in save payload.") from exc
        if length not in SHIP_LENGTHS:
            raise ValueError(f"Unsupported ship length {length}.")
        grid.ship_set.add_ship(Ship(length=length, bow=bow, heading=heading))

    for item in raw_hits:
        coord = _coord_from_payload(item)
        if not grid.in_bounds(coord.col, coord.row):
            raise ValueError(f"Saved hit ({coord.col}, {coord.row}) is out of bounds.")
        grid.cell(coord.col, coord.row).set_hit(True)
    return grid


def _opponent_to_payload(opponent: OpponentStrategy) -> dict[str, object]:
    return {
        "mode": opponent.mode.value,
        "beliefs": opponent.beliefs.tolist(),
        "candidates": [[coord.col, coord.row] for coord in opponent.candidates],
        "has_won": opponent.has_won,
    }


def _opponent_from_payload(raw: object, grid_size: int, rng: random.Random) -> OpponentStrategy:
    if not isinstance(raw, dict):
        raise ValueError("Saved opponent must be an object.")
    try:
        opponent = build_opponent(GameMode(str(raw.get("mode"))), grid_size, rng)
    except ValueError as exc:
        raise ValueError("Malformed opponent mode in save payload.") from exc

    raw_beliefs = raw.get("beliefs")
    try:
        beliefs = np.asarray(raw_beliefs, dtype=np.int8)
    except (TypeError, ValueError) as exc:
        raise ValueError("Saved belief map must be a numeric matrix.") from exc
    if beliefs.shape != (grid_size, grid_size):
        raise ValueError(f"Saved belief map must be {grid_size}x{grid_size}.")
    if not np.isin(beliefs, [int(belief) for belief in Belief]).all():
        raise ValueError("Saved belief map has unknown cell states.")

    raw_candidates = raw.get("candidates", [])
    if not isinstance(raw_candidates, list):
        raise ValueError("Saved candidates must be a list.")
    candidates = [_coord_from_payload(item) for item in raw_candidates]
    opponent.restore(beliefs, candidates, bool(raw.get("has_won", False)))
    return opponent


def _inventory_from_payload(raw: object) -> Inventory:
    if not isinstance(raw, list) or len(raw) != len(SHIP_LENGTHS):
        raise ValueError(f"Save inventory must be a {len(SHIP_LENGTHS)}-item list.")
    counts = tuple(_as_int(count, "inventory") for count in raw)
    if any(count < 0 for count in counts):
        raise ValueError("Save inventory counts must be non-negative.")
    return counts  # type: ignore[return-value]


def _coord_from_payload(raw: object) -> Coord:
    if not isinstance(raw, list) or len(raw) != 2:
        raise ValueError("Coordinates must be 2-item [col, row] lists.")
    return Coord(_as_int(raw[0], "col"), _as_int(raw[1], "row"))


def _as_int(raw: object, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise ValueError(f"Save {field_name} must be int-compatible.")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Save {field_name} must be int-compatible.") from exc
