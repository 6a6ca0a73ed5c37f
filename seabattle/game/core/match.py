"""Match state machine: turn order, move validation and win detection."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from seabattle.game.ai.factory import build_opponent
from seabattle.game.core.errors import (
    InvalidConfigurationError,
    MatchFinishedError,
    RepeatedMoveError,
    TurnViolationError,
)
from seabattle.game.core.grid import GameGrid
from seabattle.game.core.models import (
    PRESET_INVENTORIES,
    SHIP_LENGTHS,
    GameMode,
    Inventory,
    MatchStatus,
    Player,
    covered_cells,
)
from seabattle.game.core.timer import TurnTimer

if TYPE_CHECKING:
    from seabattle.game.ai.strategy import OpponentStrategy, Shot

logger = logging.getLogger(__name__)

# Fleets may cover at most this share of the grid (numerator, denominator).
COVERAGE_BOUND = (2, 5)


def is_inventory_legit(grid_size: int, inventory: Sequence[int]) -> bool:
    """Return whether a fleet stays within the allowed share of grid cells."""
    numerator, denominator = COVERAGE_BOUND
    bound = grid_size * grid_size * numerator // denominator
    return covered_cells(_normalize_inventory(inventory)) <= bound


class Match:
    """Two grids, the active player, and per-player bookkeeping.

    Player one always attacks the grid of player two and vice versa. The
    match finishes by itself after a hit that destroys the last ship of the
    grid under attack; after that every move is rejected.
    """

    def __init__(
        self,
        grid_size: int,
        mode: GameMode,
        *,
        rng: random.Random | None = None,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        mode = GameMode(mode)
        if mode is GameMode.CUSTOM:
            raise InvalidConfigurationError("Provide a ship inventory for custom matches.")
        if grid_size not in PRESET_INVENTORIES:
            raise InvalidConfigurationError(
                f"Grid size {grid_size} has no preset inventory; use a custom match."
            )
        self._setup(grid_size, mode, PRESET_INVENTORIES[grid_size], rng, time_source)
        if mode.is_vs_ai:
            self._opponent = build_opponent(mode, grid_size, self._rng)
        logger.debug("match_created size=%d mode=%s", grid_size, mode.value)

    @classmethod
    def custom(
        cls,
        grid_size: int,
        inventory: Sequence[int] | None,
        *,
        rng: random.Random | None = None,
        time_source: Callable[[], float] | None = None,
    ) -> Match:
        """Create a human-vs-human match with an explicit inventory.

        The inventory is not checked against the coverage bound; call
        is_inventory_legit() first.
        """
        if inventory is None:
            raise InvalidConfigurationError("Custom matches require a ship inventory.")
        if grid_size < 1:
            raise InvalidConfigurationError("Grid size must be positive.")
        try:
            normalized = _normalize_inventory(inventory)
        except ValueError as exc:
            raise InvalidConfigurationError(str(exc)) from exc
        match = cls.__new__(cls)
        match._setup(grid_size, GameMode.CUSTOM, normalized, rng, time_source)
        logger.debug(
            "match_created size=%d mode=%s inventory=%s", grid_size, GameMode.CUSTOM.value, normalized
        )
        return match

    @classmethod
    def restore(
        cls,
        *,
        grid_size: int,
        mode: GameMode,
        inventory: Inventory,
        first_grid: GameGrid,
        second_grid: GameGrid,
        active_player: Player,
        winner: Player | None = None,
        opponent: OpponentStrategy | None = None,
        rng: random.Random | None = None,
        time_source: Callable[[], float] | None = None,
    ) -> Match:
        """Rebuild a suspended match. Timers and attempts start from zero."""
        opponent_mode = opponent.mode if opponent is not None else None
        if mode.is_vs_ai != (opponent is not None) or opponent_mode not in (None, mode):
            raise InvalidConfigurationError(f"Mode {mode.value} does not match opponent state.")
        if opponent is not None and opponent.has_won != (winner is opponent.player):
            raise InvalidConfigurationError("Opponent win flag disagrees with the match winner.")
        if winner is not None:
            loser_grid = first_grid if winner is Player.TWO else second_grid
            if not loser_grid.ship_set.all_ships_destroyed():
                raise InvalidConfigurationError(
                    f"Player {winner.value} is recorded as winner but ships remain afloat."
                )
        match = cls.__new__(cls)
        match._setup(grid_size, mode, inventory, rng, time_source)
        match._grids = {Player.ONE: first_grid, Player.TWO: second_grid}
        match._active_player = active_player
        match._winner = winner
        match._opponent = opponent
        return match

    def _setup(
        self,
        grid_size: int,
        mode: GameMode,
        inventory: Inventory,
        rng: random.Random | None,
        time_source: Callable[[], float] | None,
    ) -> None:
        self._grid_size = grid_size
        self._mode = mode
        self._inventory = inventory
        self._rng = rng or random.Random()
        self._active_player = Player.ONE
        self._winner: Player | None = None
        self._grids = {
            Player.ONE: GameGrid(grid_size, inventory),
            Player.TWO: GameGrid(grid_size, inventory),
        }
        self._attempts = {Player.ONE: 0, Player.TWO: 0}
        self._timers = {
            Player.ONE: TurnTimer(time_source=time_source),
            Player.TWO: TurnTimer(time_source=time_source),
        }
        self._opponent: OpponentStrategy | None = None

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def inventory(self) -> Inventory:
        return self._inventory

    @property
    def active_player(self) -> Player:
        return self._active_player

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def status(self) -> MatchStatus:
        return MatchStatus.IN_PROGRESS if self._winner is None else MatchStatus.FINISHED

    @property
    def opponent(self) -> OpponentStrategy | None:
        return self._opponent

    def is_inventory_legit(self, inventory: Sequence[int]) -> bool:
        return is_inventory_legit(self._grid_size, inventory)

    def grid_for(self, player: Player) -> GameGrid:
        """Return the grid owned by the given player."""
        return self._grids[Player(player)]

    def grid_under_attack(self) -> GameGrid:
        """Return the grid of the player who is not active."""
        return self._grids[self._active_player.opponent]

    def current_grid(self) -> GameGrid:
        """Return the grid of the active player, used during placement."""
        return self._grids[self._active_player]

    def place_all_ships(self) -> None:
        """Place both fleets randomly."""
        for grid in self._grids.values():
            grid.ship_set.place_ships_randomly(self._rng)

    def make_move(self, player: Player, col: int, row: int) -> bool:
        """Attack a cell on the opponent's grid and return whether it was a hit."""
        if self._winner is not None:
            raise MatchFinishedError(f"Player {self._winner.value} has already won the match.")
        if player != self._active_player:
            raise TurnViolationError(f"It is player {self._active_player.value}'s turn.")

        target = self.grid_under_attack()
        cell = target.cell(col, row)
        if cell.is_hit():
            raise RepeatedMoveError(f"Cell ({col}, {row}) has already been attacked.")

        cell.set_hit(True)
        self._attempts[self._active_player] += 1
        is_hit = cell.is_ship()
        if is_hit and target.ship_set.all_ships_destroyed():
            self._winner = self._active_player
            logger.info(
                "match_finished winner=%s attempts=%d",
                self._winner.value,
                self._attempts[self._winner],
            )
        return is_hit

    def switch_players(self) -> None:
        self._active_player = self._active_player.opponent

    def all_ships_destroyed(self) -> bool:
        """Return whether the grid under attack has no surviving ship."""
        return self.grid_under_attack().ship_set.all_ships_destroyed()

    def run_opponent_turn(self) -> list[Shot]:
        """Let the computer opponent play one full turn."""
        if self._opponent is None:
            raise InvalidConfigurationError(f"Mode {self._mode.value} has no computer opponent.")
        return self._opponent.take_turn(self)

    def attempts(self, player: Player) -> int:
        return self._attempts[Player(player)]

    def start_timer(self) -> None:
        self._timers[self._active_player].start()

    def stop_timer(self) -> None:
        """Stop both timers so none keeps running across a turn switch."""
        for timer in self._timers.values():
            timer.stop()

    def get_time(self) -> int:
        """Return elapsed seconds of the human in AI modes, else of the active player."""
        if self._mode.is_vs_ai:
            return self._timers[Player.ONE].get_time()
        return self._timers[self._active_player].get_time()


def _normalize_inventory(inventory: Sequence[int]) -> Inventory:
    counts = tuple(inventory)
    if len(counts) != len(SHIP_LENGTHS):
        raise ValueError(f"Inventory needs {len(SHIP_LENGTHS)} ship counts, got {len(counts)}.")
    if any(not isinstance(count, int) or count < 0 for count in counts):
        raise ValueError("Ship counts must be non-negative integers.")
    return counts  # type: ignore[return-value]
