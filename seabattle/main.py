"""Headless entry point: play a computer-opponent match with an autopilot."""

from __future__ import annotations

import argparse
import logging
import random

from seabattle.game.core.formatting import format_attempts, format_elapsed
from seabattle.game.core.match import Match
from seabattle.game.core.models import GameMode, Player
from seabattle.game.infra.app_data import ensure_app_data_dirs
from seabattle.game.infra.config import load_settings
from seabattle.game.infra.logging import setup_logging
from seabattle.game.saves.repository import SaveRepository
from seabattle.game.saves.service import SaveService

logger = logging.getLogger(__name__)


def play_autopilot_match(match: Match, rng: random.Random) -> Player:
    """Drive player one with random single shots until someone wins."""
    while match.winner is None:
        if match.active_player is Player.ONE:
            match.start_timer()
            grid = match.grid_under_attack()
            targets = [
                (col, row)
                for row in range(grid.size)
                for col in range(grid.size)
                if not grid.cell(col, row).is_hit()
            ]
            col, row = rng.choice(targets)
            match.make_move(Player.ONE, col, row)
            match.stop_timer()
            if match.winner is None:
                match.switch_players()
        else:
            match.run_opponent_turn()
    return match.winner


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a headless match against the computer.")
    parser.add_argument("--size", type=int, choices=(5, 10), default=10)
    parser.add_argument(
        "--mode",
        choices=(GameMode.VS_AI_EASY.value, GameMode.VS_AI_HARD.value),
        default=GameMode.VS_AI_HARD.value,
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--save", metavar="NAME", default=None, help="save the final match state")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run one autopilot match."""
    args = _parse_args(argv)
    load_settings()
    paths = ensure_app_data_dirs()
    setup_logging()
    logger.info("app_data_paths root=%s logs=%s saves=%s", paths["root"], paths["logs"], paths["saves"])

    rng = random.Random(args.seed)
    match = Match(args.size, GameMode(args.mode), rng=rng)
    match.place_all_ships()
    winner = play_autopilot_match(match, rng)
    logger.info(
        "autopilot_finished winner=%s attempts_one=%s attempts_two=%s time=%s",
        winner.value,
        format_attempts(match.attempts(Player.ONE)),
        format_attempts(match.attempts(Player.TWO)),
        format_elapsed(match.get_time()),
    )
    if args.save:
        SaveService(SaveRepository(paths["saves"])).save_match(args.save, match)


if __name__ == "__main__":
    main()
