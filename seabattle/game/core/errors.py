"""Rule violation and configuration errors raised by the match."""

from __future__ import annotations


class SeaBattleError(Exception):
    """Base class for rules engine errors."""


class InvalidConfigurationError(SeaBattleError, ValueError):
    """Unsupported grid size, mode or inventory at match construction."""


class MoveError(SeaBattleError, ValueError):
    """A requested move breaks the rules."""


class TurnViolationError(MoveError):
    """A move was requested by the player who is not active."""


class RepeatedMoveError(MoveError):
    """A move targets a cell that was already attacked."""


class CellOutOfBoundsError(MoveError):
    """A move targets a coordinate outside the grid."""


class MatchFinishedError(MoveError):
    """A move was requested after the match was decided."""
