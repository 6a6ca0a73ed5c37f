"""Per-player turn timer."""

from __future__ import annotations

from collections.abc import Callable
from time import monotonic


class TurnTimer:
    """Accumulates elapsed seconds across start/stop intervals."""

    def __init__(self, *, time_source: Callable[[], float] | None = None) -> None:
        self._time_source = time_source or monotonic
        self._accumulated_seconds = 0.0
        self._started_at: float | None = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._time_source()

    def stop(self) -> None:
        if self._started_at is None:
            return
        self._accumulated_seconds += max(0.0, self._time_source() - self._started_at)
        self._started_at = None

    def elapsed_seconds(self) -> float:
        """Return elapsed time including the interval currently running."""
        if self._started_at is None:
            return self._accumulated_seconds
        return self._accumulated_seconds + max(0.0, self._time_source() - self._started_at)

    def get_time(self) -> int:
        """Return elapsed whole seconds."""
        return int(self.elapsed_seconds())
