"""Status text helpers for time and attempt counters."""

from __future__ import annotations


def format_elapsed(seconds: int) -> str:
    """Format whole seconds as HH:MM:SS."""
    if seconds < 0:
        raise ValueError("seconds must be >= 0")
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_attempts(attempts: int) -> str:
    return f"{attempts:02d}"
