"""Conversion between a number of seconds and hours, minutes and seconds."""

from __future__ import annotations


def _truncating_divmod(value: int, divisor: int) -> tuple[int, int]:
    """Quotient rounded toward zero and a remainder with the sign of ``value``."""
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


def split_seconds(value: int) -> tuple[int, int, int]:
    """Split ``value`` seconds into (hours, minutes, seconds)."""
    hours, rest = _truncating_divmod(int(value), 3600)
    minutes, seconds = _truncating_divmod(rest, 60)
    return hours, minutes, seconds


def join_seconds(hours: int, minutes: int, seconds: int) -> int:
    """Total number of seconds in the given hours, minutes and seconds."""
    return hours * 3600 + minutes * 60 + seconds