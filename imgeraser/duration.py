"""Durations such as ``"24h"`` or ``"1m30s"``, held as integer nanoseconds."""

from __future__ import annotations

import re

__all__ = ["parse_duration", "format_duration"]

_US, _MS, _S = 1_000, 1_000_000, 1_000_000_000
_UNITS = {
    "ns": 1, "us": _US, "\u00b5s": _US, "\u03bcs": _US,
    "ms": _MS, "s": _S, "m": 60 * _S, "h": 3600 * _S,
}
_MAX = (1 << 63) - 1
_COMPONENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def parse_duration(text: str) -> int:
    """Parse a signed sequence of numbers with units; return nanoseconds."""
    original = text
    negative = text[:1] == "-"
    if text[:1] in ("+", "-"):
        text = text[1:]
    if text == "0":
        return 0
    if not text:
        raise ValueError(f'time: invalid duration "{original}"')
    total = 0
    position = 0
    while position < len(text):
        match = _COMPONENT.match(text, position)
        whole, fraction, unit = match.groups()
        if not whole and not fraction:
            raise ValueError(f'time: invalid duration "{original}"')
        if not unit:
            raise ValueError(f'time: missing unit in duration "{original}"')
        if unit not in _UNITS:
            raise ValueError(f'time: unknown unit "{unit}" in duration "{original}"')
        scale = _UNITS[unit]
        total += int(whole or "0") * scale
        if fraction:
            total += int(fraction) * scale // 10 ** len(fraction)
        if total > 1 << 63 or (not negative and total > _MAX):
            raise ValueError(f'time: invalid duration "{original}"')
        position = match.end()
    return -total if negative else total


def _fraction(value: int, precision: int) -> str:
    digits = f"{value:0{precision}d}".rstrip("0")
    return f".{digits}" if digits else ""


def format_duration(nanoseconds: int) -> str:
    """Format nanoseconds, e.g. ``"72h3m0.5s"`` or ``"1.5ms"``."""
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    magnitude = abs(nanoseconds)
    if magnitude < _US:
        return f"{sign}{magnitude}ns"
    if magnitude < _MS:
        whole, rest = divmod(magnitude, _US)
        return f"{sign}{whole}{_fraction(rest, 3)}\u00b5s"
    if magnitude < _S:
        whole, rest = divmod(magnitude, _MS)
        return f"{sign}{whole}{_fraction(rest, 6)}ms"
    seconds, nanos = divmod(magnitude, _S)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    text = f"{seconds}{_fraction(nanos, 9)}s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return sign + text