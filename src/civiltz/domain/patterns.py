"""Fixed-token pattern rendering.

Recognized tokens: ``yyyy`` ``MM`` ``dd`` ``HH`` ``mm`` ``ss``. Every other
character is copied through as a literal.
"""

from __future__ import annotations

import functools
from collections.abc import Callable

from civiltz.domain.calendar import CivilDate, CivilTime
from civiltz.domain.clock import ZonedInstant

Renderable = CivilDate | CivilTime | ZonedInstant


def _year(date: CivilDate) -> str:
    sign = "-" if date.year < 0 else ""
    return f"{sign}{abs(date.year):04d}"


_DATE_TOKENS: dict[str, Callable[[CivilDate], str]] = {
    "yyyy": _year,
    "MM": lambda d: f"{d.month:02d}",
    "dd": lambda d: f"{d.day:02d}",
}

_TIME_TOKENS: dict[str, Callable[[CivilTime], str]] = {
    "HH": lambda t: f"{t.hour:02d}",
    "mm": lambda t: f"{t.minute:02d}",
    "ss": lambda t: f"{t.second:02d}",
}

# Longest first so "yyyy" wins over any shorter prefix
_TOKENS = sorted([*_DATE_TOKENS, *_TIME_TOKENS], key=len, reverse=True)


@functools.lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> tuple[tuple[bool, str], ...]:
    """Split *pattern* into ``(is_token, text)`` segments."""
    segments: list[tuple[bool, str]] = []
    literal: list[str] = []
    pos = 0
    while pos < len(pattern):
        token = next((t for t in _TOKENS if pattern.startswith(t, pos)), None)
        if token is None:
            literal.append(pattern[pos])
            pos += 1
            continue
        if literal:
            segments.append((False, "".join(literal)))
            literal = []
        segments.append((True, token))
        pos += len(token)
    if literal:
        segments.append((False, "".join(literal)))
    return tuple(segments)


def _split(value: Renderable) -> tuple[CivilDate | None, CivilTime | None]:
    if isinstance(value, ZonedInstant):
        return value.date, value.time
    if isinstance(value, CivilDate):
        return value, None
    return None, value


def format(value: Renderable, pattern: str) -> str:  # noqa: A001
    """Render *value* through *pattern*.

    Raises:
        ValueError: The pattern uses a field *value* does not carry,
            e.g. ``HH`` on a plain date.
    """
    date, time = _split(value)
    parts: list[str] = []
    for is_token, text in compile_pattern(pattern):
        if not is_token:
            parts.append(text)
        elif text in _DATE_TOKENS:
            if date is None:
                msg = f"Pattern token {text!r} needs a date field"
                raise ValueError(msg)
            parts.append(_DATE_TOKENS[text](date))
        else:
            if time is None:
                msg = f"Pattern token {text!r} needs a time field"
                raise ValueError(msg)
            parts.append(_TIME_TOKENS[text](time))
    return "".join(parts)
