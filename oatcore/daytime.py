"""Signed hour/minute/second quantities that wrap around a 24-hour day."""

from __future__ import annotations

import math
from typing import Optional

SECONDS_PER_DAY = 24 * 3600

_DIGITS = "0123456789"


def _sign(value: float) -> int:
    return -1 if value < 0 else 1


def _leading_int(text: str) -> int:
    """Parse a leading integer the lenient way: junk yields 0."""
    stripped = text.lstrip()
    sign = 1
    start = 0
    if stripped and stripped[0] in "+-":
        sign = -1 if stripped[0] == "-" else 1
        start = 1
    end = start
    while end < len(stripped) and stripped[end] in _DIGITS:
        end += 1
    return sign * int(stripped[start:end]) if end > start else 0


def _two_digits(num: int) -> str:
    return chr(ord("0") + num // 10) + chr(ord("0") + num % 10)


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_meade_seconds(text: str) -> int:
    """Return the signed total seconds of a Meade coordinate such as ``-45*32:11``.

    The string holds an optional sign, two or three digits, a separator, two
    minute digits and optionally a separator and two second digits.
    """
    pos = 0
    sgn = 1
    if text[:1] in ("-", "+"):
        sgn = -1 if text[0] == "-" else 1
        pos += 1

    digits = text[pos:pos + 2]
    if len(digits) < 2 or any(ch not in _DIGITS for ch in digits):
        raise ValueError(f"malformed coordinate: {text!r}")
    degs = int(digits)
    pos += 2

    if pos < len(text) and text[pos] in _DIGITS:
        degs = degs * 10 + int(text[pos])
        pos += 1
    pos += 1  # separator

    mins = _leading_int(text[pos:pos + 2])
    secs = _leading_int(text[pos + 3:pos + 5]) if len(text) > pos + 4 else 0
    return sgn * ((degs * 60 + mins) * 60 + secs)


def _expand(fmt: str, sign: str, degs: int, mins: int, secs: int) -> str:
    degs_text = sign
    if degs >= 100:
        degs_text += str(min(9, degs // 100))
        degs %= 100
    degs_text += _two_digits(degs)
    fields = {"d": degs_text, "m": _two_digits(mins), "s": _two_digits(secs)}

    out = []
    macro = ""
    in_macro = False
    for ch in fmt:
        if ch == "{":
            in_macro = True
        elif ch == "}":
            if in_macro:
                out.append(fields.get(macro, ""))
                in_macro = False
        elif in_macro:
            macro = ch
        else:
            out.append(ch)
    return "".join(out)


class DayTime:
    """A signed time of day held as total seconds, wrapping at 24 hours."""

    def __init__(self, hours: int = 0, minutes: int = 0, seconds: int = 0):
        sgn = _sign(hours)
        self._total = sgn * ((60 * abs(hours) + minutes) * 60 + seconds)

    @classmethod
    def from_hours(cls, hours: float) -> "DayTime":
        """Build from a (possibly fractional) number of hours."""
        result = cls()
        result._total = _sign(hours) * _round_half_away(abs(hours) * 3600.0)
        return result

    @classmethod
    def from_seconds(cls, seconds: int) -> "DayTime":
        """Build directly from a total number of seconds."""
        result = cls()
        result._total = int(seconds)
        return result

    @classmethod
    def parse_meade(cls, text: str) -> "DayTime":
        """Parse a Meade coordinate string without any hemisphere correction."""
        result = cls()
        result._total = parse_meade_seconds(text)
        return result

    def copy(self) -> "DayTime":
        result = type(self)()
        result._total = self._total
        return result

    def components(self) -> tuple[int, int, int]:
        """Return (hours, minutes, seconds); only hours carries the sign."""
        remaining = abs(self._total)
        hours, remaining = divmod(remaining, 3600)
        minutes, seconds = divmod(remaining, 60)
        return hours * _sign(self._total), minutes, seconds

    def hours(self) -> int:
        return self.components()[0]

    def minutes(self) -> int:
        return self.components()[1]

    def seconds(self) -> int:
        return self.components()[2]

    def total_hours(self) -> float:
        return self._total / 3600.0

    def total_minutes(self) -> float:
        return self._total / 60.0

    def total_seconds(self) -> int:
        return self._total

    def set(self, hours: int, minutes: int, seconds: int) -> None:
        self._total = DayTime(hours, minutes, seconds)._total
        self.normalize()

    def set_from(self, other: "DayTime") -> None:
        self._total = other.total_seconds()
        self.normalize()

    def add_hours(self, delta: int) -> None:
        self._total += delta * 3600
        self.normalize()

    def add_minutes(self, delta: int) -> None:
        self._total += delta * 60
        self.normalize()

    def add_seconds(self, delta: int) -> None:
        self._total += delta
        self.normalize()

    def add_time(self, other: "DayTime") -> None:
        self._total += other.total_seconds()
        self.normalize()

    def subtract_time(self, other: "DayTime") -> None:
        self._total -= other.total_seconds()
        self.normalize()

    def normalize(self) -> None:
        """Wrap into the range [0, 24h)."""
        self._total %= SECONDS_PER_DAY

    def format(self, fmt: str, seconds: Optional[int] = None) -> str:
        """Expand ``{d}``, ``{m}`` and ``{s}`` in *fmt*.

        ``{d}`` is the signed whole-unit part, ``{m}`` and ``{s}`` are two-digit
        minutes and seconds. *seconds* overrides the stored total.
        """
        secs = self._total if seconds is None else seconds
        sign = "-" if secs < 0 else "+"
        degs, rem = divmod(abs(secs), 3600)
        mins, secs = divmod(rem, 60)
        return _expand(fmt, sign, degs, mins, secs)

    def __str__(self) -> str:
        hours, mins, secs = self.components()
        prefix = "-" if self._total < 0 else ""
        text = f"{prefix}{_two_digits(abs(hours))}:{_two_digits(mins)}:{_two_digits(secs)}"
        return f"{text} ({self.total_hours():.5f})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_seconds({self._total})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DayTime) or type(other) is not type(self):
            return NotImplemented
        return self._total == other._total

    __hash__ = None  # mutable