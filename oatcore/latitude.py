"""Geographic latitude, 90 at the north pole and -90 at the south pole."""

from __future__ import annotations

from .daytime import DayTime, parse_meade_seconds

_LIMIT = 90 * 3600


class Latitude(DayTime):
    """A latitude clamped to -90..+90 degrees."""

    def normalize(self) -> None:
        """Clamp into the range -90..+90 degrees."""
        if self._total > _LIMIT:
            self._total = _LIMIT
        if self._total < -_LIMIT:
            self._total = -_LIMIT

    @classmethod
    def parse_meade(cls, text: str) -> "Latitude":
        result = cls()
        result._total = parse_meade_seconds(text)
        result.normalize()
        return result