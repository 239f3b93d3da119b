"""Typed mount settings persisted in an ``EepromStore``."""

from __future__ import annotations

import math
from typing import Optional, Union

from .config import MountConfig, StepperType, default_config
from .daytime import DayTime
from .eeprom import Address, EepromStore, ExtendedItemFlag, ItemFlag
from .latitude import Latitude

INT16_MIN = -32768
INT16_MAX = 32767

DEFAULT_BRIGHTNESS = 10
DEFAULT_LATITUDE = 45.0
DEFAULT_LONGITUDE = 100.0
_ANGLE_OFFSET = 16384


def _clamp16(value: int) -> int:
    return max(INT16_MIN, min(INT16_MAX, value))


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class MountSettings:
    """Calibration and location values of a mount.

    Each value is a property: reading returns the stored value or the
    documented default when nothing has been stored; assigning stores the
    value, marks it present and commits.
    """

    def __init__(self, store: Optional[EepromStore] = None, config: Optional[MountConfig] = None):
        self._store = store if store is not None else EepromStore()
        self._config = config if config is not None else default_config()

    def clear(self) -> None:
        """Forget every stored value."""
        self._store.clear()

    def _store_core(self, flag: ItemFlag) -> None:
        self._store.mark_present(flag)
        self._store.commit()

    def _store_extended(self, flag: ExtendedItemFlag) -> None:
        self._store.mark_present_extended(flag)
        self._store.commit()

    # Hour angle: always considered present.
    @property
    def ha_time(self) -> DayTime:
        return DayTime(
            self._store.read_uint8(Address.HA_HOUR),
            self._store.read_uint8(Address.HA_MINUTE),
            0,
        )

    @ha_time.setter
    def ha_time(self, ha: DayTime) -> None:
        self._store.write_uint8(Address.HA_HOUR, ha.hours())
        self._store.write_uint8(Address.HA_MINUTE, ha.minutes())
        self._store.commit()

    @property
    def utc_offset(self) -> int:
        if self._store.is_present_extended(ExtendedItemFlag.UTC_OFFSET_MARKER_FLAG):
            return self._store.read_int8(Address.UTC_OFFSET)
        return 0

    @utc_offset.setter
    def utc_offset(self, offset: int) -> None:
        self._store.write_int8(Address.UTC_OFFSET, int(offset))
        self._store_extended(ExtendedItemFlag.UTC_OFFSET_MARKER_FLAG)

    # Brightness: always considered present; zero means "unset".
    @property
    def brightness(self) -> int:
        value = self._store.read_uint8(Address.LCD_BRIGHTNESS)
        return value if value else DEFAULT_BRIGHTNESS

    @brightness.setter
    def brightness(self, level: int) -> None:
        if not 0 <= level <= 0xFF:
            raise ValueError(f"brightness out of range: {level}")
        self._store.write_uint8(Address.LCD_BRIGHTNESS, level)
        self._store.commit()

    def _read_steps(self, flag: ItemFlag, address: Address) -> Optional[float]:
        if self._store.is_present(flag):
            return 0.1 * self._store.read_int16(address)
        return None

    def _write_steps(self, flag: ItemFlag, address: Address, steps: float) -> None:
        self._store.write_int16(address, _clamp16(int(steps * 10)))
        self._store_core(flag)

    @property
    def ra_steps_per_degree(self) -> Optional[float]:
        """Stored RA microsteps per degree, or None when uncalibrated."""
        return self._read_steps(ItemFlag.RA_STEPS_FLAG, Address.RA_STEPS_DEGREE)

    @ra_steps_per_degree.setter
    def ra_steps_per_degree(self, steps: float) -> None:
        self._write_steps(ItemFlag.RA_STEPS_FLAG, Address.RA_STEPS_DEGREE, steps)

    @property
    def dec_steps_per_degree(self) -> Optional[float]:
        """Stored DEC microsteps per degree, or None when uncalibrated."""
        return self._read_steps(ItemFlag.DEC_STEPS_FLAG, Address.DEC_STEPS_DEGREE)

    @dec_steps_per_degree.setter
    def dec_steps_per_degree(self, steps: float) -> None:
        self._write_steps(ItemFlag.DEC_STEPS_FLAG, Address.DEC_STEPS_DEGREE, steps)

    @property
    def speed_factor(self) -> float:
        """Speed factor; the two stored bytes are read back as an unsigned value."""
        if self._store.is_present(ItemFlag.SPEED_FACTOR_FLAG):
            low = self._store.read_uint8(Address.SPEED_FACTOR_LOW)
            high = self._store.read_uint8(Address.SPEED_FACTOR_HIGH)
            return 1.0 + (low + high * 256) / 10000.0
        return 1.0

    @speed_factor.setter
    def speed_factor(self, factor: float) -> None:
        value = _clamp16(int((factor - 1.0) * 10000.0))
        self._store.write_uint8(Address.SPEED_FACTOR_LOW, value & 0xFF)
        self._store.write_uint8(Address.SPEED_FACTOR_HIGH, (value >> 8) & 0xFF)
        self._store_core(ItemFlag.SPEED_FACTOR_FLAG)

    @property
    def backlash_correction_steps(self) -> int:
        if self._store.is_present(ItemFlag.BACKLASH_STEPS_FLAG):
            return self._store.read_int16(Address.BACKLASH_STEPS)
        return 16 if self._config.ra_stepper_type is StepperType.BYJ48 else 0

    @backlash_correction_steps.setter
    def backlash_correction_steps(self, steps: int) -> None:
        self._store.write_int16(Address.BACKLASH_STEPS, int(steps))
        self._store_core(ItemFlag.BACKLASH_STEPS_FLAG)

    @property
    def latitude(self) -> Latitude:
        if self._store.is_present(ItemFlag.LATITUDE_FLAG):
            return Latitude.from_hours(self._store.read_int16(Address.LATITUDE) / 100.0)
        return Latitude.from_hours(DEFAULT_LATITUDE)

    @latitude.setter
    def latitude(self, latitude: DayTime) -> None:
        value = _clamp16(_round_half_away(latitude.total_hours() * 100.0))
        self._store.write_int16(Address.LATITUDE, value)
        self._store_core(ItemFlag.LATITUDE_FLAG)

    @property
    def longitude(self) -> float:
        """Longitude in degrees, positive to the east."""
        if self._store.is_present(ItemFlag.LONGITUDE_FLAG):
            return self._store.read_int16(Address.LONGITUDE) / 100.0
        return DEFAULT_LONGITUDE

    @longitude.setter
    def longitude(self, degrees: Union[float, DayTime]) -> None:
        if isinstance(degrees, DayTime):
            degrees = degrees.total_hours()
        value = _clamp16(_round_half_away(degrees * 100.0))
        self._store.write_int16(Address.LONGITUDE, value)
        self._store_core(ItemFlag.LONGITUDE_FLAG)

    def _read_angle(self, flag: ItemFlag, address: Address) -> float:
        if self._store.is_present(flag):
            return (self._store.read_uint16(address) - _ANGLE_OFFSET) / 100.0
        return 0.0

    def _write_angle(self, flag: ItemFlag, address: Address, angle: float) -> None:
        self._store.write_int16(address, _clamp16(int(angle * 100 + _ANGLE_OFFSET)))
        self._store_core(flag)

    @property
    def pitch_calibration_angle(self) -> float:
        return self._read_angle(ItemFlag.PITCH_OFFSET_FLAG, Address.PITCH_OFFSET)

    @pitch_calibration_angle.setter
    def pitch_calibration_angle(self, angle: float) -> None:
        self._write_angle(ItemFlag.PITCH_OFFSET_FLAG, Address.PITCH_OFFSET, angle)

    @property
    def roll_calibration_angle(self) -> float:
        return self._read_angle(ItemFlag.ROLL_OFFSET_FLAG, Address.ROLL_OFFSET)

    @roll_calibration_angle.setter
    def roll_calibration_angle(self, angle: float) -> None:
        self._write_angle(ItemFlag.ROLL_OFFSET_FLAG, Address.ROLL_OFFSET, angle)

    def _read_extended32(self, flag: ExtendedItemFlag, address: Address) -> int:
        if self._store.is_present_extended(flag):
            return self._store.read_int32(address)
        return 0

    def _write_extended32(self, flag: ExtendedItemFlag, address: Address, value: int) -> None:
        self._store.write_int32(address, int(value))
        self._store_extended(flag)

    @property
    def ra_parking_pos(self) -> int:
        return self._read_extended32(ExtendedItemFlag.PARKING_POS_MARKER_FLAG, Address.RA_PARKING_POS)

    @ra_parking_pos.setter
    def ra_parking_pos(self, steps: int) -> None:
        self._write_extended32(ExtendedItemFlag.PARKING_POS_MARKER_FLAG, Address.RA_PARKING_POS, steps)

    @property
    def dec_parking_pos(self) -> int:
        return self._read_extended32(ExtendedItemFlag.PARKING_POS_MARKER_FLAG, Address.DEC_PARKING_POS)

    @dec_parking_pos.setter
    def dec_parking_pos(self, steps: int) -> None:
        self._write_extended32(ExtendedItemFlag.PARKING_POS_MARKER_FLAG, Address.DEC_PARKING_POS, steps)

    @property
    def dec_lower_limit(self) -> int:
        return self._read_extended32(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG, Address.DEC_LOWER_LIMIT)

    @dec_lower_limit.setter
    def dec_lower_limit(self, steps: int) -> None:
        self._write_extended32(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG, Address.DEC_LOWER_LIMIT, steps)

    @property
    def dec_upper_limit(self) -> int:
        return self._read_extended32(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG, Address.DEC_UPPER_LIMIT)

    @dec_upper_limit.setter
    def dec_upper_limit(self, steps: int) -> None:
        self._write_extended32(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG, Address.DEC_UPPER_LIMIT, steps)

    @property
    def ra_homing_offset(self) -> int:
        return self._read_extended32(ExtendedItemFlag.RA_HOMING_MARKER_FLAG, Address.RA_HOMING_OFFSET)

    @ra_homing_offset.setter
    def ra_homing_offset(self, steps: int) -> None:
        self._write_extended32(ExtendedItemFlag.RA_HOMING_MARKER_FLAG, Address.RA_HOMING_OFFSET, steps)

    def describe(self) -> str:
        """Return a human-readable report of the stored contents."""
        marker = self._store.read_uint16(Address.MAGIC_MARKER_AND_FLAGS)
        has_values = (marker & ItemFlag.MAGIC_MARKER_MASK) == ItemFlag.MAGIC_MARKER_VALUE
        has_extended = (marker & ItemFlag.EXTENDED_FLAG) == ItemFlag.EXTENDED_FLAG

        def fmt_optional(value: Optional[float]) -> str:
            return "uncalibrated" if value is None else f"{value:f}"

        lines = [
            f"Magic Marker: {marker:x}",
            "EEPROM has values" if has_values else "EEPROM does NOT have values",
            "EEPROM has extended values" if has_extended else "EEPROM does NOT have extended values",
            f"IsPresent(EXTENDED): {'Yes' if self._store.is_present(ItemFlag.EXTENDED_FLAG) else 'No'}",
            f"Stored HATime: {self.ha_time}",
            f"Stored UTC Offset: {self.utc_offset}",
            f"Stored Brightness: {self.brightness}",
            f"Stored RA Steps per Degree: {fmt_optional(self.ra_steps_per_degree)}",
            f"Stored DEC Steps per Degree: {fmt_optional(self.dec_steps_per_degree)}",
            f"Stored Speed Factor: {self.speed_factor:f}",
            f"Stored Backlash Correction Steps: {self.backlash_correction_steps}",
            f"Stored Latitude: {self.latitude}",
            f"Stored Longitude: {self.longitude:f}",
            f"Stored Pitch Calibration Angle: {self.pitch_calibration_angle:f}",
            f"Stored Roll Calibration Angle: {self.roll_calibration_angle:f}",
            f"Stored RA Parking Position: {self.ra_parking_pos}",
            f"Stored DEC Parking Position: {self.dec_parking_pos}",
            f"Stored DEC Lower Limit: {self.dec_lower_limit}",
            f"Stored DEC Upper Limit: {self.dec_upper_limit}",
        ]
        return "\n".join(lines)