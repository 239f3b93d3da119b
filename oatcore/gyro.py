"""Tilt, roll and temperature measurement with an MPU-6050 accelerometer."""

from __future__ import annotations

import math
import struct
import time
from dataclasses import dataclass
from typing import Protocol

MPU6050_I2C_ADDR = 0x68
MPU6050_REG_CONFIG = 0x1A
MPU6050_REG_ACCEL_XOUT_H = 0x3B
MPU6050_REG_TEMP_OUT_H = 0x41
MPU6050_REG_PWR_MGMT_1 = 0x6B
MPU6050_REG_WHO_AM_I = 0x75

_EXPECTED_ID = 0x34
_WINDOW_SIZE = 16
ABSENT_TEMPERATURE = 99.0


class I2CBus(Protocol):
    """The two bus operations the gyro needs."""

    def write_register(self, address: int, register: int, value: int) -> None:
        """Write one byte to *register* of the device at *address*."""

    def read_registers(self, address: int, register: int, count: int) -> bytes:
        """Read *count* consecutive bytes starting at *register*."""


@dataclass(frozen=True)
class Angles:
    """Pitch and roll in degrees."""

    pitch_angle: float = 0.0
    roll_angle: float = 0.0


def angles_from_acceleration(ax: int, ay: int, az: int) -> Angles:
    """Compute pitch (about Y) and roll (about X) from raw accelerations."""
    pitch = math.degrees(math.atan2(-ax, math.hypot(ay, az)))
    roll = math.degrees(math.atan2(-ay, math.hypot(ax, az)))
    return Angles(pitch, roll)


def temperature_from_raw(raw: int) -> float:
    """Convert the raw signed temperature register to degrees Celsius."""
    return raw / 340.0 + 36.53


class Gyro:
    """An MPU-6050 reached over an I2C bus."""

    def __init__(self, bus: I2CBus, swap_axes: bool = False, sample_delay: float = 0.01):
        self._bus = bus
        self._swap_axes = swap_axes
        self._sample_delay = sample_delay
        self._present = False

    def startup(self) -> bool:
        """Detect and wake the device; return whether it was found."""
        ident = self._bus.read_registers(MPU6050_I2C_ADDR, MPU6050_REG_WHO_AM_I, 1)
        self._present = bool(ident) and ((ident[0] >> 1) & 0x3F) == _EXPECTED_ID
        if not self._present:
            return False
        self._bus.write_register(MPU6050_I2C_ADDR, MPU6050_REG_PWR_MGMT_1, 0)  # wake, 8 MHz clock
        self._bus.write_register(MPU6050_I2C_ADDR, MPU6050_REG_CONFIG, 6)  # 5 Hz bandwidth
        return True

    def shutdown(self) -> None:
        """Nothing needs to be done to stop the device."""

    def is_present(self) -> bool:
        return self._present

    def current_angles(self) -> Angles:
        """Average pitch and roll over several samples; zeros when absent."""
        if not self._present:
            return Angles()
        pitch = roll = 0.0
        for _ in range(_WINDOW_SIZE):
            raw = self._bus.read_registers(MPU6050_I2C_ADDR, MPU6050_REG_ACCEL_XOUT_H, 6)
            ax, ay, az = struct.unpack(">hhh", bytes(raw[:6]))
            sample = angles_from_acceleration(ax, ay, az)
            pitch += sample.pitch_angle
            roll += sample.roll_angle
            if self._sample_delay > 0:
                time.sleep(self._sample_delay)
        pitch /= _WINDOW_SIZE
        roll /= _WINDOW_SIZE
        if self._swap_axes:
            pitch, roll = roll, pitch
        return Angles(pitch, roll)

    def current_temperature(self) -> float:
        """Device temperature in degrees Celsius; 99 when absent."""
        if not self._present:
            return ABSENT_TEMPERATURE
        raw = self._bus.read_registers(MPU6050_I2C_ADDR, MPU6050_REG_TEMP_OUT_H, 2)
        (value,) = struct.unpack(">h", bytes(raw[:2]))
        return temperature_from_raw(value)