"""Byte-addressed persistent storage of the mount's calibration values."""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from enum import IntEnum
from pathlib import Path
from typing import Optional, Union

STORE_SIZE = 64


class ItemFlag(IntEnum):
    """Marker and presence bits of the core items, stored at ``Address.MAGIC_MARKER_AND_FLAGS``."""

    MAGIC_MARKER_VALUE = 0xCE00
    MAGIC_MARKER_MASK = 0xFE00
    RA_STEPS_FLAG = 0x0001
    DEC_STEPS_FLAG = 0x0002
    SPEED_FACTOR_FLAG = 0x0004
    BACKLASH_STEPS_FLAG = 0x0008
    LATITUDE_FLAG = 0x0010
    LONGITUDE_FLAG = 0x0020
    PITCH_OFFSET_FLAG = 0x0040
    ROLL_OFFSET_FLAG = 0x0080
    EXTENDED_FLAG = 0x0100
    FLAGS_MASK = 0x01FF


class ExtendedItemFlag(IntEnum):
    """Presence bits of the extended items, stored at ``Address.EXTENDED_FLAGS``."""

    PARKING_POS_MARKER_FLAG = 0x0001
    DEC_LIMIT_MARKER_FLAG = 0x0002
    UTC_OFFSET_MARKER_FLAG = 0x0004
    RA_HOMING_MARKER_FLAG = 0x0008


class Address(IntEnum):
    """Offsets of the stored items."""

    SPEED_FACTOR_LOW = 0
    HA_HOUR = 1
    HA_MINUTE = 2
    SPEED_FACTOR_HIGH = 3
    FLAGS = 4
    MAGIC_MARKER_AND_FLAGS = 4
    MAGIC_MARKER = 5
    RA_STEPS_DEGREE = 6
    DEC_STEPS_DEGREE = 8
    BACKLASH_STEPS = 10
    LATITUDE = 12
    LONGITUDE = 14
    LCD_BRIGHTNESS = 16
    PITCH_OFFSET = 17
    ROLL_OFFSET = 19
    EXTENDED_FLAGS = 21
    RA_PARKING_POS = 23
    DEC_PARKING_POS = 27
    DEC_LOWER_LIMIT = 31
    DEC_UPPER_LIMIT = 35
    UTC_OFFSET = 39
    RA_HOMING_OFFSET = 40


class ByteStore(ABC):
    """A small byte-addressed non-volatile memory."""

    @abstractmethod
    def read(self, location: int) -> int:
        """Return the byte at *location*."""

    @abstractmethod
    def update(self, location: int, value: int) -> None:
        """Set the byte at *location* to *value*."""

    @abstractmethod
    def commit(self) -> None:
        """Make previous updates durable."""


class _BufferStore(ByteStore):
    def __init__(self, size: int):
        if size <= 0:
            raise ValueError("size must be positive")
        self._data = bytearray(size)

    def _check(self, location: int) -> int:
        location = int(location)
        if not 0 <= location < len(self._data):
            raise IndexError(f"location {location} outside store of {len(self._data)} bytes")
        return location

    def read(self, location: int) -> int:
        return self._data[self._check(location)]

    def update(self, location: int, value: int) -> None:
        location = self._check(location)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value}")
        self._data[location] = value


class MemoryByteStore(_BufferStore):
    """A volatile store, zeroed at creation."""

    def __init__(self, size: int = STORE_SIZE):
        super().__init__(size)

    def read(self, location: int) -> int:
        return super().read(location)

    def update(self, location: int, value: int) -> None:
        super().update(location, value)

    def commit(self) -> None:
        """Nothing to do; memory is the storage."""


class FileByteStore(_BufferStore):
    """A store backed by a file; updates reach the file on ``commit``."""

    def __init__(self, path: Union[str, os.PathLike], size: int = STORE_SIZE):
        super().__init__(size)
        self._path = Path(path)
        if self._path.exists():
            content = self._path.read_bytes()[:size]
            self._data[: len(content)] = content

    def read(self, location: int) -> int:
        return super().read(location)

    def update(self, location: int, value: int) -> None:
        super().update(location, value)

    def commit(self) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(bytes(self._data))
            os.replace(tmp_name, self._path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >= 1 << (bits - 1) else value


class EepromStore:
    """Typed little-endian access and presence flags on top of a ``ByteStore``."""

    def __init__(self, backend: Optional[ByteStore] = None):
        self._backend = backend if backend is not None else MemoryByteStore(STORE_SIZE)

    def _read(self, location: int, count: int) -> int:
        return int.from_bytes(bytes(self._backend.read(location + i) for i in range(count)), "little")

    def _write(self, location: int, value: int, count: int) -> None:
        value &= (1 << (8 * count)) - 1
        for i, byte in enumerate(value.to_bytes(count, "little")):
            self._backend.update(location + i, byte)

    def read_uint8(self, location: int) -> int:
        return self._read(location, 1)

    def write_uint8(self, location: int, value: int) -> None:
        self._write(location, int(value), 1)

    def read_int8(self, location: int) -> int:
        return _signed(self._read(location, 1), 8)

    def write_int8(self, location: int, value: int) -> None:
        self._write(location, int(value), 1)

    def read_uint16(self, location: int) -> int:
        return self._read(location, 2)

    def write_uint16(self, location: int, value: int) -> None:
        self._write(location, int(value), 2)

    def read_int16(self, location: int) -> int:
        return _signed(self._read(location, 2), 16)

    def write_int16(self, location: int, value: int) -> None:
        self._write(location, int(value), 2)

    def read_int32(self, location: int) -> int:
        return _signed(self._read(location, 4), 32)

    def write_int32(self, location: int, value: int) -> None:
        self._write(location, int(value), 4)

    def is_present(self, item: ItemFlag) -> bool:
        """True when the magic marker is set and so is the item's flag."""
        marker = self.read_uint16(Address.MAGIC_MARKER_AND_FLAGS)
        check = ItemFlag.MAGIC_MARKER_MASK | item
        expected = ItemFlag.MAGIC_MARKER_VALUE | item
        return (marker & check) == expected

    def is_present_extended(self, item: ExtendedItemFlag) -> bool:
        """True when extended data is present and the item's flag is set."""
        if not self.is_present(ItemFlag.EXTENDED_FLAG):
            return False
        return bool(self.read_uint16(Address.EXTENDED_FLAGS) & item)

    def mark_present(self, item: ItemFlag) -> None:
        """Set the marker and the item's flag, keeping flags already set."""
        new_flags = ItemFlag.MAGIC_MARKER_VALUE | item
        existing = self.read_uint16(Address.MAGIC_MARKER_AND_FLAGS)
        if (existing & ItemFlag.MAGIC_MARKER_MASK) == ItemFlag.MAGIC_MARKER_VALUE:
            new_flags |= existing & ItemFlag.FLAGS_MASK
        self.write_uint16(Address.MAGIC_MARKER_AND_FLAGS, new_flags)

    def mark_present_extended(self, item: ExtendedItemFlag) -> None:
        """Set the extended marker and the extended item's flag."""
        extended = 0
        if self.is_present(ItemFlag.EXTENDED_FLAG):
            extended = self.read_uint16(Address.EXTENDED_FLAGS)
        self.mark_present(ItemFlag.EXTENDED_FLAG)
        self.write_uint16(Address.EXTENDED_FLAGS, extended | item)

    def clear(self) -> None:
        """Forget all stored items and commit."""
        self.write_uint16(Address.MAGIC_MARKER_AND_FLAGS, 0)
        self.write_uint16(Address.EXTENDED_FLAGS, 0)
        self.commit()

    def commit(self) -> None:
        self._backend.commit()