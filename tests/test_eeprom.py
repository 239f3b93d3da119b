import pytest

from oatcore.eeprom import (
    STORE_SIZE,
    Address,
    EepromStore,
    ExtendedItemFlag,
    FileByteStore,
    ItemFlag,
    MemoryByteStore,
)


@pytest.fixture
def backend():
    return MemoryByteStore()


@pytest.fixture
def store(backend):
    return EepromStore(backend)


def test_memory_store_starts_zeroed(backend):
    assert all(backend.read(i) == 0 for i in range(STORE_SIZE))


def test_memory_store_bounds(backend):
    with pytest.raises(IndexError):
        backend.read(STORE_SIZE)
    with pytest.raises(IndexError):
        backend.update(-1, 0)
    with pytest.raises(ValueError):
        backend.update(0, 256)


def test_uint16_is_little_endian(store, backend):
    store.write_uint16(6, 0x1234)
    assert backend.read(6) == 0x34
    assert backend.read(7) == 0x12


@pytest.mark.parametrize("value", [0, 1, 255, 0x1234, 0xFFFF])
def test_uint16_round_trip(store, value):
    store.write_uint16(10, value)
    assert store.read_uint16(10) == value


@pytest.mark.parametrize("value", [-32768, -1, 0, 1, 32767])
def test_int16_round_trip(store, value):
    store.write_int16(12, value)
    assert store.read_int16(12) == value


@pytest.mark.parametrize("value", [-(2**31), -123456, 0, 987654, 2**31 - 1])
def test_int32_round_trip(store, value):
    store.write_int32(Address.RA_PARKING_POS, value)
    assert store.read_int32(Address.RA_PARKING_POS) == value


@pytest.mark.parametrize("value", [-128, -5, 0, 5, 127])
def test_int8_round_trip(store, value):
    store.write_int8(Address.UTC_OFFSET, value)
    assert store.read_int8(Address.UTC_OFFSET) == value


def test_int8_raw_byte_is_twos_complement(store):
    store.write_int8(Address.UTC_OFFSET, -1)
    assert store.read_uint8(Address.UTC_OFFSET) == 0xFF


def test_int32_does_not_touch_neighbours(store, backend):
    store.write_int32(Address.DEC_PARKING_POS, -1)
    assert backend.read(Address.DEC_PARKING_POS - 1) == 0
    assert backend.read(Address.DEC_PARKING_POS + 4) == 0


def test_nothing_present_initially(store):
    assert not any(store.is_present(flag) for flag in (
        ItemFlag.RA_STEPS_FLAG, ItemFlag.LATITUDE_FLAG, ItemFlag.EXTENDED_FLAG))
    assert not store.is_present_extended(ExtendedItemFlag.PARKING_POS_MARKER_FLAG)


def test_mark_present_writes_marker(store):
    store.mark_present(ItemFlag.RA_STEPS_FLAG)
    assert store.read_uint16(Address.MAGIC_MARKER_AND_FLAGS) == (
        ItemFlag.MAGIC_MARKER_VALUE | ItemFlag.RA_STEPS_FLAG)
    assert store.read_uint8(Address.MAGIC_MARKER) == 0xCE
    assert store.is_present(ItemFlag.RA_STEPS_FLAG)
    assert not store.is_present(ItemFlag.DEC_STEPS_FLAG)


def test_mark_present_accumulates(store):
    store.mark_present(ItemFlag.RA_STEPS_FLAG)
    store.mark_present(ItemFlag.LONGITUDE_FLAG)
    assert store.is_present(ItemFlag.RA_STEPS_FLAG)
    assert store.is_present(ItemFlag.LONGITUDE_FLAG)


def test_mark_present_ignores_flags_without_marker(store):
    store.write_uint16(Address.MAGIC_MARKER_AND_FLAGS, ItemFlag.DEC_STEPS_FLAG)
    assert not store.is_present(ItemFlag.DEC_STEPS_FLAG)
    store.mark_present(ItemFlag.RA_STEPS_FLAG)
    assert store.is_present(ItemFlag.RA_STEPS_FLAG)
    assert not store.is_present(ItemFlag.DEC_STEPS_FLAG)


def test_extended_flags(store):
    store.mark_present_extended(ExtendedItemFlag.UTC_OFFSET_MARKER_FLAG)
    assert store.is_present(ItemFlag.EXTENDED_FLAG)
    assert store.is_present_extended(ExtendedItemFlag.UTC_OFFSET_MARKER_FLAG)
    assert not store.is_present_extended(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)
    store.mark_present_extended(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)
    assert store.is_present_extended(ExtendedItemFlag.UTC_OFFSET_MARKER_FLAG)
    assert store.is_present_extended(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)


def test_extended_ignored_without_extended_marker(store):
    store.write_uint16(Address.EXTENDED_FLAGS, ExtendedItemFlag.RA_HOMING_MARKER_FLAG)
    assert not store.is_present_extended(ExtendedItemFlag.RA_HOMING_MARKER_FLAG)


def test_extended_keeps_core_flags(store):
    store.mark_present(ItemFlag.SPEED_FACTOR_FLAG)
    store.mark_present_extended(ExtendedItemFlag.PARKING_POS_MARKER_FLAG)
    assert store.is_present(ItemFlag.SPEED_FACTOR_FLAG)


def test_clear_removes_everything(store):
    store.mark_present(ItemFlag.ROLL_OFFSET_FLAG)
    store.mark_present_extended(ExtendedItemFlag.RA_HOMING_MARKER_FLAG)
    store.clear()
    assert not store.is_present(ItemFlag.ROLL_OFFSET_FLAG)
    assert not store.is_present_extended(ExtendedItemFlag.RA_HOMING_MARKER_FLAG)
    assert store.read_uint16(Address.EXTENDED_FLAGS) == 0


def test_default_backend_is_memory():
    store = EepromStore()
    store.write_int16(Address.LATITUDE, -4500)
    assert store.read_int16(Address.LATITUDE) == -4500


def test_file_store_persists_on_commit(tmp_path):
    path = tmp_path / "eeprom.bin"
    store = EepromStore(FileByteStore(path))
    store.write_int32(Address.DEC_UPPER_LIMIT, 424242)
    store.mark_present_extended(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)
    store.commit()
    assert path.stat().st_size == STORE_SIZE

    reopened = EepromStore(FileByteStore(path))
    assert reopened.read_int32(Address.DEC_UPPER_LIMIT) == 424242
    assert reopened.is_present_extended(ExtendedItemFlag.DEC_LIMIT_MARKER_FLAG)


def test_file_store_without_commit_not_persisted(tmp_path):
    path = tmp_path / "eeprom.bin"
    first = FileByteStore(path)
    first.update(3, 77)
    assert first.read(3) == 77
    assert not path.exists()
    assert FileByteStore(path).read(3) == 0


def test_file_store_bounds(tmp_path):
    byte_store = FileByteStore(tmp_path / "e.bin", size=8)
    with pytest.raises(IndexError):
        byte_store.read(8)
    with pytest.raises(ValueError):
        byte_store.update(0, -1)


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        MemoryByteStore(0)