# oatcore

Core logic for a do-it-yourself telescope tracking mount. It runs in
plain Python and needs no hardware attached. It has no dependencies
outside the standard library.

## Modules

- `oatcore.daytime`
  - `DayTime` is a signed time of day held in whole seconds. `set`, the
    `add_*` methods and `subtract_time` wrap it into 0..24 hours.
  - You can build one from hours, minutes and seconds, or with
    `from_hours` or `from_seconds`. `parse_meade` reads a Meade
    coordinate string such as `23:44:22` or `-45*32:11`.
  - `format` expands the `{d}`, `{m}` and `{s}` placeholders.
  - `str()` gives text of the form `14:45:06 (14.75167)`.
  - `parse_meade_seconds` returns the signed total seconds of such a
    string. It raises `ValueError` when the leading digits are missing.
- `oatcore.latitude.Latitude` is a `DayTime` held in degrees. It is
  clamped to -90..+90 when parsed and whenever it is changed.
- `oatcore.config`
  - `MountConfig` is a frozen dataclass that holds the build-time
    settings of a mount: steppers and drivers for each axis, motor
    currents, GPS and gyro use, focuser, display, serial speed, Wi-Fi
    and Bluetooth.
  - `MountConfig.from_mapping` accepts field names in any case.
    Enumerated values may be given in macro style, for example
    `"STEPPER_TYPE_NEMA17"` or `"BOARD_ESP32_ESP32DEV"`.
  - It checks the board name and the Wi-Fi settings. Wi-Fi and Bluetooth
    are only allowed on ESP32 boards, and a WPA key must be 8 to 32
    characters with no white space. A failed check raises `ValueError`.
  - `as_dict` returns the settings as plain values, and
    `default_config()` returns the sample configuration.
- `oatcore.eeprom`
  - `EepromStore` implements the 64-byte settings layout: the magic
    marker, the core and extended presence flags, and little-endian
    8, 16 and 32-bit integers.
  - It runs over a `ByteStore`. Two are provided: `MemoryByteStore`,
    which is volatile, and `FileByteStore`, which writes the whole file
    atomically on `commit()`.
  - `ItemFlag`, `ExtendedItemFlag` and `Address` name the bits and the
    offsets.
- `oatcore.settings.MountSettings` gives property access to the stored
  values:
  - hour angle, UTC offset and brightness;
  - RA and DEC steps per degree, which read as `None` when no value is
    stored;
  - speed factor and backlash correction;
  - latitude and longitude;
  - pitch and roll offsets;
  - parking positions, DEC limits and RA homing offset.

  Reading a value that was never stored returns its default. Assigning a
  value stores it, marks it present and commits. `describe()` returns a
  text report of the store.
- `oatcore.gyro.Gyro` reads pitch, roll and temperature from an MPU-6050
  through any object that implements the `I2CBus` protocol.
  - `startup()` detects the sensor and wakes it.
  - `current_angles()` averages 16 samples.
  - When no sensor was found it returns zero angles and a temperature of
    99 °C.
  - `angles_from_acceleration` and `temperature_from_raw` are the
    conversions it uses.
- `oatcore.menu`
  - `LcdMenu` lays out a horizontally scrolling menu line. The selector
    arrows of the active item stay at a fixed column.
  - It draws onto a `Display`. `TextDisplay` is an in-memory character
    grid you can inspect with `lines()`.
  - The characters `> < ^ ~ @ ' & \`` are drawn as `SpecialChar`
    glyphs, and each glyph has a 5x8 bitmap.
  - When the menu is given `MountSettings`, it reads the brightness from
    them and saves the brightness to them.

## Example

```python
from oatcore.daytime import DayTime
from oatcore.latitude import Latitude
from oatcore.eeprom import EepromStore, FileByteStore
from oatcore.settings import MountSettings
from oatcore.menu import LcdMenu, TextDisplay

ra = DayTime.parse_meade("23:44:22")
ra.add_hours(1)
print(ra.format("{d}h{m}m{s}s"))                  # +00h44m22s

print(Latitude.parse_meade("+95*00:00").total_hours())   # 90.0

settings = MountSettings(EepromStore(FileByteStore("mount.bin")))
settings.latitude = Latitude.from_hours(52.5)
settings.ra_homing_offset = -1200
print(settings.describe())

display = TextDisplay(16, 2)
menu = LcdMenu(display, settings=settings)
menu.startup()
menu.add_item("RA", 1)
menu.add_item("DEC", 2)
menu.update_display()
print(display.lines()[0])
```

## What it does not do

The package is logic only, and it has no command-line program:

- It drives no motors and does no slewing or tracking.
- It has no serial command interface.
- It has no declination type.
- It has no keypad decoding.
- It has no board pin maps.
- It has no periodic timer.

The gyro talks to hardware only through an `I2CBus` that you supply. The
menu only writes to a `Display` that you supply.

## Running the tests

```
pip install -e .[test]
pytest
```