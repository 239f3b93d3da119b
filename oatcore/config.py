"""Mount build configuration: steppers, drivers, peripherals and radios."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping, Optional

KNOWN_BOARDS = frozenset(
    {
        "avr_mega2560",
        "avr_mks_gen_l_v21",
        "avr_mks_gen_l_v2",
        "avr_mks_gen_l_v1",
        "esp32_esp32dev",
    }
)

WIFI_MODES = frozenset(
    {"disabled", "infrastructure", "ap_only", "attempt_infrastructure_fail_to_ap"}
)

_WIFI_KEY_MIN = 8
_WIFI_KEY_MAX = 32


def _strip_prefix(value: str, prefix: str) -> str:
    text = value.strip().lower()
    return text[len(prefix):] if text.startswith(prefix) else text


class _NamedEnum(Enum):
    """Enum that also accepts its macro-style name, e.g. ``STEPPER_TYPE_NEMA17``."""

    _prefix = ""

    @classmethod
    def _missing_(cls, value: object):
        if not isinstance(value, str):
            return None
        key = _strip_prefix(value, cls._prefix.value if isinstance(cls._prefix, Enum) else cls._prefix)
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        return None


class StepperType(Enum):
    """Stepper motors that can drive an axis."""

    NONE = "none"
    BYJ48 = "28byj48"
    NEMA17 = "nema17"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            key = _strip_prefix(value, "stepper_type_")
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        return None


class DriverType(Enum):
    """Stepper drivers that can run a motor."""

    NONE = "none"
    ULN2003 = "uln2003"
    TMC2209_UART = "tmc2209_uart"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            key = _strip_prefix(value, "driver_type_")
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        return None


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off", ""):
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


def _to_float(value: Any) -> float:
    if isinstance(value, str):
        value = value.strip().rstrip("fF")
    return float(value)


@dataclass(frozen=True)
class MountConfig:
    """All build-time settings of a mount, with the sample configuration as defaults."""

    northern_hemisphere: bool = True
    ra_wheel_version: int = 4
    board: str = "avr_mega2560"

    ra_stepper_type: StepperType = StepperType.BYJ48
    dec_stepper_type: StepperType = StepperType.BYJ48
    ra_driver_type: DriverType = DriverType.ULN2003
    dec_driver_type: DriverType = DriverType.ULN2003
    ra_stepper_speed: int = 400
    ra_stepper_acceleration: int = 600
    dec_stepper_speed: int = 600
    dec_stepper_acceleration: int = 600

    ra_motor_current_rating: int = 0
    ra_operating_current_setting: int = 100
    dec_motor_current_rating: int = 0
    dec_operating_current_setting: int = 100
    use_vref: bool = False
    ra_uart_stealth_mode: bool = True
    dec_uart_stealth_mode: bool = True

    use_gps: bool = True
    use_gyro_level: bool = True

    az_stepper_type: StepperType = StepperType.NONE
    alt_stepper_type: StepperType = StepperType.NONE
    az_driver_type: DriverType = DriverType.NONE
    alt_driver_type: DriverType = DriverType.NONE
    az_correction_factor: float = 1.0
    alt_correction_factor: float = 1.0
    autopa_version: int = 1
    az_motor_current_rating: int = 0
    az_operating_current_setting: int = 100
    alt_motor_current_rating: int = 0
    alt_operating_current_setting: int = 100

    focus_stepper_type: StepperType = StepperType.NEMA17
    focus_driver_type: DriverType = DriverType.TMC2209_UART
    focus_motor_current_rating: int = 0
    focus_operating_current_setting: int = 100
    focus_stepper_speed: int = 200
    focus_uart_stealth_mode: bool = True

    display_type: Optional[str] = None
    serial_baudrate: str = "ascom"

    wifi_enabled: bool = False
    wifi_mode: str = "ap_only"
    wifi_hostname: str = "OAT"
    wifi_ap_mode_wpakey: Optional[str] = "placeholder"
    wifi_infrastructure_mode_ssid: Optional[str] = None
    wifi_infrastructure_mode_wpakey: Optional[str] = None

    bluetooth_enabled: bool = False
    bluetooth_device_name: str = "OpenAstroTracker"

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(self, f.name, self._coerce(f.name, f.default, getattr(self, f.name)))

        board = _strip_prefix(self.board, "board_")
        if board not in KNOWN_BOARDS:
            raise ValueError(f"unknown board: {self.board!r}")
        object.__setattr__(self, "board", board)

        if self.display_type is None:
            display = "lcd_joy_i2c_ssd1306" if board == "esp32_esp32dev" else "lcd_keypad"
        else:
            display = _strip_prefix(self.display_type, "display_type_")
        object.__setattr__(self, "display_type", display)
        object.__setattr__(self, "serial_baudrate", _strip_prefix(self.serial_baudrate, "serial_baudrate_"))

        mode = _strip_prefix(self.wifi_mode, "wifi_mode_")
        if mode not in WIFI_MODES:
            raise ValueError(f"unknown wifi mode: {self.wifi_mode!r}")
        object.__setattr__(self, "wifi_mode", mode)

        self._validate_radios()

    @staticmethod
    def _coerce(name: str, default: Any, value: Any) -> Any:
        try:
            if isinstance(default, bool):
                return _to_bool(value)
            if isinstance(default, Enum):
                return type(default)(value)
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return _to_float(value)
            if value is None:
                return None
            return str(value)
        except (TypeError, ValueError) as err:
            raise ValueError(f"invalid value for {name}: {value!r}") from err

    def _validate_radios(self) -> None:
        is_esp32 = self.board.startswith("esp32")
        if self.wifi_enabled:
            if not is_esp32:
                raise ValueError("wifi is only available on ESP32 boards")
            if not self.wifi_hostname:
                raise ValueError("wifi requires a hostname")
            if self.wifi_mode in ("infrastructure", "attempt_infrastructure_fail_to_ap"):
                if not self.wifi_infrastructure_mode_ssid:
                    raise ValueError("infrastructure wifi requires an SSID")
                self._check_wifi_key("infrastructure", self.wifi_infrastructure_mode_wpakey)
            if self.wifi_mode in ("ap_only", "attempt_infrastructure_fail_to_ap"):
                self._check_wifi_key("access point", self.wifi_ap_mode_wpakey)
        if self.bluetooth_enabled:
            if not is_esp32:
                raise ValueError("bluetooth is only available on ESP32 boards")
            if not self.bluetooth_device_name:
                raise ValueError("bluetooth requires a device name")

    @staticmethod
    def _check_wifi_key(kind: str, key: Optional[str]) -> None:
        if not key:
            raise ValueError(f"{kind} wifi requires a WPA key")
        if not _WIFI_KEY_MIN <= len(key) <= _WIFI_KEY_MAX:
            raise ValueError(
                f"{kind} WPA key must be {_WIFI_KEY_MIN} to {_WIFI_KEY_MAX} characters long"
            )
        if any(ch.isspace() for ch in key):
            raise ValueError(f"{kind} WPA key must not contain white space")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "MountConfig":
        """Build from field names or macro names (case-insensitive); unknown keys raise."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            name = key.strip().lower()
            if name not in known:
                raise ValueError(f"unknown setting: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def as_dict(self) -> dict[str, Any]:
        """Return the settings as plain values, enums replaced by their values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.value if isinstance(value, Enum) else value
        return result


def default_config() -> MountConfig:
    """Return the sample configuration."""
    return MountConfig()