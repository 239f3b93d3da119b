import pytest

from oatcore.config import DriverType, MountConfig, StepperType, default_config


def test_defaults_follow_sample_configuration():
    cfg = default_config()
    assert cfg.ra_stepper_type is StepperType.BYJ48
    assert cfg.dec_driver_type is DriverType.ULN2003
    assert cfg.focus_stepper_type is StepperType.NEMA17
    assert cfg.focus_driver_type is DriverType.TMC2209_UART
    assert cfg.ra_stepper_speed == 400
    assert cfg.bluetooth_device_name == "OpenAstroTracker"


def test_display_type_follows_board():
    assert default_config().display_type == "lcd_keypad"
    esp = MountConfig(board="BOARD_ESP32_ESP32DEV")
    assert esp.board == "esp32_esp32dev"
    assert esp.display_type == "lcd_joy_i2c_ssd1306"


def test_enums_accept_macro_names():
    assert StepperType("STEPPER_TYPE_NEMA17") is StepperType.NEMA17
    assert StepperType("STEPPER_TYPE_28BYJ48") is StepperType.BYJ48
    assert DriverType("DRIVER_TYPE_TMC2209_UART") is DriverType.TMC2209_UART


def test_invalid_enum_value_raises():
    with pytest.raises(ValueError):
        MountConfig(ra_stepper_type="STEPPER_TYPE_UNKNOWN")


def test_from_mapping_uses_macro_names():
    cfg = MountConfig.from_mapping(
        {"RA_STEPPER_TYPE": "STEPPER_TYPE_NEMA17", "USE_GPS": 0, "AZ_CORRECTION_FACTOR": "1.000f"}
    )
    assert cfg.ra_stepper_type is StepperType.NEMA17
    assert cfg.use_gps is False
    assert cfg.az_correction_factor == 1.0


def test_from_mapping_rejects_unknown_key():
    with pytest.raises(ValueError):
        MountConfig.from_mapping({"NOT_A_SETTING": 1})


def test_round_trip_through_dict():
    cfg = MountConfig(board="esp32_esp32dev", ra_driver_type=DriverType.TMC2209_UART, use_vref=True)
    assert MountConfig.from_mapping(cfg.as_dict()) == cfg


def test_as_dict_holds_plain_values():
    data = default_config().as_dict()
    assert data["ra_stepper_type"] == StepperType.BYJ48.value
    assert data["wifi_mode"] == "ap_only"


def test_unknown_board_raises():
    with pytest.raises(ValueError):
        MountConfig(board="nonexistent_board")


def test_wifi_not_available_on_mega():
    with pytest.raises(ValueError):
        MountConfig(wifi_enabled=True)


def test_wifi_access_point_on_esp32():
    cfg = MountConfig(board="esp32_esp32dev", wifi_enabled=True, wifi_mode="WIFI_MODE_AP_ONLY")
    assert cfg.wifi_enabled is True
    assert cfg.wifi_mode == "ap_only"


def test_wifi_key_too_short_raises():
    with pytest.raises(ValueError):
        MountConfig(board="esp32_esp32dev", wifi_enabled=True, wifi_ap_mode_wpakey="token")


def test_infrastructure_needs_ssid():
    with pytest.raises(ValueError):
        MountConfig(
            board="esp32_esp32dev",
            wifi_enabled=True,
            wifi_mode="infrastructure",
            wifi_infrastructure_mode_wpakey="placeholder",
        )


def test_bluetooth_needs_name():
    with pytest.raises(ValueError):
        MountConfig(board="esp32_esp32dev", bluetooth_enabled=True, bluetooth_device_name="")


def test_unknown_wifi_mode_raises():
    with pytest.raises(ValueError):
        MountConfig(wifi_mode="mesh")