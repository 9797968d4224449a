"""pytest suite for settings, the module registry and the moon phase receipt."""

import json

import pytest

import moonphase.modules  # noqa: F401 - triggers module auto-registration
from moonphase.config import (
    MoonPhaseConfig,
    Settings,
    format_date,
    format_time,
    load_config,
    save_config,
)
from moonphase.drivers.printer_mock import PrinterDriver
from moonphase.module_registry import (
    execute_module_by_type,
    get_module,
    validate_module_config,
)
from moonphase.modules.moon_phase import format_moon_phase_receipt
from datetime import date, datetime


def test_default_settings():
    settings = Settings()
    assert settings.random_start == date(1900, 1, 1)
    assert settings.random_end == date(2100, 12, 31)
    assert settings.printer_width == 32


def test_unknown_timezone_falls_back_to_utc():
    assert Settings(timezone="Mars/Olympus_Mons").timezone == "UTC"


def test_timezone_env_override_is_checked(monkeypatch):
    monkeypatch.setenv("MOONPHASE_TIMEZONE", "Asia/Tokyo")
    assert Settings().timezone == "Asia/Tokyo"

    monkeypatch.setenv("MOONPHASE_TIMEZONE", "Mars/Base")
    assert Settings().timezone == "UTC"


def test_load_config_reads_json(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"timezone": "Europe/Berlin", "random_start": "1950-06-01"}))

    loaded = load_config(str(config_path))
    assert loaded.timezone == "Europe/Berlin"
    assert loaded.random_start == date(1950, 6, 1)


def test_load_config_falls_back_to_defaults_on_bad_file(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json")

    assert load_config(str(config_path)) == Settings()


def test_load_config_without_file_uses_defaults(tmp_path):
    assert load_config(str(tmp_path / "missing.json")) == Settings()


def test_save_config_writes_loadable_json(tmp_path):
    config_path = tmp_path / "config.json"
    save_config(Settings(image_size=128, time_format="24h"), str(config_path))

    data = json.loads(config_path.read_text())
    assert data["image_size"] == 128
    assert data["random_end"] == "2100-12-31"
    assert load_config(str(config_path)).time_format == "24h"


def test_format_helpers():
    when = datetime(2000, 1, 21, 15, 45)
    assert format_time(when, "24h") == "15:45"
    assert format_time(when, "12h") == "3:45 PM"
    assert format_date(when, "%Y/%m/%d") == "2000/01/21"


def test_moon_phase_config_rejects_bad_dates():
    assert MoonPhaseConfig(date="random").date == "random"
    assert MoonPhaseConfig(date=" 2000-01-21 ").date == "2000-01-21"
    with pytest.raises(ValueError):
        MoonPhaseConfig(date="2000-02-30")


def test_moon_phase_module_is_registered():
    definition = get_module("moon_phase")
    assert definition is not None
    assert definition.execute_fn is format_moon_phase_receipt
    assert definition.config_class is MoonPhaseConfig
    assert get_module("weather") is None


def test_validate_module_config():
    validate_module_config("moon_phase", {})
    validate_module_config("moon_phase", {"date": "2000-01-21", "show_image": False})
    validate_module_config("moon_phase", {"date": "Today"})
    validate_module_config("moon_phase", {"date": " RANDOM ", "seed": 3})

    with pytest.raises(ValueError):
        validate_module_config("moon_phase", {"date": "yesterday"})
    with pytest.raises(ValueError):
        validate_module_config("moon_phase", {"image_size": 4})
    with pytest.raises(ValueError):
        validate_module_config("moon_phase", {"colour": "red"})
    with pytest.raises(ValueError):
        validate_module_config("not_a_module", {})


def test_receipt_prints_phase_details():
    printer = PrinterDriver(echo=False)
    result = format_moon_phase_receipt(
        printer, {"date": "2000-01-21", "show_image": False}, "Tonight"
    )

    output = printer.output()
    assert result.phase_name == "Full Moon"
    assert printer.lines[0].strip() == "TONIGHT"
    assert format_date(date(2000, 1, 21)) in output
    assert "Full Moon" in output
    assert "LIGHT:   96%" in output
    assert "AGE:     14 days" in output
    assert printer.images == []


def test_receipt_includes_moon_image():
    printer = PrinterDriver(echo=False)
    format_moon_phase_receipt(printer, MoonPhaseConfig(date="2000-01-21", image_size=64), None)

    assert len(printer.images) == 1
    assert printer.images[0].size == (64, 64)
    assert any("#" in line for line in printer.lines)
    assert printer.lines[0].strip() == "MOON PHASE"


def test_execute_module_by_type_reports_failures():
    printer = PrinterDriver(echo=False)
    assert execute_module_by_type("moon_phase", printer, {"date": "2000-01-06"}, "Moon") is True
    assert execute_module_by_type("moon_phase", printer, {"date": "2000-02-30"}, "Moon") is False
    assert execute_module_by_type("weather", printer, {}, "Weather") is False


def test_execute_module_by_type_uses_label_as_default_header():
    printer = PrinterDriver(echo=False)
    assert execute_module_by_type("moon_phase", printer, {"date": "Today", "show_image": False}) is True
    assert printer.lines[0].strip() == "MOON PHASE"


def test_seeded_random_receipt_is_repeatable():
    first = format_moon_phase_receipt(PrinterDriver(echo=False), {"date": "random", "seed": 11})
    second = format_moon_phase_receipt(PrinterDriver(echo=False), {"date": "random", "seed": 11})
    assert first.date == second.date
