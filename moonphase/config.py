from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import date, datetime
import json
import logging
import os
import pytz
from dotenv import load_dotenv

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Constants
PRINTER_WIDTH = 32  # Characters per printed line
DEFAULT_TIMEZONE = "UTC"


class MoonPhaseConfig(BaseModel):
    """Per-module configuration for the moon phase receipt."""

    date: str = "today"  # "today", "random" or "YYYY-MM-DD"
    show_image: bool = True
    image_size: Optional[int] = None  # Falls back to settings.image_size
    seed: Optional[int] = None  # Makes "random" repeatable

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        # Imported here to avoid a cycle (dates reads the global settings)
        from moonphase.dates import DATE_KEYWORDS, parse_date_input

        value = (value or "").strip()
        if value and value.lower() not in DATE_KEYWORDS:
            parse_date_input(value)
        return value


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    timezone: str = Field(default_factory=lambda: os.getenv("MOONPHASE_TIMEZONE", DEFAULT_TIMEZONE))
    time_format: str = "12h"  # "12h" for 12-hour format, "24h" for 24-hour format
    date_format: str = "%A, %b %d %Y"
    printer_width: int = PRINTER_WIDTH

    # Bounds for the "random date" shortcut
    random_start: date = date(1900, 1, 1)
    random_end: date = date(2100, 12, 31)

    # Default edge length of the rendered moon disc, in pixels
    image_size: int = 96

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            logger.error(f"Unknown timezone {value!r}, using {DEFAULT_TIMEZONE}")
            return DEFAULT_TIMEZONE
        return value


def _config_path() -> str:
    # config.json lives one directory up from this package
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_dir, "config.json")


def load_config(config_path: Optional[str] = None) -> Settings:
    """Load settings from config.json or return defaults."""
    config_path = config_path or _config_path()

    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            try:
                data = json.load(f)
                return Settings(**data)
            except Exception as e:
                logger.error(f"Error loading config from {config_path}: {e}")

    return Settings()


def save_config(new_settings: Settings, config_path: Optional[str] = None):
    """Saves the settings object to config.json."""
    config_path = config_path or _config_path()

    with open(config_path, "w") as f:
        json.dump(new_settings.model_dump(mode="json"), f, indent=4)


def format_time(dt: datetime, time_format: Optional[str] = None) -> str:
    """
    Format a datetime object according to the time_format setting.

    Args:
        dt: datetime object to format
        time_format: Optional override (defaults to settings.time_format)

    Returns:
        Formatted time string (12h: "3:45 PM" or 24h: "15:45")
    """
    if time_format is None:
        time_format = settings.time_format

    if time_format == "24h":
        return dt.strftime("%H:%M")
    else:  # Default to 12h
        return dt.strftime("%I:%M %p").lstrip(
            "0"
        )  # Remove leading zero, e.g., "3:45 PM" instead of "03:45 PM"


def format_date(value, date_format: Optional[str] = None) -> str:
    """Format a date or datetime for display, e.g. "Thursday, Jan 06 2000"."""
    if date_format is None:
        date_format = settings.date_format
    return value.strftime(date_format)


# Global settings instance
settings = load_config()
