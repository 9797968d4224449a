"""Date input helpers: parsing text fields, "today" and "random date" shortcuts."""

import logging
import random
import re
from datetime import date, datetime, time
from typing import Optional, Union

import pytz

from moonphase.config import settings

logger = logging.getLogger(__name__)

DATE_KEYWORDS = ("today", "random")

_DATE_INPUT_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")

DateLike = Union[date, datetime]


class InvalidDateInput(ValueError):
    """Raised when a text date cannot be turned into a calendar date."""

    def __init__(self, value, reason: str = "expected YYYY-MM-DD"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid date {value!r}: {reason}")


def parse_date_input(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` date field value."""
    if not isinstance(value, str):
        raise InvalidDateInput(value, "expected a string")

    match = _DATE_INPUT_RE.match(value.strip())
    if not match:
        raise InvalidDateInput(value)

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateInput(value, str(e)) from e


def format_date_for_input(value: DateLike) -> str:
    """Format a date the way a date input field expects it (zero padded)."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def today(tz: Optional[str] = None) -> datetime:
    """Current instant in the configured (or given) timezone."""
    return datetime.now(pytz.timezone(tz or settings.timezone))


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


def random_date(
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    rng: Optional[random.Random] = None,
) -> datetime:
    """Pick a uniformly random instant between start and end (inclusive)."""
    start_dt = _as_datetime(start if start is not None else settings.random_start)
    end_dt = _as_datetime(end if end is not None else settings.random_end)
    if start_dt > end_dt:
        raise InvalidDateInput(
            format_date_for_input(start_dt),
            f"range start is after end {format_date_for_input(end_dt)}",
        )

    rng = rng or random.Random()
    picked = start_dt + (end_dt - start_dt) * rng.random()
    logger.debug(f"Random date picked: {picked.isoformat()}")
    return picked


def resolve_date(
    value: Union[str, DateLike, None],
    rng: Optional[random.Random] = None,
) -> DateLike:
    """
    Turn a config or command line value into a date.

    ``None``, an empty string and ``"today"`` mean now; ``"random"`` picks a
    random date from the configured range (using ``rng`` when given);
    anything else must be YYYY-MM-DD. Dates and datetimes pass through
    unchanged.
    """
    if isinstance(value, (date, datetime)):
        return value

    keyword = (value or "").strip().lower() or "today"
    if keyword == "today":
        return today()
    if keyword == "random":
        return random_date(rng=rng)
    return parse_date_input(value)
