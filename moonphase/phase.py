"""
Moon phase calculation.

Closed-form approximation: the phase is the position within the mean synodic
month, measured from a known new moon. Good to within a day or so, which is
plenty for a calendar display.
"""

import math
from datetime import date, datetime, time
from typing import Union

import pytz
from pydantic import BaseModel

from moonphase.config import settings

SYNODIC_MONTH = 29.5305882  # days
REFERENCE_NEW_MOON = datetime(2000, 1, 6, 18, 14, 0)  # local wall-clock time
SECONDS_PER_DAY = 86400.0

# (upper bound, name, emoji), evaluated in order; the New Moon wrap at 0.97
# is handled separately.
PHASES = [
    (0.03, "New Moon", "🌑"),
    (0.22, "Waxing Crescent", "🌒"),
    (0.28, "First Quarter", "🌓"),
    (0.47, "Waxing Gibbous", "🌔"),
    (0.53, "Full Moon", "🌕"),
    (0.72, "Waning Gibbous", "🌖"),
    (0.78, "Last Quarter", "🌗"),
]
WANING_CRESCENT = ("Waning Crescent", "🌘")
NEW_MOON_WRAP = 0.97

PHASE_NAMES = [name for _, name, _ in PHASES] + [WANING_CRESCENT[0]]


def round_half_up(value: float) -> int:
    """Round .5 towards +infinity (Python's round() uses banker's rounding)."""
    return int(math.floor(value + 0.5))


def _reference_epoch(when: datetime) -> datetime:
    if when.tzinfo is None:
        return REFERENCE_NEW_MOON
    return pytz.timezone(settings.timezone).localize(REFERENCE_NEW_MOON)


def calculate_phase_fraction(when: Union[date, datetime]) -> float:
    """
    Position of the given date within the synodic month, in [0, 1).

    0 is new moon, 0.5 full moon. A plain date counts from local midnight.
    Aware datetimes are measured against the reference new moon in the
    configured timezone.
    """
    if not isinstance(when, datetime):
        when = datetime.combine(when, time())

    elapsed_days = (when - _reference_epoch(when)).total_seconds() / SECONDS_PER_DAY
    phase_days = ((elapsed_days % SYNODIC_MONTH) + SYNODIC_MONTH) % SYNODIC_MONTH
    fraction = phase_days / SYNODIC_MONTH

    # Float division can land exactly on 1.0 just before a new moon
    if fraction >= 1.0:
        return 0.0
    return fraction


def _classify(fraction: float):
    if fraction >= NEW_MOON_WRAP:
        return PHASES[0][1:]
    for upper, name, emoji in PHASES:
        if fraction < upper:
            return name, emoji
    return WANING_CRESCENT


def classify_phase_name(fraction: float) -> str:
    """Name of the phase (New Moon, Waxing Crescent, ...) for a fraction."""
    return _classify(fraction)[0]


def get_moon_emoji(fraction: float) -> str:
    """Returns an emoji representing the moon phase for a fraction."""
    return _classify(fraction)[1]


def compute_illumination_percent(fraction: float) -> int:
    """Approximate lit percentage of the disc, peaking at full moon."""
    if fraction <= 0.5:
        return round_half_up(fraction / 0.5 * 100)
    return round_half_up((1 - fraction) / 0.5 * 100)


def compute_days_since_new(fraction: float) -> int:
    """Moon age in whole days."""
    return round_half_up(fraction * SYNODIC_MONTH)


class ShadowMask(BaseModel):
    """
    Shadow over the disc, as an ellipse anchored on one edge.

    ``side`` is the edge the shadow grows from ("left" while waxing,
    "right" while waning) and ``extent_percent`` its horizontal radius as a
    percentage of the disc width.
    """

    side: str
    extent_percent: float


def shadow_geometry(fraction: float) -> ShadowMask:
    if fraction <= 0.5:
        extent = (1 - fraction * 2) * 100
        side = "left"
    else:
        extent = (fraction - 0.5) * 2 * 100
        side = "right"
    return ShadowMask(side=side, extent_percent=max(0.0, min(100.0, extent)))


class MoonPhase(BaseModel):
    """Everything a display needs for one date."""

    date: datetime
    phase_fraction: float
    phase_name: str
    illumination_percent: int
    days_since_new: int
    emoji: str
    shadow: ShadowMask


def compute_moon_phase(when: Union[date, datetime]) -> MoonPhase:
    """Compute the phase fraction and all derived display values for a date."""
    fraction = calculate_phase_fraction(when)
    if not isinstance(when, datetime):
        when = datetime.combine(when, time())

    return MoonPhase(
        date=when,
        phase_fraction=fraction,
        phase_name=classify_phase_name(fraction),
        illumination_percent=compute_illumination_percent(fraction),
        days_since_new=compute_days_since_new(fraction),
        emoji=get_moon_emoji(fraction),
        shadow=shadow_geometry(fraction),
    )
