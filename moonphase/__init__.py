"""Moon phase calendar: phase fraction, name, illumination and age for a date."""

from moonphase.dates import InvalidDateInput
from moonphase.phase import (
    MoonPhase,
    SYNODIC_MONTH,
    calculate_phase_fraction,
    classify_phase_name,
    compute_days_since_new,
    compute_illumination_percent,
    compute_moon_phase,
)

__version__ = "1.0.0"
