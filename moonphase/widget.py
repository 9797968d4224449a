"""
Moon Phase Calendar widget state.

Holds the selected date and the phase computed for it. Every selection
recomputes the full result before ``on_change`` is called, so a display
layer only has to re-render from ``result``.

Example usage:
    from moonphase.widget import MoonPhaseCalendar

    calendar = MoonPhaseCalendar(on_change=lambda result: print(result.phase_name))
    calendar.select_date("2000-01-21")
    calendar.select_today()
"""

import logging
import random
from datetime import date, datetime
from typing import Callable, Optional, Union

from moonphase.dates import (
    format_date_for_input,
    parse_date_input,
    random_date,
    today,
)
from moonphase.phase import MoonPhase, compute_moon_phase

logger = logging.getLogger(__name__)


class MoonPhaseCalendar:
    def __init__(
        self,
        initial: Optional[Union[date, datetime]] = None,
        on_change: Optional[Callable[[MoonPhase], None]] = None,
    ):
        self.on_change = on_change
        self.selected_date: Union[date, datetime] = initial if initial is not None else today()
        self.result: MoonPhase = compute_moon_phase(self.selected_date)

    @property
    def input_value(self) -> str:
        """The selected date as a date field value (YYYY-MM-DD)."""
        return format_date_for_input(self.selected_date)

    def select_date(self, value: Union[str, date, datetime]) -> MoonPhase:
        """
        Select a date (or YYYY-MM-DD text) and recompute.

        Raises:
            InvalidDateInput: If text cannot be parsed; the previous
                selection is kept.
        """
        if isinstance(value, str):
            value = parse_date_input(value)
        return self._update(value)

    def select_today(self) -> MoonPhase:
        return self._update(today())

    def select_random(self, rng: Optional[random.Random] = None) -> MoonPhase:
        return self._update(random_date(rng=rng))

    def _update(self, value: Union[date, datetime]) -> MoonPhase:
        result = compute_moon_phase(value)
        self.selected_date = value
        self.result = result
        logger.debug(
            f"Selected {format_date_for_input(value)}: {result.phase_name} "
            f"({result.phase_fraction:.3f})"
        )
        if self.on_change is not None:
            self.on_change(result)
        return result
