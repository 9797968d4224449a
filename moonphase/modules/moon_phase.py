import random
from datetime import time
from typing import Any, Dict, Optional

from moonphase.config import MoonPhaseConfig, format_date, format_time, settings
from moonphase.dates import resolve_date
from moonphase.module_registry import register_module
from moonphase.phase import MoonPhase, SYNODIC_MONTH, compute_moon_phase
from moonphase.render import draw_moon_phase_image

MIN_IMAGE_SIZE = 16
MAX_IMAGE_SIZE = 384

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "date": {
            "type": "string",
            "pattern": r"(?i)^\s*(|today|random|\d{4}-\d{1,2}-\d{1,2})\s*$",
        },
        "show_image": {"type": "boolean"},
        "image_size": {"type": "integer", "minimum": MIN_IMAGE_SIZE, "maximum": MAX_IMAGE_SIZE},
        "seed": {"type": "integer"},
    },
    "additionalProperties": False,
}


def print_moon_phase(
    printer,
    result: MoonPhase,
    module_name: Optional[str] = None,
    image_size: Optional[int] = None,
):
    """Prints an already computed phase to the provided printer driver."""
    printer.print_header((module_name or "MOON PHASE").upper())
    printer.print_text(format_date(result.date))
    if result.date.time() != time():
        printer.print_text(format_time(result.date))
    printer.print_line()

    if image_size and hasattr(printer, "print_image"):
        printer.print_image(draw_moon_phase_image(result.phase_fraction, image_size))
        printer.print_line()

    printer.print_text(f"MOON:    {result.emoji} {result.phase_name}")
    printer.print_text(f"LIGHT:   {result.illumination_percent}%")
    printer.print_text(f"AGE:     {result.days_since_new} days")
    printer.print_text(f"CYCLE:   {result.phase_fraction * SYNODIC_MONTH:.1f} / {SYNODIC_MONTH:.1f}")

    printer.feed(1)


@register_module(
    type_id="moon_phase",
    label="Moon Phase",
    description="Phase name, illumination and age of the moon for a date",
    config_schema=CONFIG_SCHEMA,
    config_class=MoonPhaseConfig,
)
def format_moon_phase_receipt(printer, config: Dict[str, Any] = None, module_name: str = None):
    """Prints the moon phase for the configured date."""
    if isinstance(config, MoonPhaseConfig):
        moon_config = config
    else:
        moon_config = MoonPhaseConfig(**(config or {}))

    rng = random.Random(moon_config.seed) if moon_config.seed is not None else None
    when = resolve_date(moon_config.date, rng=rng)
    result = compute_moon_phase(when)

    image_size = moon_config.image_size or settings.image_size
    print_moon_phase(
        printer,
        result,
        module_name=module_name,
        image_size=image_size if moon_config.show_image else None,
    )
    return result
