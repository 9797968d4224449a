"""Command line entry point: show the moon phase for a date."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional

from moonphase.config import settings
from moonphase.dates import InvalidDateInput, resolve_date
from moonphase.drivers.printer_mock import PrinterDriver
from moonphase.module_registry import execute_module_by_type, validate_module_config
from moonphase.modules.moon_phase import MAX_IMAGE_SIZE, MIN_IMAGE_SIZE
from moonphase.render import save_moon_phase_image
from moonphase.widget import MoonPhaseCalendar

logger = logging.getLogger(__name__)

MODULE_TYPE = "moon_phase"


def _image_size(value: str) -> int:
    size = int(value)
    if not MIN_IMAGE_SIZE <= size <= MAX_IMAGE_SIZE:
        raise argparse.ArgumentTypeError(
            f"must be between {MIN_IMAGE_SIZE} and {MAX_IMAGE_SIZE}, got {size}"
        )
    return size


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="moonphase",
        description="Show the moon phase, illumination and age for a calendar date.",
    )
    parser.add_argument(
        "date",
        nargs="?",
        help="Date as YYYY-MM-DD (default: today)",
    )
    shortcut = parser.add_mutually_exclusive_group()
    shortcut.add_argument(
        "--today",
        action="store_true",
        help="Use the current date and time",
    )
    shortcut.add_argument(
        "--random",
        action="store_true",
        help=(
            f"Use a random date between {settings.random_start.isoformat()} "
            f"and {settings.random_end.isoformat()}"
        ),
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for --random, for repeatable picks",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a receipt",
    )
    parser.add_argument(
        "--image",
        metavar="PATH",
        help="Also write the rendered moon disc to a PNG file",
    )
    parser.add_argument(
        "--size",
        type=_image_size,
        default=settings.image_size,
        help=(
            f"Moon disc size in pixels, {MIN_IMAGE_SIZE}-{MAX_IMAGE_SIZE} "
            f"(default: {settings.image_size})"
        ),
    )
    parser.add_argument(
        "--no-image",
        action="store_true",
        help="Leave the moon disc off the receipt",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    if args.date and (args.today or args.random):
        parser.error("a DATE cannot be combined with --today or --random")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = {
        "date": "random" if args.random else (args.date or "today"),
        "show_image": not args.no_image,
        "image_size": args.size,
    }
    if args.seed is not None:
        config["seed"] = args.seed

    try:
        validate_module_config(MODULE_TYPE, config)
    except ValueError as e:
        print(f"moonphase: error: {e}", file=sys.stderr)
        return 2

    if args.json or args.image:
        rng = random.Random(args.seed) if args.seed is not None else None
        try:
            calendar = MoonPhaseCalendar(initial=resolve_date(config["date"], rng=rng))
        except InvalidDateInput as e:
            print(f"moonphase: error: {e}", file=sys.stderr)
            return 2
        if not args.json:
            # The receipt only takes a calendar day; draw the image for that day too
            config["date"] = calendar.input_value
            calendar.select_date(config["date"])
        result = calendar.result

        if args.image:
            save_moon_phase_image(result.phase_fraction, args.image, args.size)
        if args.json:
            print(result.model_dump_json(indent=2))
            return 0

    printer = PrinterDriver(width=settings.printer_width, prefix="")
    ok = execute_module_by_type(MODULE_TYPE, printer, config)
    printer.flush_buffer()
    printer.close()
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
