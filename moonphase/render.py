"""Monochrome moon disc rendering for the printer and the console preview."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Union

from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)


def draw_moon_phase_image(fraction: float, size: int = 64) -> Image.Image:
    """
    Draw the moon disc for a phase fraction as a 1-bit image (1 = lit).

    The terminator is the projection of the day/night boundary onto the disc:
    on each row of half-width ``w`` it sits at ``x = w * cos(2 * pi * fraction)``.
    While waxing the right side is lit, while waning the left side.
    """
    size = max(8, int(size))
    img = Image.new("1", (size, size), 0)
    draw = ImageDraw.Draw(img)

    center_x = size // 2
    center_y = size // 2
    radius = max(2, (size // 2) - 2)

    # Outline so a new moon still shows where the disc is
    draw.ellipse(
        (center_x - radius, center_y - radius, center_x + radius, center_y + radius),
        outline=1,
    )

    terminator = math.cos(2 * math.pi * fraction)
    waxing = fraction <= 0.5
    pixels = img.load()

    for py in range(size):
        dy = (py - center_y) / radius
        if abs(dy) > 1:
            continue
        half_width = math.sqrt(1 - dy * dy)
        for px in range(size):
            dx = (px - center_x) / radius
            if dx * dx + dy * dy > 1:
                continue
            if waxing:
                lit = dx > half_width * terminator
            else:
                lit = dx < -half_width * terminator
            if lit:
                pixels[px, py] = 1

    return img


def save_moon_phase_image(fraction: float, path: Union[str, Path], size: int = 64) -> Path:
    """Render the disc and write it as a PNG."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    draw_moon_phase_image(fraction, size).save(path, format="PNG")
    logger.info(f"Saved moon image to {path}")
    return path


def image_to_ascii(
    img: Image.Image,
    cols: int = 32,
    on: str = "#",
    off: str = " ",
    density_threshold: float = 0.5,
    cell_aspect: float = 2.0,
) -> list[str]:
    """Downsample a 1-bit image into console-friendly character rows."""
    if img.mode != "1":
        img = img.convert("1")

    width, height = img.size
    block_w = max(1, width // cols)
    block_h = max(1, int(round(block_w * cell_aspect)))
    out_cols = max(1, width // block_w)
    out_rows = max(1, height // block_h)
    pixels = img.load()
    rows: list[str] = []

    for row in range(out_rows):
        y0 = row * block_h
        y1 = min(height, y0 + block_h)
        line_chars: list[str] = []
        for col in range(out_cols):
            x0 = col * block_w
            x1 = min(width, x0 + block_w)
            total = (x1 - x0) * (y1 - y0)
            lit = 0
            for y in range(y0, y1):
                for x in range(x0, x1):
                    if pixels[x, y]:
                        lit += 1
            lit_ratio = lit / total if total else 0.0
            line_chars.append(on if lit_ratio >= density_threshold else off)
        rows.append("".join(line_chars).rstrip())

    return rows
