"""Moon phase rendering regression tests."""

from PIL import Image

from moonphase.render import draw_moon_phase_image, image_to_ascii, save_moon_phase_image


def _lit_fraction_in_disc(fraction: float, size: int = 64) -> float:
    image = draw_moon_phase_image(fraction, size)
    pixels = image.load()

    center_x = size // 2
    center_y = size // 2
    radius = max(2, (size // 2) - 2)

    lit_pixels = 0
    total_pixels = 0
    for py in range(size):
        for px in range(size):
            dx = px - center_x
            dy = py - center_y
            if dx * dx + dy * dy > radius * radius:
                continue

            total_pixels += 1
            lit_pixels += 1 if pixels[px, py] else 0

    return lit_pixels / total_pixels if total_pixels else 0.0


def _lit_centroid_x(fraction: float, size: int = 64) -> float:
    image = draw_moon_phase_image(fraction, size)
    pixels = image.load()

    center_x = size // 2
    center_y = size // 2
    radius = max(2, (size // 2) - 2)

    lit_count = 0
    x_sum = 0.0
    for py in range(size):
        for px in range(size):
            dx = px - center_x
            dy = py - center_y
            if dx * dx + dy * dy > radius * radius:
                continue

            if pixels[px, py]:
                lit_count += 1
                x_sum += dx / radius

    return x_sum / lit_count if lit_count else 0.0


def test_image_is_square_and_monochrome():
    image = draw_moon_phase_image(0.3, 48)
    assert image.mode == "1"
    assert image.size == (48, 48)


def test_new_moon_is_mostly_dark():
    new_lit = _lit_fraction_in_disc(0.0)
    full_lit = _lit_fraction_in_disc(0.5)
    assert new_lit < 0.15
    assert full_lit - new_lit > 0.80


def test_full_moon_is_mostly_lit():
    assert _lit_fraction_in_disc(0.5) > 0.95


def test_quarter_moons_are_near_half_lit():
    new_lit = _lit_fraction_in_disc(0.0)
    full_lit = _lit_fraction_in_disc(0.5)
    first_quarter_lit = _lit_fraction_in_disc(0.25)
    last_quarter_lit = _lit_fraction_in_disc(0.75)

    assert 0.40 <= first_quarter_lit <= 0.65
    assert 0.40 <= last_quarter_lit <= 0.65
    assert new_lit < first_quarter_lit < full_lit
    assert new_lit < last_quarter_lit < full_lit


def test_crescents_are_thinner_than_gibbous():
    assert _lit_fraction_in_disc(0.1) < _lit_fraction_in_disc(0.25) < _lit_fraction_in_disc(0.4)
    assert _lit_fraction_in_disc(0.9) < _lit_fraction_in_disc(0.75) < _lit_fraction_in_disc(0.6)


def test_waxing_and_waning_sides_are_distinct():
    assert _lit_centroid_x(0.25) > 0.15
    assert _lit_centroid_x(0.75) < -0.15


def test_save_moon_phase_image_writes_png(tmp_path):
    path = save_moon_phase_image(0.5, tmp_path / "out" / "moon.png", size=40)
    assert path.exists()
    with Image.open(path) as saved:
        assert saved.size == (40, 40)


def test_ascii_preview_follows_the_lit_area():
    full_rows = image_to_ascii(draw_moon_phase_image(0.5, 64), cols=32)
    new_rows = image_to_ascii(draw_moon_phase_image(0.0, 64), cols=32)

    full_cells = sum(row.count("#") for row in full_rows)
    new_cells = sum(row.count("#") for row in new_rows)
    assert full_cells > 100
    assert new_cells < full_cells // 4
