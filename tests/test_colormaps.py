import pytest

from mandeldive.colormaps import (
    build_palette,
    color_for,
    get_colormap,
    hsl_to_rgb,
    is_time_varying,
    list_colormap_names,
    next_color_scheme,
)
from mandeldive.viewport import ColorScheme


def _fixed_clock(seconds):
    return lambda: seconds


@pytest.mark.parametrize("scheme", list(ColorScheme))
def test_in_set_is_black_for_every_scheme(scheme) -> None:
    assert color_for(120, 120, scheme) == (0, 0, 0)
    assert color_for(1, 1, scheme, clock=_fixed_clock(3.0)) == (0, 0, 0)


def test_hsl_primaries() -> None:
    assert hsl_to_rgb(0.0, 1.0, 0.5) == (255, 0, 0)
    assert hsl_to_rgb(1 / 3, 1.0, 0.5) == (0, 255, 0)
    assert hsl_to_rgb(0.0, 0.0, 0.5) == (128, 128, 128)
    assert hsl_to_rgb(0.3, 0.0, 0.0) == (0, 0, 0)


def test_classic_start_of_ramp() -> None:
    # hue 200, saturation 0.7, lightness 0.2
    assert color_for(0, 120, ColorScheme.CLASSIC) == (15, 63, 87)


def test_hue_schemes_differ_by_base_hue() -> None:
    colors = {color_for(10, 120, s) for s in
              (ColorScheme.CLASSIC, ColorScheme.OCEAN, ColorScheme.PURPLE, ColorScheme.SUNSET)}
    assert len(colors) == 4


def test_fire_ramp() -> None:
    assert color_for(0, 120, ColorScheme.FIRE) == (0, 0, 0)
    assert color_for(30, 120, ColorScheme.FIRE) == (128, 0, 0)
    assert color_for(60, 120, ColorScheme.FIRE) == (255, 0, 0)
    assert color_for(90, 120, ColorScheme.FIRE) == (255, 128, 0)
    r, g, b = color_for(119, 120, ColorScheme.FIRE)
    assert (r, b) == (255, 0) and 0 <= g <= 255


def test_matrix_ramp_saturates() -> None:
    assert color_for(30, 120, ColorScheme.MATRIX) == (0, 128, 0)
    assert color_for(90, 120, ColorScheme.MATRIX) == (0, 255, 0)


def test_psychedelic_follows_clock() -> None:
    first = color_for(0, 100, ColorScheme.PSYCHEDELIC, clock=_fixed_clock(0.0))
    again = color_for(0, 100, ColorScheme.PSYCHEDELIC, clock=_fixed_clock(0.0))
    later = color_for(0, 100, ColorScheme.PSYCHEDELIC, clock=_fixed_clock(5.0))
    assert first == again
    assert first != later
    assert is_time_varying(ColorScheme.PSYCHEDELIC)
    assert not is_time_varying(ColorScheme.FIRE)


def test_palette_rows_match_color_for() -> None:
    palette = build_palette(120, ColorScheme.SUNSET)
    assert palette.shape == (121, 3)
    assert tuple(palette[120]) == (0, 0, 0)
    for i in (0, 1, 59, 119):
        assert tuple(int(c) for c in palette[i]) == color_for(i, 120, ColorScheme.SUNSET)


def test_lookup_by_name() -> None:
    assert get_colormap("fire") is ColorScheme.FIRE
    assert get_colormap("Digital Rain") is ColorScheme.MATRIX
    assert ColorScheme.from_name("PSYCHEDELIC") is ColorScheme.PSYCHEDELIC
    with pytest.raises(ValueError):
        get_colormap("nope")
    assert list_colormap_names()[0] == "Classic Blue"
    assert len(list_colormap_names()) == 7


def test_next_scheme_wraps() -> None:
    assert next_color_scheme(ColorScheme.CLASSIC) is ColorScheme.FIRE
    assert next_color_scheme(ColorScheme.PSYCHEDELIC) is ColorScheme.CLASSIC
