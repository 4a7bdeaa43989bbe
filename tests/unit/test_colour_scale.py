import pytest
from matplotlib import colormaps

from sus_choropleth.pipeline.colour_scale import map_colors, scale_fractions, text_colour


def test_degenerate_values_use_palette_midpoint():
    scale = map_colors([7.0, 7.0, 7.0], "viridis")
    midpoint = tuple(float(c) for c in colormaps["viridis"](0.5))
    assert scale.colours == [midpoint] * 3
    assert scale.display_min < 7.0 < scale.display_max
    assert (scale.display_min, scale.display_max) == (6.5, 7.5)


def test_normal_range_is_exact_and_fractions_ordered():
    fractions, vmin, vmax = scale_fractions([10.0, 0.0, 5.0])
    assert (vmin, vmax) == (0.0, 10.0)
    assert fractions[1] == 0.0
    assert fractions[1] < fractions[2] < fractions[0]
    assert fractions[0] == pytest.approx(1.0)


def test_callable_palette_receives_fractions():
    seen = []

    def palette(fraction):
        seen.append(fraction)
        return (fraction, 0.0, 0.0, 1.0)

    scale = map_colors([1.0, 3.0], palette)
    assert seen == scale.fractions
    assert scale.colours[0] == (0.0, 0.0, 0.0, 1.0)


def test_empty_values_rejected():
    with pytest.raises(ValueError):
        scale_fractions([])


def test_text_colour_contrast():
    assert text_colour((1.0, 1.0, 1.0)) == "black"
    assert text_colour((0.0, 0.0, 0.3)) == "white"
    assert text_colour("#fde725") == "black"
