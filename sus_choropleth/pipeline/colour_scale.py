"""Linear min-max colour scale with a guard for all-equal values."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Sequence, Union

import matplotlib
from matplotlib.colors import Colormap, to_rgb

Colour = tuple[float, float, float, float]
Palette = Union[str, Colormap, Callable[[float], Colour]]

EPSILON = sys.float_info.epsilon
DEGENERATE_FRACTION = 0.5
DEGENERATE_PADDING = 0.5


@dataclass(frozen=True)
class ColourScale:
    colours: list[Colour]
    fractions: list[float]
    display_min: float
    display_max: float


def resolve_palette(palette: Palette) -> Callable[[float], Colour]:
    if isinstance(palette, str):
        return matplotlib.colormaps[palette]
    if not callable(palette):
        raise TypeError(f"Palette must be a colormap name or callable, got {type(palette).__name__}")
    return palette


def scale_fractions(values: Sequence[float]) -> tuple[list[float], float, float]:
    if len(values) == 0:
        raise ValueError("Cannot build a colour scale from no values")
    vmin = float(min(values))
    vmax = float(max(values))
    if vmin == vmax:
        return [DEGENERATE_FRACTION] * len(values), vmin - DEGENERATE_PADDING, vmax + DEGENERATE_PADDING
    span = vmax - vmin + EPSILON
    return [(float(v) - vmin) / span for v in values], vmin, vmax


def map_colors(values: Sequence[float], palette: Palette = "viridis") -> ColourScale:
    sample = resolve_palette(palette)
    fractions, display_min, display_max = scale_fractions(values)
    colours = [tuple(float(c) for c in sample(fraction)) for fraction in fractions]
    return ColourScale(
        colours=colours,
        fractions=fractions,
        display_min=display_min,
        display_max=display_max,
    )


def text_colour(colour) -> str:
    """Black text on light fills, white on dark ones."""
    r, g, b = to_rgb(colour)
    luminance = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return "black" if luminance > 0.6 else "white"
