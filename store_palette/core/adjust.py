"""Lighten/darken transforms and black-or-white text colour selection.

darken scales every channel toward 0, lighten moves every channel toward 255
by a share of its remaining headroom. Percentages outside 0-100 are clamped
first. Channels round half up (x.5 goes to x+1) and are clamped to 0-255.
"""

import math

from store_palette.core.contrast import relative_luminance
from store_palette.core.hexcolor import BLACK, WHITE
from store_palette.core.types import Color

LIGHT_LUMINANCE = 0.5


def _clamp_percent(percent: float) -> float:
    return min(100.0, max(0.0, float(percent)))


def _to_channel(value: float) -> int:
    return min(255, max(0, math.floor(value + 0.5)))


def is_light(color: Color) -> bool:
    """True if the colour's relative luminance is above 0.5."""
    return relative_luminance(color) > LIGHT_LUMINANCE


def darken(color: Color, percent: float) -> Color:
    factor = 1 - _clamp_percent(percent) / 100
    return Color(*(_to_channel(c * factor) for c in color))


def lighten(color: Color, percent: float) -> Color:
    factor = _clamp_percent(percent) / 100
    return Color(*(_to_channel(c + (255 - c) * factor) for c in color))


def accessible_text_color(background: Color) -> Color:
    """Black text on light backgrounds, white text on dark ones."""
    return BLACK if is_light(background) else WHITE
