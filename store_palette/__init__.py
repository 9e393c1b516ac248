"""store-palette: accessible colour palettes for generated storefronts."""

from store_palette.core.adjust import accessible_text_color, darken, is_light, lighten
from store_palette.core.contrast import contrast_ratio, relative_luminance
from store_palette.core.hexcolor import ColorParseError, format_hex, parse_hex
from store_palette.core.policy import Palette, derive_palette, derive_palette_from_hex
from store_palette.core.types import Color

__all__ = [
    'Color',
    'ColorParseError',
    'Palette',
    'accessible_text_color',
    'contrast_ratio',
    'darken',
    'derive_palette',
    'derive_palette_from_hex',
    'format_hex',
    'is_light',
    'lighten',
    'parse_hex',
    'relative_luminance',
]
