"""Accessible palette derivation from three arbitrary brand colours.

The generator that picks the brand colours knows nothing about contrast, so
each input goes through one guarded fix-up:

  primary    ratio vs white < 4.5  -> darken 40% if light, else lighten 30%
  secondary  ratio vs white < 3.0  -> darken 30% if light, else darken 20%
  accent     luminance > 0.8       -> darken 20%

Then three shades are derived from the fixed primary only:

  light = lighten(primary, 85)
  dark  = darken(primary, 60)
  muted = lighten(primary, 70)

Every step runs exactly once. A colour that still misses its threshold after
its adjustment is kept as is; audit_palette() in core.audit reports it.
"""

from dataclasses import dataclass

from store_palette.core.adjust import accessible_text_color, darken, is_light, lighten
from store_palette.core.contrast import contrast_ratio, relative_luminance
from store_palette.core.hexcolor import WHITE, format_hex, parse_hex
from store_palette.core.types import Color

PRIMARY_MIN_CONTRAST = 4.5
SECONDARY_MIN_CONTRAST = 3.0
ACCENT_MAX_LUMINANCE = 0.8

ROLES = ('primary', 'secondary', 'accent', 'light', 'dark', 'muted')


@dataclass(frozen=True)
class Palette:
    """Derived palette. `adjusted` names the inputs a fix-up changed."""

    primary: Color
    secondary: Color
    accent: Color
    light: Color
    dark: Color
    muted: Color
    adjusted: tuple[str, ...] = ()

    def colors(self) -> dict[str, Color]:
        return {role: getattr(self, role) for role in ROLES}

    def text_colors(self) -> dict[str, Color]:
        """Accessible text colour for every palette surface."""
        return {role: accessible_text_color(c) for role, c in self.colors().items()}

    def to_dict(self) -> dict[str, str]:
        return {role: format_hex(c) for role, c in self.colors().items()}


def fix_primary(color: Color) -> Color:
    if contrast_ratio(color, WHITE) >= PRIMARY_MIN_CONTRAST:
        return color
    return darken(color, 40) if is_light(color) else lighten(color, 30)


def fix_secondary(color: Color) -> Color:
    if contrast_ratio(color, WHITE) >= SECONDARY_MIN_CONTRAST:
        return color
    # never lightened: a washed-out secondary is worse than a dim one
    return darken(color, 30) if is_light(color) else darken(color, 20)


def fix_accent(color: Color) -> Color:
    if relative_luminance(color) <= ACCENT_MAX_LUMINANCE:
        return color
    return darken(color, 20)


def derive_shades(primary: Color) -> tuple[Color, Color, Color]:
    """Return (light, dark, muted) for an already fixed primary."""
    return lighten(primary, 85), darken(primary, 60), lighten(primary, 70)


def derive_palette(primary: Color, secondary: Color, accent: Color) -> Palette:
    fixed = {
        'primary': fix_primary(primary),
        'secondary': fix_secondary(secondary),
        'accent': fix_accent(accent),
    }
    inputs = {'primary': primary, 'secondary': secondary, 'accent': accent}
    adjusted = tuple(role for role in fixed if fixed[role] != inputs[role])
    light, dark, muted = derive_shades(fixed['primary'])
    return Palette(
        primary=fixed['primary'],
        secondary=fixed['secondary'],
        accent=fixed['accent'],
        light=light,
        dark=dark,
        muted=muted,
        adjusted=adjusted,
    )


def derive_palette_from_hex(primary: str, secondary: str, accent: str) -> Palette:
    """Parse three hex strings and derive the palette.

    All three are parsed before any derivation, so a ColorParseError on any
    of them leaves nothing half-computed.
    """
    colors = parse_hex(primary), parse_hex(secondary), parse_hex(accent)
    return derive_palette(*colors)
