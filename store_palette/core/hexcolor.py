"""Parse and format the `#rrggbb` colour notation.

Only the 6-digit form is accepted, with or without the leading '#'.
Output is always lowercase with a leading '#', so format_hex(parse_hex(s))
is the canonical form of s.
"""

import re

from store_palette.core.types import Color

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$')

BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


class ColorParseError(ValueError):
    """Raised when a value is not a 6-digit hex colour."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f'not a 6-digit hex colour: {value!r}')


def parse_hex(text: str) -> Color:
    """Parse '#rrggbb' or 'rrggbb' (any case) into a Color."""
    if not isinstance(text, str):
        raise ColorParseError(text)
    m = _HEX_RE.match(text)
    if m is None:
        raise ColorParseError(text)
    return Color(int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))


def format_hex(color: Color) -> str:
    """Format a Color as lowercase '#rrggbb'."""
    for channel in color:
        if not 0 <= channel <= 255:
            raise ValueError(f'channel out of range 0-255: {channel}')
    r, g, b = color
    return f'#{r:02x}{g:02x}{b:02x}'


def canonical_hex(text: str) -> str:
    """Return the canonical '#rrggbb' spelling of a hex colour string."""
    return format_hex(parse_hex(text))
