"""WCAG 2.x relative luminance and contrast ratio."""

from store_palette.core.types import Color

# sRGB transfer function: linear segment at or below this encoded value
SRGB_LINEAR_THRESHOLD = 0.03928

LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)


def _linear_channel(c: int) -> float:
    cs = c / 255
    if cs <= SRGB_LINEAR_THRESHOLD:
        return cs / 12.92
    return ((cs + 0.055) / 1.055) ** 2.4


def relative_luminance(color: Color) -> float:
    """Relative luminance in [0, 1] of a gamma-encoded sRGB colour."""
    r, g, b = color
    wr, wg, wb = LUMA_WEIGHTS
    return wr * _linear_channel(r) + wg * _linear_channel(g) + wb * _linear_channel(b)


def contrast_ratio(a: Color, b: Color) -> float:
    """Contrast ratio in [1, 21]. Symmetric in its arguments."""
    la = relative_luminance(a)
    lb = relative_luminance(b)
    lighter = max(la, lb)
    darker = min(la, lb)
    return (lighter + 0.05) / (darker + 0.05)
