"""Contrast audit of a derived palette.

contrast_matrix() computes every pairwise WCAG ratio at once with numpy,
using the same piecewise sRGB transfer as core.contrast.

audit_palette() re-checks the thresholds the policy aims for, plus the
text colour chosen for each surface. The policy adjusts each input once and
never retries, so some inputs still fail here; that is reported, not fixed.
"""

import numpy as np

from store_palette.core.adjust import accessible_text_color
from store_palette.core.contrast import LUMA_WEIGHTS, SRGB_LINEAR_THRESHOLD, contrast_ratio, relative_luminance
from store_palette.core.hexcolor import WHITE
from store_palette.core.policy import (
    ACCENT_MAX_LUMINANCE,
    PRIMARY_MIN_CONTRAST,
    SECONDARY_MIN_CONTRAST,
    Palette,
)
from store_palette.core.types import AuditCheck, Color

# WCAG AA for normal-size body text
TEXT_MIN_CONTRAST = 4.5


def luminances(colors: list[Color]) -> np.ndarray:
    """Vector of relative luminances, one per colour."""
    arr = np.asarray(colors, dtype=np.float64).reshape(-1, 3) / 255.0
    linear = np.where(arr <= SRGB_LINEAR_THRESHOLD, arr / 12.92, ((arr + 0.055) / 1.055) ** 2.4)
    return linear @ np.asarray(LUMA_WEIGHTS)


def contrast_matrix(colors: list[Color]) -> np.ndarray:
    """N x N matrix of contrast ratios; symmetric with ones on the diagonal."""
    lum = luminances(colors)
    lighter = np.maximum.outer(lum, lum)
    darker = np.minimum.outer(lum, lum)
    return (lighter + 0.05) / (darker + 0.05)


def _min_check(name: str, value: float, threshold: float) -> AuditCheck:
    return AuditCheck(name=name, value=round(value, 2), threshold=threshold, passed=value >= threshold)


def audit_palette(palette: Palette) -> list[AuditCheck]:
    checks = [
        _min_check('primary-on-white', contrast_ratio(palette.primary, WHITE), PRIMARY_MIN_CONTRAST),
        _min_check('secondary-on-white', contrast_ratio(palette.secondary, WHITE), SECONDARY_MIN_CONTRAST),
    ]
    accent_lum = relative_luminance(palette.accent)
    checks.append(
        AuditCheck(
            name='accent-brightness',
            value=round(accent_lum, 3),
            threshold=ACCENT_MAX_LUMINANCE,
            passed=accent_lum <= ACCENT_MAX_LUMINANCE,
            kind='max',
        )
    )
    for role, color in palette.colors().items():
        text = accessible_text_color(color)
        checks.append(_min_check(f'text-on-{role}', contrast_ratio(text, color), TEXT_MIN_CONTRAST))
    return checks
