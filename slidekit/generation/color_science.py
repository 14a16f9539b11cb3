"""
Color science for slide composition and validation.
Provides WCAG 2.1 luminance/contrast math, contrast-satisfying color
adjustment and palette derivation.

Color strings arrive from AI-generated theme choices and free-form user input,
so nothing here raises: malformed hex collapses to black with a warning.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Any

from slidekit.config.engine_config import (
    WCAG_AA_RATIO,
    WCAG_AAA_RATIO,
    DARK_COLOR_LUMINANCE,
    CONTRAST_LIGHTEN_BELOW,
    CONTRAST_STEP,
    CONTRAST_MAX_STEPS,
    PALETTE_LIGHTEN_STEPS,
    PALETTE_DARKEN_STEPS,
    STANDARD_TEXT_COLORS,
)
from slidekit.setup_logging_optimized import get_logger

logger = get_logger(__name__)

_HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$')


class RGB(NamedTuple):
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class ContrastAdjustment:
    color: str
    ratio: float
    adjusted: bool


@dataclass(frozen=True)
class AccessibilityCheck:
    wcag_aa: bool
    wcag_aaa: bool
    ratio: float
    level: str  # 'fail' | 'aa' | 'aaa'


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert hex color (with or without '#') to RGB. Malformed input yields black."""
    match = _HEX_PATTERN.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if not match:
        logger.warning(f"Invalid hex color {hex_color!r}, using black")
        return RGB(0, 0, 0)
    return RGB(*(int(part, 16) for part in match.groups()))


def _clamp_channel(value: float) -> int:
    return int(round(max(0.0, min(255.0, value))))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Encode RGB as '#RRGGBB', clamping each channel to [0, 255]."""
    return '#' + ''.join(f"{_clamp_channel(c):02X}" for c in (r, g, b))


def safe_color_format(color: Optional[str]) -> str:
    """Writer-facing form: 6 uppercase hex digits without '#'."""
    if not color:
        return '000000'
    if not isinstance(color, str) or not _HEX_PATTERN.match(color.strip()):
        logger.warning(f"Invalid color format: {color!r}, using default")
        return '000000'
    return color.strip().lstrip('#').upper()


def _linearize(channel: int) -> float:
    c = channel / 255.0
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def get_luminance(hex_color: str) -> float:
    """Calculate relative luminance of a color according to WCAG 2.1."""
    r, g, b = hex_to_rgb(hex_color)
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def get_contrast_ratio(color1: str, color2: str) -> float:
    """Calculate WCAG contrast ratio between two colors, in [1, 21]."""
    lum1 = get_luminance(color1)
    lum2 = get_luminance(color2)
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def is_dark_color(hex_color: str) -> bool:
    """Check if a color is dark based on luminance."""
    return get_luminance(hex_color) < DARK_COLOR_LUMINANCE


def ensure_contrast(
    foreground: str,
    background: str,
    min_ratio: float = WCAG_AA_RATIO
) -> ContrastAdjustment:
    """
    Move the foreground toward white (dark background) or black (light
    background) in 5% steps until it meets `min_ratio`.

    Returns the first passing color, or the last one tried once the step
    budget is spent. The color is always normalized to #RRGGBB.
    """
    current_ratio = get_contrast_ratio(foreground, background)
    if current_ratio >= min_ratio:
        return ContrastAdjustment(color=rgb_to_hex(*hex_to_rgb(foreground)), ratio=current_ratio, adjusted=False)

    lighten_toward_white = get_luminance(background) < CONTRAST_LIGHTEN_BELOW
    r, g, b = hex_to_rgb(foreground)

    adjusted_color = foreground
    adjusted_ratio = current_ratio
    for step in range(1, CONTRAST_MAX_STEPS + 1):
        amount = min(1.0, step * CONTRAST_STEP)
        if lighten_toward_white:
            channels = [c + (255 - c) * amount for c in (r, g, b)]
        else:
            channels = [c * (1 - amount) for c in (r, g, b)]
        adjusted_color = rgb_to_hex(*channels)
        adjusted_ratio = get_contrast_ratio(adjusted_color, background)
        if adjusted_ratio >= min_ratio:
            break

    if adjusted_ratio < min_ratio:
        logger.warning(
            f"Contrast {min_ratio} unreachable for {foreground} on {background}; "
            f"best effort {adjusted_color} at {adjusted_ratio:.2f}"
        )
    else:
        logger.debug(f"Adjusted {foreground} -> {adjusted_color} ({adjusted_ratio:.2f}:1) on {background}")
    return ContrastAdjustment(color=adjusted_color, ratio=adjusted_ratio, adjusted=True)


def lighten(hex_color: str, percent: float) -> str:
    """Lighten a color by scaling its channels up by `percent`."""
    factor = 1 + (percent / 100)
    r, g, b = hex_to_rgb(hex_color)
    return rgb_to_hex(r * factor, g * factor, b * factor)


def darken(hex_color: str, percent: float) -> str:
    """Darken a color by scaling its channels down by `percent`."""
    factor = 1 - (percent / 100)
    r, g, b = hex_to_rgb(hex_color)
    return rgb_to_hex(r * factor, g * factor, b * factor)


def shade(hex_color: str, amount: float) -> str:
    """Positive amounts lighten, negative amounts darken."""
    return lighten(hex_color, amount) if amount > 0 else darken(hex_color, abs(amount))


def tint(hex_color: str, amount: float) -> str:
    """Blend a color toward white by a factor (0-1)."""
    amount = max(0.0, min(1.0, amount))
    r, g, b = hex_to_rgb(hex_color)
    return rgb_to_hex(r + (255 - r) * amount, g + (255 - g) * amount, b + (255 - b) * amount)


def generate_palette(base_color: str) -> Dict[int, str]:
    """Symmetric 50..900 ladder around `base_color` at 500."""
    palette = {key: lighten(base_color, pct) for key, pct in PALETTE_LIGHTEN_STEPS.items()}
    palette[500] = base_color
    palette.update({key: darken(base_color, pct) for key, pct in PALETTE_DARKEN_STEPS.items()})
    return dict(sorted(palette.items()))


def validate_accessibility(foreground: str, background: str) -> AccessibilityCheck:
    """Check a foreground/background pair against WCAG AA and AAA."""
    ratio = get_contrast_ratio(foreground, background)
    wcag_aa = ratio >= WCAG_AA_RATIO
    wcag_aaa = ratio >= WCAG_AAA_RATIO
    return AccessibilityCheck(
        wcag_aa=wcag_aa,
        wcag_aaa=wcag_aaa,
        ratio=ratio,
        level='aaa' if wcag_aaa else ('aa' if wcag_aa else 'fail'),
    )


def get_readable_text_color(
    bg_color: str,
    palette: Optional[List[str]] = None,
    min_contrast: float = WCAG_AA_RATIO
) -> Dict[str, Any]:
    """
    Get the best text color for a given background.

    Args:
        bg_color: Background color in hex format
        palette: Optional list of palette colors to consider
        min_contrast: Minimum contrast ratio (4.5 for AA, 7.0 for AAA)

    Returns:
        Dict with the recommended color, its ratio and the top alternatives
    """
    candidates = []
    for name, color in STANDARD_TEXT_COLORS.items():
        candidates.append({'color': color, 'name': name, 'contrast': get_contrast_ratio(bg_color, color)})

    for color in palette or []:
        if color.upper() == bg_color.upper():
            continue
        contrast = get_contrast_ratio(bg_color, color)
        if contrast >= min_contrast:
            candidates.append({'color': color, 'name': 'palette', 'contrast': contrast})

    # Stable sort keeps standard colors ahead of palette ties
    candidates.sort(key=lambda c: c['contrast'], reverse=True)
    best = candidates[0]
    if best['contrast'] < min_contrast:
        logger.warning(
            f"No color meets min contrast {min_contrast} for bg {bg_color}. "
            f"Using {best['color']} with ratio {best['contrast']:.2f}"
        )

    return {
        'background': bg_color,
        'is_dark_bg': is_dark_color(bg_color),
        'recommended': best['color'],
        'contrast_ratio': best['contrast'],
        'passes_wcag_aa': best['contrast'] >= WCAG_AA_RATIO,
        'passes_wcag_aaa': best['contrast'] >= WCAG_AAA_RATIO,
        'alternatives': candidates[:3],
    }
