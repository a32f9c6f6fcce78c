# src/a11y_auditor/services/color_service.py
"""
Color parsing and relative luminance (WCAG 2.x / sRGB).

Only hexadecimal (#rgb, #rrggbb) and functional rgb()/rgba() notations are
understood. Everything else raises ColorFormatError, which callers treat as
"cannot evaluate", never as fatal.
"""
import re
from typing import List

from pydantic import ValidationError

from a11y_auditor.model import RGBColor

_HEX_RE = re.compile(r'^#([0-9a-f]{3}|[0-9a-f]{6})$')
_RGB_RE = re.compile(r'^rgba?\((.*)\)$')
_COMPONENT_RE = re.compile(r'-?\d*\.?\d+%?')


class ColorFormatError(ValueError):
    """Raised for color strings in an unsupported or malformed syntax."""


def _parse_component(token: str) -> int:
    if token.endswith('%'):
        return round(float(token[:-1]) * 255 / 100)
    return round(float(token))


def parse_color(value: str) -> RGBColor:
    """
    Parses a CSS color string into an RGBColor.

    Args:
        value (str): e.g. '#fff', '#1a2b3c', 'rgb(0, 0, 0)', 'rgba(10, 20, 30, 0.5)'.

    Returns:
        RGBColor: The integer channel triple.

    Raises:
        ColorFormatError: For named colors, hsl(), currentColor, transparent,
                          or any malformed value.
    """
    if not isinstance(value, str):
        raise ColorFormatError(f"Unsupported color format: {value!r}")

    color = value.strip().lower()

    hex_match = _HEX_RE.match(color)
    if hex_match:
        digits = hex_match.group(1)
        if len(digits) == 3:
            digits = "".join(d * 2 for d in digits)
        return RGBColor(
            r=int(digits[0:2], 16),
            g=int(digits[2:4], 16),
            b=int(digits[4:6], 16),
        )

    rgb_match = _RGB_RE.match(color)
    if rgb_match:
        components: List[str] = _COMPONENT_RE.findall(rgb_match.group(1))
        if len(components) < 3:
            raise ColorFormatError(f"Incomplete rgb() color: {value!r}")
        try:
            # Alpha (4th component) is ignored
            r, g, b = (_parse_component(c) for c in components[:3])
            return RGBColor(r=r, g=g, b=b)
        except (ValueError, ValidationError) as e:
            raise ColorFormatError(f"Invalid rgb() color {value!r}: {e}") from e

    raise ColorFormatError(f"Unsupported color format: {value!r}")


def _linear_channel(channel: int) -> float:
    c = channel / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: RGBColor) -> float:
    """Relative luminance in [0, 1] using the Rec. 709 coefficients WCAG uses."""
    return (
        0.2126 * _linear_channel(color.r)
        + 0.7152 * _linear_channel(color.g)
        + 0.0722 * _linear_channel(color.b)
    )
