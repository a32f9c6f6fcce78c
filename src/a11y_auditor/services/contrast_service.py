# src/a11y_auditor/services/contrast_service.py
"""
WCAG Contrast Ratio Evaluation

Formula: (L1 + 0.05) / (L2 + 0.05), L1 being the lighter luminance.

The ratio is rounded to one decimal BEFORE the level is classified, so the
displayed value and the verdict always agree. Boundary consequence: a true
ratio of 4.46 is evaluated as 4.5 (AA, passes) while 4.449 is evaluated as
4.4 (fails).
"""

from a11y_auditor.model import ContrastResult, WCAGLevel
from a11y_auditor.services.color_service import parse_color, relative_luminance

AAA_THRESHOLD = 7.0
AA_THRESHOLD = 4.5


def contrast_ratio(luminance_a: float, luminance_b: float) -> float:
    lighter = max(luminance_a, luminance_b)
    darker = min(luminance_a, luminance_b)
    return (lighter + 0.05) / (darker + 0.05)


def classify_level(rounded_ratio: float) -> WCAGLevel:
    if rounded_ratio >= AAA_THRESHOLD:
        return WCAGLevel.AAA
    if rounded_ratio >= AA_THRESHOLD:
        return WCAGLevel.AA
    return WCAGLevel.FAIL


def evaluate_contrast(background: str, foreground: str) -> ContrastResult:
    """
    Evaluates text contrast against its background.

    Args:
        background (str): Resolved background color string.
        foreground (str): Resolved text color string.

    Returns:
        ContrastResult: Raw ratio, rounded ratio and WCAG level.

    Raises:
        ColorFormatError: If either color uses an unsupported syntax.
    """
    bg_luminance = relative_luminance(parse_color(background))
    fg_luminance = relative_luminance(parse_color(foreground))

    ratio = contrast_ratio(bg_luminance, fg_luminance)
    rounded = round(ratio, 1)

    return ContrastResult(ratio=ratio, rounded_ratio=rounded, level=classify_level(rounded))
