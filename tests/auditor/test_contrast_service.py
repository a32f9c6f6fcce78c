# tests/auditor/test_contrast_service.py
import pytest

from a11y_auditor.model import WCAGLevel
from a11y_auditor.services.color_service import ColorFormatError
from a11y_auditor.services.contrast_service import classify_level, contrast_ratio, evaluate_contrast


def test_black_on_white_is_maximum_contrast():
    """Zwart op wit geeft de maximale ratio van 21 en niveau AAA."""
    result = evaluate_contrast("#ffffff", "#000000")

    assert result.ratio == pytest.approx(21.0)
    assert result.rounded_ratio == 21.0
    assert result.level is WCAGLevel.AAA
    assert not result.is_violation


def test_identical_colors_are_not_applicable():
    """Identieke kleuren geven ratio 1.0 en worden nooit gerapporteerd."""
    result = evaluate_contrast("#336699", "rgb(51, 102, 153)")

    assert result.ratio == pytest.approx(1.0)
    assert result.not_applicable
    assert result.level is WCAGLevel.FAIL
    assert not result.is_violation


def test_ratio_is_symmetric():
    """De volgorde van achtergrond en tekst maakt voor de ratio niet uit."""
    a = evaluate_contrast("#123456", "#fedcba")
    b = evaluate_contrast("#fedcba", "#123456")
    assert a.ratio == pytest.approx(b.ratio)


@pytest.mark.parametrize("rounded, level", [
    (21.0, WCAGLevel.AAA),
    (7.0, WCAGLevel.AAA),
    (6.9, WCAGLevel.AA),
    (4.5, WCAGLevel.AA),
    (4.4, WCAGLevel.FAIL),
    (1.0, WCAGLevel.FAIL),
])
def test_classify_level_thresholds(rounded, level):
    assert classify_level(rounded) is level


def test_rounding_happens_before_threshold():
    """
    #777 op wit heeft een echte ratio van ~4.48; afgerond 4.5 en dus AA.
    Dit is het gedocumenteerde grensgeval van afronden-voor-vergelijken.
    """
    result = evaluate_contrast("#ffffff", "#777777")

    assert result.ratio < 4.5
    assert result.rounded_ratio == 4.5
    assert result.level is WCAGLevel.AA
    assert not result.is_violation


def test_just_below_boundary_fails():
    """#787878 op wit rondt af naar 4.4 en faalt."""
    result = evaluate_contrast("#ffffff", "#787878")

    assert result.rounded_ratio == 4.4
    assert result.level is WCAGLevel.FAIL
    assert result.is_violation


def test_contrast_ratio_formula():
    assert contrast_ratio(1.0, 0.0) == pytest.approx(21.0)
    assert contrast_ratio(0.0, 1.0) == pytest.approx(21.0)
    assert contrast_ratio(0.5, 0.5) == pytest.approx(1.0)


def test_unsupported_color_propagates():
    """Een ColorFormatError van de parser wordt doorgegeven aan de aanroeper."""
    with pytest.raises(ColorFormatError):
        evaluate_contrast("white", "#000")
    with pytest.raises(ColorFormatError):
        evaluate_contrast("#fff", "hsl(0, 0%, 0%)")
