# tests/auditor/test_structure_rules.py
import pytest

from a11y_auditor.dom.builder import DOMBuilder
from a11y_auditor.dom.core import PanelExclusion
from a11y_auditor.dom.rules.heading import check_heading_order, heading_level
from a11y_auditor.dom.rules.landmark import REQUIRED_LANDMARKS, check_landmarks
from a11y_auditor.model import Category, Severity

ALL_LANDMARKS = "<header></header><nav></nav><main></main><aside></aside><footer></footer>"


def run_rule(rule, html, panel="#accessibility-sidebar"):
    snapshot = DOMBuilder().build(html)
    return rule(snapshot, PanelExclusion.from_snapshot(snapshot, panel))


# --- Heading hierarchy ---

def test_heading_level():
    builder = DOMBuilder()
    soup = builder.parse_html("<h3>x</h3>")
    assert heading_level(soup.find("h3")) == 3


def test_skipped_level_is_flagged_once():
    """[h1, h2, h4] geeft precies één melding: verwacht h3, gevonden h4."""
    issues = run_rule(check_heading_order, "<h1>A</h1><h2>B</h2><h4>C</h4>")

    assert len(issues) == 1
    issue = issues[0]
    assert issue.category is Category.STRUCTURE
    assert issue.severity is Severity.WARNING
    assert issue.code == "SKIPPED_HEADING_LEVEL"
    assert issue.element == "<h4>"
    assert "expected h3, found h4" in issue.message
    assert "Expected h3, found h4" in issue.help


def test_sequential_headings_pass():
    assert run_rule(check_heading_order, "<h1>A</h1><h2>B</h2><h3>C</h3>") == []


def test_going_back_up_is_allowed():
    assert run_rule(check_heading_order, "<h1>A</h1><h2>B</h2><h3>C</h3><h2>D</h2><h1>E</h1>") == []


def test_comparison_is_with_previous_heading_only():
    """Elke kop wordt alleen met de direct voorgaande kop vergeleken."""
    html = "<h1>A</h1><h3>B</h3><h2>C</h2><h4>D</h4>"
    issues = run_rule(check_heading_order, html)

    assert [i.element for i in issues] == ["<h3>", "<h4>"]
    assert "expected h2, found h3" in issues[0].message
    assert "expected h3, found h4" in issues[1].message


def test_first_heading_is_never_flagged():
    assert run_rule(check_heading_order, "<h3>Start</h3><h4>Sub</h4>") == []


def test_nested_headings_use_document_order():
    html = "<section><h1>A</h1><div><h2>B</h2></div></section><article><h3>C</h3></article>"
    assert run_rule(check_heading_order, html) == []


def test_panel_headings_are_excluded():
    """Koppen in het paneel tellen niet mee in de volgorde."""
    html = '<h1>A</h1><div id="accessibility-sidebar"><h2>Paneel</h2><h3>Sectie</h3></div><h3>B</h3>'
    issues = run_rule(check_heading_order, html)

    assert len(issues) == 1
    assert "expected h2, found h3" in issues[0].message


# --- Landmarks ---

def test_all_landmarks_present():
    assert run_rule(check_landmarks, ALL_LANDMARKS) == []


def test_missing_nav_gives_one_issue():
    """Zonder <nav> maar met alle andere landmarks volgt precies één melding."""
    html = "<header></header><main></main><aside></aside><footer></footer>"
    issues = run_rule(check_landmarks, html)

    assert len(issues) == 1
    issue = issues[0]
    assert issue.element == "<nav>"
    assert "navigation" in issue.message
    assert issue.severity is Severity.WARNING
    assert issue.code == "MISSING_LANDMARK"
    assert issue.snippet is None


def test_empty_document_misses_every_landmark():
    issues = run_rule(check_landmarks, "<p>Alleen tekst</p>")
    assert [i.element for i in issues] == [f"<{lm.tag}>" for lm in REQUIRED_LANDMARKS]


def test_explicit_roles_count_as_landmarks():
    html = (
        '<div role="banner"></div><div role="navigation"></div><div role="main"></div>'
        '<div role="complementary"></div><div role="contentinfo"></div>'
    )
    assert run_rule(check_landmarks, html) == []


def test_landmark_inside_panel_does_not_count():
    html = (
        "<header></header><main></main><aside></aside><footer></footer>"
        '<div id="accessibility-sidebar"><nav></nav></div>'
    )
    issues = run_rule(check_landmarks, html)
    assert [i.element for i in issues] == ["<nav>"]


@pytest.mark.parametrize("panel", [None, ""])
def test_without_panel_selector_nothing_is_excluded(panel):
    html = "<header></header><main></main><aside></aside><footer></footer><div id='accessibility-sidebar'><nav></nav></div>"
    assert run_rule(check_landmarks, html, panel=panel) == []


def test_landmark_multiplicity_is_not_checked():
    html = ALL_LANDMARKS + "<main></main><nav><nav></nav></nav>"
    assert run_rule(check_landmarks, html) == []
