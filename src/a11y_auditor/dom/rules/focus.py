from typing import List, Optional

from a11y_auditor.model import Category, Issue, Severity
from ..core import ExclusionPredicate, RuleDefinition, audit_spec, make_issue
from ..models import DocumentSnapshot

FOCUSABLE_SELECTOR = "a, button, input, select, textarea"


def parse_tabindex(value: Optional[str]) -> Optional[int]:
    """Integer value of a tabindex attribute; None when absent or not an integer."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


# --- AUDIT RULES ---

@audit_spec(codes=["NEGATIVE_TABINDEX"])
def check_keyboard_focus(snapshot: DocumentSnapshot, exclude: ExclusionPredicate) -> List[Issue]:
    """
    Rule: Nominally focusable elements must not be removed from the tab order
    with a negative tabindex.
    """
    results = []

    for node in snapshot.query(FOCUSABLE_SELECTOR):
        if exclude(node):
            continue

        tabindex = parse_tabindex(snapshot.attr(node, "tabindex"))
        if tabindex is not None and tabindex < 0:
            results.append(make_issue(
                Category.ARIA,
                "NEGATIVE_TABINDEX",
                Severity.WARNING,
                message="Element not focusable via keyboard",
                impact="Critical - Element cannot be accessed via keyboard",
                help="Ensure element is focusable via keyboard",
                node=node,
            ))

    return results


# --- RULE DEFINITION ---

DEFINITION = RuleDefinition(
    name="focusability",
    category=Category.ARIA,
    audit_rules=[check_keyboard_focus],
    order=40
)
