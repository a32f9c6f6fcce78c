from typing import List

from a11y_auditor.model import Category, Issue, Severity
from ..core import ExclusionPredicate, RuleDefinition, audit_spec, make_issue
from ..models import DocumentSnapshot

INTERACTIVE_SELECTOR = "button, a, input, [role]"
NAMING_ATTRIBUTES = ("aria-label", "aria-labelledby")
# WAI-ARIA widget roles; landmark, document-structure and presentational roles are not interactive
INTERACTIVE_ROLES = frozenset({
    "button", "checkbox", "combobox", "gridcell", "link", "listbox", "menu", "menubar",
    "menuitem", "menuitemcheckbox", "menuitemradio", "option", "radio", "radiogroup",
    "scrollbar", "searchbox", "slider", "spinbutton", "switch", "tab", "tablist",
    "textbox", "tree", "treeitem",
})


def has_interactive_role(snapshot: DocumentSnapshot, node) -> bool:
    """True when any token of the role attribute is a widget role."""
    roles = (snapshot.attr(node, "role") or "").lower().split()
    return any(role in INTERACTIVE_ROLES for role in roles)


# --- AUDIT RULES ---

@audit_spec(codes=["MISSING_ACCESSIBLE_NAME"])
def check_accessible_name(snapshot: DocumentSnapshot, exclude: ExclusionPredicate) -> List[Issue]:
    """
    Rule: Buttons, links and anything carrying an explicit interactive role need an accessible name.
    Either an ARIA naming attribute or non-whitespace text content satisfies it.
    """
    results = []

    for node in snapshot.query(INTERACTIVE_SELECTOR):
        if exclude(node):
            continue
        # Embedded frames are named by their own document
        if node.name == "iframe":
            continue
        if node.name not in ("button", "a") and not has_interactive_role(snapshot, node):
            continue
        if any(snapshot.has_attr(node, attr) for attr in NAMING_ATTRIBUTES):
            continue
        if snapshot.text(node).strip():
            continue

        results.append(make_issue(
            Category.ARIA,
            "MISSING_ACCESSIBLE_NAME",
            Severity.ERROR,
            message="Interactive element missing accessible name",
            impact="Critical - Screen readers cannot identify the purpose",
            help="Add aria-label, aria-labelledby, or visible text content",
            node=node,
        ))

    return results


# --- RULE DEFINITION ---

DEFINITION = RuleDefinition(
    name="accessible_name",
    category=Category.ARIA,
    audit_rules=[check_accessible_name],
    order=10
)
