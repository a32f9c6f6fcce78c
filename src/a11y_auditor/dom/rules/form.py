from typing import List, Set

from a11y_auditor.model import Category, Issue, Severity
from ..core import ExclusionPredicate, RuleDefinition, audit_spec, make_issue
from ..models import DocumentSnapshot

FORM_CONTROL_SELECTOR = "input, select, textarea"


def _labelled_ids(snapshot: DocumentSnapshot) -> Set[str]:
    """Collects every id referenced by a <label for=...> once per run."""
    return {
        label_for
        for label_for in (snapshot.attr(label, "for") for label in snapshot.query("label"))
        if label_for
    }


# --- AUDIT RULES ---

@audit_spec(codes=["MISSING_FORM_LABEL"])
def check_form_label(snapshot: DocumentSnapshot, exclude: ExclusionPredicate) -> List[Issue]:
    """
    Rule: Every form control must be referenced by a <label for> or carry aria-label.
    Controls without an id can only be satisfied by aria-label.
    """
    results = []
    labelled = _labelled_ids(snapshot)

    for node in snapshot.query(FORM_CONTROL_SELECTOR):
        if exclude(node):
            continue

        control_id = snapshot.attr(node, "id")
        has_label = bool(control_id) and control_id in labelled

        if not has_label and not snapshot.has_attr(node, "aria-label"):
            results.append(make_issue(
                Category.ARIA,
                "MISSING_FORM_LABEL",
                Severity.ERROR,
                message="Form control missing label",
                impact="Critical - Screen readers cannot identify the input purpose",
                help='Add a label element with matching "for" attribute or aria-label',
                node=node,
            ))

    return results


# --- RULE DEFINITION ---

DEFINITION = RuleDefinition(
    name="form_label",
    category=Category.ARIA,
    audit_rules=[check_form_label],
    order=20
)
