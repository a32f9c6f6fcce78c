from typing import List

from a11y_auditor.model import Category, Issue
from ..core import ExclusionPredicate, RuleDefinition, audit_spec, make_issue
from ..models import DocumentSnapshot


# --- RULES ---

@audit_spec(codes=["MISSING_ALT"])
def check_alt_text(snapshot: DocumentSnapshot, exclude: ExclusionPredicate) -> List[Issue]:
    res = []
    # alt="" is a valid decorative marker; only a missing attribute is flagged
    for node in snapshot.query("img"):
        if exclude(node) or snapshot.has_attr(node, "alt"):
            continue
        res.append(make_issue(
            Category.ARIA,
            "MISSING_ALT",
            snapshot.settings.image_alt_severity,
            message="Image missing alt text",
            impact="Critical - Screen readers cannot describe the image",
            help="Add alt attribute to provide image description",
            node=node,
            element="<img>",
        ))

    return res


# --- DEFINITION ---
DEFINITION = RuleDefinition(
    name="image_alt",
    category=Category.ARIA,
    audit_rules=[check_alt_text],
    order=30
)
