from typing import List, NamedTuple

from a11y_auditor.model import Category, Issue, Severity
from ..core import ExclusionPredicate, RuleDefinition, audit_spec, make_issue
from ..models import DocumentSnapshot


class Landmark(NamedTuple):
    name: str  # Landmark role name as reported
    tag: str  # Native HTML element
    role: str  # Equivalent explicit ARIA role

    @property
    def selector(self) -> str:
        return f'{self.tag}, [role="{self.role}"]'


REQUIRED_LANDMARKS = (
    Landmark("header", "header", "banner"),
    Landmark("main", "main", "main"),
    Landmark("navigation", "nav", "navigation"),
    Landmark("footer", "footer", "contentinfo"),
    Landmark("complementary", "aside", "complementary"),
)


# --- AUDIT RULES ---

@audit_spec(codes=["MISSING_LANDMARK"])
def check_landmarks(snapshot: DocumentSnapshot, exclude: ExclusionPredicate) -> List[Issue]:
    """
    Rule: Each required landmark must exist at least once outside the audit panel.
    Existence only; multiplicity and nesting are not verified.
    """
    results = []

    for landmark in REQUIRED_LANDMARKS:
        present = any(not exclude(node) for node in snapshot.query(landmark.selector))
        if present:
            continue

        results.append(make_issue(
            Category.STRUCTURE,
            "MISSING_LANDMARK",
            Severity.WARNING,
            message=f"Missing landmark region: {landmark.name}",
            impact="Moderate - Screen readers may not navigate correctly",
            help=f"Add a <{landmark.tag}> element to define the region",
            element=f"<{landmark.tag}>",
        ))

    return results


# --- RULE DEFINITION ---

DEFINITION = RuleDefinition(
    name="landmark_presence",
    category=Category.STRUCTURE,
    audit_rules=[check_landmarks],
    order=20
)
