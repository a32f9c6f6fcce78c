from typing import List

from bs4 import Tag

from a11y_auditor.model import Category, Issue, Severity
from ..core import ExclusionPredicate, RuleDefinition, audit_spec, make_issue
from ..models import DocumentSnapshot

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"


def heading_level(node: Tag) -> int:
    """
    Determines the hierarchy level from the tag name (e.g., h1 -> 1).
    """
    try:
        return int(node.name[1])
    except (ValueError, IndexError, TypeError):
        return 0


# --- AUDIT RULES ---

@audit_spec(codes=["SKIPPED_HEADING_LEVEL"])
def check_heading_order(snapshot: DocumentSnapshot, exclude: ExclusionPredicate) -> List[Issue]:
    """
    Rule: Heading levels must not skip. Each heading is compared with the
    immediately preceding heading in document order (not its nearest
    ancestor section), so going down more than one level is flagged while
    jumping back up is always allowed.
    """
    results = []
    headings = [node for node in snapshot.query(HEADING_SELECTOR) if not exclude(node)]

    for previous, current in zip(headings, headings[1:]):
        prev_level = heading_level(previous)
        current_level = heading_level(current)

        if current_level > prev_level + 1:
            results.append(make_issue(
                Category.STRUCTURE,
                "SKIPPED_HEADING_LEVEL",
                Severity.WARNING,
                message=f"Skipped heading level (expected h{prev_level + 1}, found h{current_level})",
                impact="Moderate - Document structure may be confusing",
                help=f"Don't skip heading levels. Expected h{prev_level + 1}, found h{current_level}",
                node=current,
            ))

    return results


# --- RULE DEFINITION ---

DEFINITION = RuleDefinition(
    name="heading_hierarchy",
    category=Category.STRUCTURE,
    audit_rules=[check_heading_order],
    order=10
)
