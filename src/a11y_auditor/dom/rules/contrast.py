import logging
from typing import List

from a11y_auditor.model import Category, Issue, Severity
from a11y_auditor.services.color_service import ColorFormatError
from a11y_auditor.services.contrast_service import AA_THRESHOLD, evaluate_contrast
from ..core import ExclusionPredicate, RuleDefinition, audit_spec, make_issue
from ..models import DocumentSnapshot

logger = logging.getLogger(__name__)

TEXT_SELECTOR = "p, h1, h2, h3, h4, h5, h6, span, a, button, li, td, th, label, input, svg"


# --- AUDIT RULES ---

@audit_spec(codes=["LOW_CONTRAST"])
def check_text_contrast(snapshot: DocumentSnapshot, exclude: ExclusionPredicate) -> List[Issue]:
    """
    Rule: Text-bearing elements must reach WCAG AA contrast (4.5:1) against
    their resolved background. Identical colors (ratio 1.0) are not applicable.
    Colors in an unsupported syntax make the node unevaluable; it is skipped.
    """
    results = []

    for node in snapshot.query(TEXT_SELECTOR):
        if exclude(node):
            continue

        style = snapshot.style(node)
        try:
            result = evaluate_contrast(style.background, style.color)
        except ColorFormatError as e:
            logger.debug("Skipping contrast check for <%s>: %s", node.name, e)
            continue

        logger.debug(
            "Contrast <%s> bg=%s fg=%s ratio=%s (%s)",
            node.name, style.background, style.color, result.rounded_ratio, result.level.value
        )

        if result.is_violation:
            results.append(make_issue(
                Category.CONTRAST,
                "LOW_CONTRAST",
                Severity.ERROR,
                message=f"Low contrast text - ({result.rounded_ratio}) {result.level.value}",
                impact="Critical - Text may be difficult to read",
                help=f"Ensure a contrast ratio of at least {AA_THRESHOLD}:1",
                node=node,
            ))

    return results


# --- RULE DEFINITION ---

DEFINITION = RuleDefinition(
    name="text_contrast",
    category=Category.CONTRAST,
    audit_rules=[check_text_contrast],
    order=10
)
