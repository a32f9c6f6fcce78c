# src/a11y_auditor/dom/core.py
from typing import Callable, List, Optional, Set

from bs4 import Tag

from a11y_auditor.model import Category, Issue, Severity
from .models import DocumentSnapshot

# A node filter injected into every rule; True means "skip this node".
ExclusionPredicate = Callable[[Tag], bool]

# Rule signature: (snapshot, exclude) -> issues in document order
AuditRule = Callable[[DocumentSnapshot, ExclusionPredicate], List[Issue]]


def audit_spec(codes: List[str]):
    """
    Decorator to declare which issue codes a specific audit rule function returns.
    Facilitates auto-discovery by the RuleRegistry.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


def describe_element(node: Tag) -> str:
    """Tag-level identifier used in reports, e.g. '<button>'."""
    return f"<{node.name.lower()}>"


def make_issue(
        category: Category,
        code: str,
        severity: Severity,
        message: str,
        impact: str,
        help: str,
        node: Optional[Tag] = None,
        element: Optional[str] = None,
) -> Issue:
    """Builds an Issue, deriving the descriptor and snippet from the node if given."""
    return Issue(
        category=category,
        code=code,
        severity=severity,
        message=message,
        element=element or (describe_element(node) if node is not None else ""),
        snippet=str(node) if node is not None else None,
        impact=impact,
        help=help,
    )


class PanelExclusion:
    """
    Ancestry-containment predicate: excludes the audit panel and everything
    inside it, so the tool never flags its own interface.
    """

    def __init__(self, panels: List[Tag]):
        self._panel_ids = {id(panel) for panel in panels}

    @classmethod
    def from_snapshot(cls, snapshot: DocumentSnapshot, selector: Optional[str]) -> "PanelExclusion":
        if not selector:
            return cls([])
        return cls(list(snapshot.query(selector)))

    def __call__(self, node: Tag) -> bool:
        if not self._panel_ids:
            return False
        if id(node) in self._panel_ids:
            return True
        return any(id(parent) in self._panel_ids for parent in node.parents)


class RuleDefinition:
    """
    Configuration object binding a group of audit rules to their report category.
    """

    def __init__(
            self,
            name: str,
            category: Category,
            audit_rules: Optional[List[AuditRule]] = None,
            order: int = 100,
            possible_codes: Optional[List[str]] = None
    ):
        self.name = name
        self.category = category
        self.audit_rules = audit_rules or []
        self.order = order

        # --- Auto-Discovery of Issue Codes ---
        final_codes: Set[str] = set(possible_codes or [])

        for rule in self.audit_rules:
            if hasattr(rule, 'defined_codes'):
                final_codes.update(rule.defined_codes)

        self.codes = sorted(final_codes)
