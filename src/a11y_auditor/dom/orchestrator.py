# src/a11y_auditor/dom/orchestrator.py
import logging
from typing import Dict, List, Optional, Union

from a11y_auditor.model import AccessibilityReport, AuditSettings, Category, CategoryResult, Issue
from .builder import DOMBuilder, DocumentSource
from .core import PanelExclusion
from .models import DocumentSnapshot
from .registry import RuleRegistry

logger = logging.getLogger(__name__)


class CheckOrchestrator:
    """
    Runs the accessibility rules against a document and assembles the report.

    The source is re-read on every call: each run builds a fresh snapshot, so
    mutating a BeautifulSoup tree between runs is picked up, and nothing one
    run caches can leak into the next.
    """

    def __init__(
            self,
            source: DocumentSource,
            settings: Optional[AuditSettings] = None,
            builder: Optional[DOMBuilder] = None
    ):
        self.source = source
        self.settings = settings or AuditSettings()
        self.builder = builder or DOMBuilder()
        RuleRegistry.discover()

    @staticmethod
    def _select_categories(category: Optional[Union[Category, str]]) -> List[Category]:
        if category is None:
            return list(Category)
        value = category.value if isinstance(category, Category) else str(category).strip().lower()
        try:
            return [Category(value)]
        except ValueError:
            valid = ", ".join(c.value for c in Category)
            raise ValueError(f"Unknown category '{category}'. Expected one of: {valid}") from None

    def run(self, category: Optional[Union[Category, str]] = None) -> AccessibilityReport:
        """
        Audits the document.

        Args:
            category: Limit the run to one category ('aria', 'structure', 'contrast').
                      None runs every rule.

        Returns:
            AccessibilityReport: Every bucket is present; buckets that were not
                                 selected are marked as not run.
        """
        selected = self._select_categories(category)
        snapshot = self.builder.build(self.source, self.settings)
        exclude = PanelExclusion.from_snapshot(snapshot, self.settings.panel_selector)

        results: Dict[str, CategoryResult] = {}
        for cat in selected:
            issues = self._run_category(cat, snapshot, exclude)
            results[cat.value] = CategoryResult.ran(issues)

        report = AccessibilityReport(**results)
        logger.info(
            "Audit finished (%s): %d issues",
            ", ".join(cat.value for cat in selected), report.total_issues
        )
        return report

    def _run_category(self, category: Category, snapshot: DocumentSnapshot, exclude: PanelExclusion) -> List[Issue]:
        ignored = set(self.settings.ignored_codes)
        issues: List[Issue] = []

        for rule in RuleRegistry.get_rules(category):
            try:
                found = rule(snapshot, exclude)
            except Exception as e:
                # A broken rule must not cost the rest of the report
                logger.error("Rule %s failed: %s", getattr(rule, "__name__", rule), e, exc_info=True)
                continue

            issues.extend(issue for issue in found if issue.code not in ignored)

        return issues


def check_accessibility(
        source: DocumentSource,
        category: Optional[Union[Category, str]] = None,
        settings: Optional[AuditSettings] = None
) -> AccessibilityReport:
    """One-shot convenience wrapper around CheckOrchestrator.run()."""
    return CheckOrchestrator(source, settings=settings).run(category)
