# src/a11y_auditor/controllers/audit_controller.py
import logging
from collections import Counter, defaultdict
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from a11y_auditor.dom.builder import DOMBuilder
from a11y_auditor.dom.orchestrator import CheckOrchestrator
from a11y_auditor.model import AccessibilityReport, AuditSettings, Category

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class AuditController:
    """
    Audits a batch of HTML files one after another and aggregates the results.
    A file that cannot be read is logged and recorded, never fatal to the batch.
    """

    def __init__(self, settings: Optional[AuditSettings] = None, builder: Optional[DOMBuilder] = None):
        self.settings = settings or AuditSettings()
        self.builder = builder or DOMBuilder()

        # Results Buffers
        self.reports: Dict[str, AccessibilityReport] = {}
        self.failed: List[Dict[str, str]] = []
        self.stats = defaultdict(Counter)

    def audit_file(self, path: Union[str, Path], category: Optional[Union[Category, str]] = None) -> AccessibilityReport:
        html = Path(path).read_text(encoding="utf-8", errors="replace")
        return CheckOrchestrator(html, settings=self.settings, builder=self.builder).run(category)

    def run_audit(
            self,
            paths: Iterable[Union[str, Path]],
            category: Optional[Union[Category, str]] = None,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Dict[str, Any]:
        """Runs the audit on every file and returns a summary with the per-file reports."""
        paths = [Path(p) for p in paths]
        total = len(paths)

        # Reset Buffers
        self.reports = {}
        self.failed = []
        self.stats = defaultdict(Counter)

        files_with_issues = 0
        total_issues = 0

        for i, path in enumerate(paths):
            try:
                report = self.audit_file(path, category)
            except OSError as e:
                logger.error(f"Could not read {path}: {e}")
                self.failed.append({"path": str(path), "error": str(e)})
                continue
            finally:
                if progress_callback:
                    progress_callback(i + 1, total)

            self.reports[str(path)] = report
            if report.total_issues:
                files_with_issues += 1
                total_issues += report.total_issues

            for cat in Category:
                for issue in report.issues(cat):
                    self.stats[cat.value][issue.code] += 1

        logger.info(f"Audit finished: {len(self.reports)}/{total} files, {total_issues} issues")

        return {
            "total_files": total,
            "files_with_issues": files_with_issues,
            "total_issues": total_issues,
            "stats": {cat: dict(codes) for cat, codes in self.stats.items()},
            "reports": dict(self.reports),
            "failed": list(self.failed),
        }
