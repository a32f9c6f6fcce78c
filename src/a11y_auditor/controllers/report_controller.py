# src/a11y_auditor/controllers/report_controller.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import pandas as pd

from a11y_auditor.model import AccessibilityReport, Category, Severity

logger = logging.getLogger(__name__)

COLUMNS = ['Source', 'Category', 'Severity', 'Code', 'Element', 'Message', 'Impact', 'Help', 'Snippet']
SEVERITY_ORDER = {Severity.ERROR.value: 1, Severity.WARNING.value: 2, Severity.INFO.value: 3}
SEVERITY_ICONS = {Severity.ERROR.value: "❌", Severity.WARNING.value: "⚠️ ", Severity.INFO.value: "ℹ️ "}


class ReportController:
    """
    Controller responsible for turning AccessibilityReports into summaries,
    flat tables, console output and export files.
    It is the presentation side of the engine: it only reads reports.
    """

    def __init__(self, reports: Mapping[str, AccessibilityReport]):
        self.reports = dict(reports)

    @classmethod
    def for_report(cls, report: AccessibilityReport, source: str = "document") -> "ReportController":
        return cls({source: report})

    # --- DATA VIEWS ---

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """
        Per source and category: whether it ran, total issues and counts per severity.
        A category that did not run reports 'ran': False, never zero issues.
        """
        result = {}
        for source, report in self.reports.items():
            per_category = {}
            for cat in Category:
                issues = report.issues(cat)
                counts = {sev.value: 0 for sev in Severity}
                for issue in issues:
                    counts[issue.severity.value] += 1
                per_category[cat.value] = {
                    "ran": report.has_run(cat),
                    "total": len(issues),
                    **counts,
                }
            result[source] = per_category
        return result

    def to_dataframe(self) -> pd.DataFrame:
        """Flattens all issues into one row per issue, in report order."""
        rows: List[Dict[str, Any]] = []
        for source, report in self.reports.items():
            for cat in Category:
                for issue in report.issues(cat):
                    rows.append({
                        "Source": source,
                        "Category": cat.value,
                        "Severity": issue.severity.value,
                        "Code": issue.code,
                        "Element": issue.element,
                        "Message": issue.message,
                        "Impact": issue.impact,
                        "Help": issue.help,
                        "Snippet": issue.snippet or "",
                    })
        return pd.DataFrame(rows, columns=COLUMNS)

    def summary_dataframe(self) -> pd.DataFrame:
        """Issue counts grouped by severity, category and code, most severe first."""
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame(columns=['Severity', 'Category', 'Code', 'Count'])

        df_summary = df.groupby(['Severity', 'Category', 'Code']).size().reset_index(name='Count')
        df_summary['SevRank'] = df_summary['Severity'].map(SEVERITY_ORDER)
        return df_summary.sort_values(by=['SevRank', 'Count'], ascending=[True, False]).drop(
            columns=['SevRank']
        ).reset_index(drop=True)

    # --- RENDERING ---

    def to_json(self, indent: int = 2) -> str:
        payload = {
            source: {
                cat.value: {
                    "ran": report.has_run(cat),
                    "issues": [issue.model_dump(mode="json") for issue in report.issues(cat)],
                }
                for cat in Category
            }
            for source, report in self.reports.items()
        }
        return json.dumps(payload, indent=indent, ensure_ascii=False)

    def render_text(self, show_snippets: bool = False) -> str:
        lines: List[str] = []
        for source, report in self.reports.items():
            lines.append(f"📄 {source}")
            for cat in Category:
                if not report.has_run(cat):
                    lines.append(f"  [{cat.value}] not run")
                    continue

                issues = report.issues(cat)
                if not issues:
                    lines.append(f"  [{cat.value}] ✅ no issues")
                    continue

                lines.append(f"  [{cat.value}] {len(issues)} issue(s)")
                for issue in issues:
                    icon = SEVERITY_ICONS.get(issue.severity.value, "-")
                    lines.append(f"    {icon} {issue.message} {issue.element}")
                    lines.append(f"       {issue.impact}")
                    lines.append(f"       How to fix: {issue.help}")
                    if show_snippets and issue.snippet:
                        lines.append(f"       HTML: {issue.snippet}")
            lines.append("")
        return "\n".join(lines).rstrip() + "\n"

    # --- EXPORT ---

    def export(self, path: Union[str, Path]) -> Path:
        """
        Writes the issues to disk; the format follows the file extension
        (.csv, .json or .xlsx).
        """
        target = Path(path)
        suffix = target.suffix.lower()
        if suffix not in ('.csv', '.json', '.xlsx'):
            raise ValueError(f"Unsupported export format '{suffix}'. Use .csv, .json or .xlsx")

        target.parent.mkdir(parents=True, exist_ok=True)

        if suffix == '.csv':
            self.to_dataframe().to_csv(target, index=False)
        elif suffix == '.json':
            target.write_text(self.to_json(), encoding="utf-8")
        else:
            self._write_excel(target)

        logger.info("Report exported to %s", target)
        return target

    def _write_excel(self, filename: Path) -> None:
        try:
            with pd.ExcelWriter(filename, engine='openpyxl') as writer:
                self.summary_dataframe().to_excel(writer, sheet_name="Summary", index=False)
                self.to_dataframe().to_excel(writer, sheet_name="Issues", index=False)

                # Auto-adjust column widths for better scannability
                for sheet in writer.sheets.values():
                    for col in sheet.columns:
                        max_len = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
                        sheet.column_dimensions[col[0].column_letter].width = min(max_len + 2, 100)
        except PermissionError as e:
            raise PermissionError(f"Excel file {filename} is currently open. Please close it and try again.") from e
