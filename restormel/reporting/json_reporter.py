"""
Restormel JSON Reporter

Generates machine-readable JSON output format:
{
    "version": "1.0",
    "tool": {"name": "Restormel", "version": "..."},
    "target": "/path/to/project",
    "summary": {
        "total_secret_count": N,
        "files_scanned": N,
        "flagged_files": N,
        "dangerous_files": N,
        "skipped_files": N
    },
    "flagged_files": [...],
    "skipped_files": [...]
}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from restormel import __version__
from restormel.core.finding import AggregateReport


class JSONReporter:
    """Generates JSON-formatted audit reports."""

    def render(self, report: AggregateReport) -> str:
        data = report.to_dict()
        report_data = {
            "version": "1.0",
            "tool": {
                "name": "Restormel",
                "version": __version__,
            },
            "target": str(report.root),
            "summary": {
                "total_secret_count": report.total_secret_count,
                "files_scanned": report.files_scanned,
                "flagged_files": len(report.flagged_files),
                "dangerous_files": len(report.dangerous_files),
                "skipped_files": len(report.skipped_files),
            },
            "flagged_files": data["flagged_files"],
            "skipped_files": data["skipped_files"],
        }
        return json.dumps(report_data, indent=2)

    def report(self, report: AggregateReport, output_file: Optional[str] = None) -> str:
        """
        Generate JSON report.

        Args:
            report: The aggregated audit report.
            output_file: Optional file path to write the report to.

        Returns:
            The JSON string.
        """
        json_str = self.render(report)

        if output_file:
            Path(output_file).write_text(json_str, encoding="utf-8")

        return json_str
