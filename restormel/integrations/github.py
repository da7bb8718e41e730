"""
Restormel GitHub Actions Integration

Provides helpers for running Restormel in GitHub Actions:
- GitHub Actions annotations (warnings)
- Step summary output
- Environment detection
"""

from __future__ import annotations

import logging
import os

import click

from restormel.core.finding import AggregateReport

logger = logging.getLogger(__name__)


def is_github_actions() -> bool:
    """Check if currently running inside GitHub Actions."""
    return os.environ.get("GITHUB_ACTIONS") == "true"


def build_annotations(report: AggregateReport) -> list[str]:
    """
    Build one workflow annotation per dangerous-pattern occurrence, plus one
    per file that has secret-like matches.
    """
    annotations: list[str] = []
    for flagged in report.flagged_files:
        for loc in flagged.locations:
            annotations.append(
                f"::warning file={flagged.relative_path},line={loc.line},"
                f"title=Restormel - {loc.name}::Dangerous pattern {loc.name} detected."
            )
        if flagged.secret_count:
            annotations.append(
                f"::warning file={flagged.relative_path},title=Restormel - secrets::"
                f"{flagged.secret_count} potential secret(s) detected."
            )
    return annotations


def emit_annotations(report: AggregateReport, force: bool = False) -> None:
    """
    Emit GitHub Actions workflow annotations.
    Without ``force`` this is a no-op outside GitHub Actions.
    """
    if not (force or is_github_actions()):
        return

    # GitHub annotation format:
    # ::warning file={name},line={line}::{message}
    for annotation in build_annotations(report):
        click.echo(annotation)


def write_step_summary(report: AggregateReport, should_fail: bool = False) -> None:
    """
    Write a summary to the GitHub Actions step summary.
    This appears on the workflow run page.
    """
    summary_file = os.environ.get("GITHUB_STEP_SUMMARY")
    if not summary_file:
        return

    lines = [
        "## Restormel Security Audit\n",
        f"**Target:** `{report.root}`\n",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Files scanned | {report.files_scanned} |",
        f"| Potential secrets | {report.total_secret_count} |",
        f"| Files with dangerous patterns | {len(report.dangerous_files)} |",
        f"| Skipped files | {len(report.skipped_files)} |",
        "",
    ]

    if should_fail:
        lines.append("### Status: FAILED")
    elif report.has_findings:
        lines.append("### Status: WARNINGS")
    else:
        lines.append("### Status: PASSED")

    if report.flagged_files:
        lines.append("")
        lines.append("<details><summary>Flagged files</summary>\n")
        for flagged in report.flagged_files:
            names = ", ".join(flagged.dangerous_names) or "-"
            lines.append(
                f"- `{flagged.relative_path}`: {names} "
                f"({flagged.secret_count} secret-like match(es))"
            )
        lines.append("\n</details>")

    try:
        with open(summary_file, "a", encoding="utf-8") as fh:
            fh.write("\n".join(lines) + "\n")
    except OSError as exc:
        logger.warning("Could not write step summary %s: %s", summary_file, exc)
