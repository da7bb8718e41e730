"""
Restormel Console Reporter

Generates the human-readable audit summary printed after a scan.
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from restormel.core.finding import AggregateReport, FlaggedFile


def _safe_echo(text: str = "", **kwargs) -> None:
    """Echo text, handling Unicode issues on Windows consoles."""
    try:
        click.echo(text, **kwargs)
    except UnicodeEncodeError:
        safe = text.encode(sys.stdout.encoding or "utf-8", errors="replace").decode(
            sys.stdout.encoding or "utf-8", errors="replace"
        )
        click.echo(safe, **kwargs)


TITLE = "Restormel Security Audit"
NO_FINDINGS = "[OK] No obvious secrets or dangerous patterns detected."


class ConsoleReporter:
    """Renders an AggregateReport as styled text."""

    def __init__(self, color: Optional[bool] = None) -> None:
        # None styles the text and lets click strip it when stdout is not a terminal.
        self.color = color

    def report(self, report: AggregateReport) -> None:
        """Print the rendered report to stdout."""
        _safe_echo(self.render(report), color=self.color)

    def render(self, report: AggregateReport) -> str:
        lines: list[str] = ["", self._style(TITLE, fg="bright_blue", bold=True), ""]

        if report.total_secret_count > 0:
            lines.append(
                self._style(
                    f"[!] Potential secret(s) found: {report.total_secret_count}",
                    fg="yellow",
                )
            )

        if report.flagged_files:
            lines.append(self._style("[!] Flagged file(s):", fg="yellow"))
            for flagged in report.flagged_files:
                lines.append(self._flagged_line(flagged))

        if not report.has_findings:
            lines.append(self._style(NO_FINDINGS, fg="green"))

        if report.skipped_files:
            lines.append(
                self._style(
                    f"[!] Skipped {len(report.skipped_files)} unreadable file(s):",
                    fg="red",
                )
            )
            for skipped in report.skipped_files:
                lines.append(self._style(f"  {skipped.relative_path}: {skipped.reason}", fg="bright_black"))

        lines.append("")
        return "\n".join(lines)

    def _flagged_line(self, flagged: FlaggedFile) -> str:
        details = ", ".join(flagged.dangerous_names)
        if flagged.secret_count:
            count = f"({flagged.secret_count} secret-like match(es))"
            details = f"{details} {count}" if details else count
        return self._style(f"  {flagged.relative_path}: ", fg="bright_black") + details

    def _style(self, text: str, **styles) -> str:
        if self.color is False:
            return text
        return click.style(text, **styles)
