"""
Restormel File Scanner

Applies the pattern catalog to a single file and returns a ScanResult.
The scanner holds no per-file state, so one instance can be reused for a
whole tree (or shared across threads).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from restormel.core.errors import FileAccessError
from restormel.core.finding import MatchLocation, ScanResult
from restormel.core.patterns import PatternCatalog


class FileScanner:
    """Counts secret matches and detects dangerous APIs in one file."""

    name: str = "audit"

    def __init__(self, catalog: Optional[PatternCatalog] = None) -> None:
        self.catalog = catalog or PatternCatalog.default()

    def scan(self, file_path: Path) -> ScanResult:
        """
        Scan one file.

        Raises:
            FileAccessError: If the file cannot be read.
        """
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise FileAccessError(file_path, exc.strerror or str(exc)) from exc
        return self.scan_text(content)

    def scan_text(self, content: str) -> ScanResult:
        secret_count = sum(p.count(content) for p in self.catalog.secret)

        names: list[str] = []
        locations: list[MatchLocation] = []
        for pattern in self.catalog.dangerous:
            for match in pattern.regex.finditer(content):
                if pattern.name not in names:
                    names.append(pattern.name)
                locations.append(MatchLocation(pattern.name, _line_of(content, match.start())))

        return ScanResult(
            secret_count=secret_count,
            dangerous_names=tuple(names),
            locations=tuple(locations),
        )


def _line_of(content: str, offset: int) -> int:
    return content.count("\n", 0, offset) + 1
