"""
Restormel Finding Model

A ScanResult describes one file. An AggregateReport folds the results of a
whole tree into the totals shown to the user.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class MatchLocation:
    """A dangerous-pattern occurrence, 1-based line number."""

    name: str
    line: int


@dataclass(frozen=True)
class ScanResult:
    secret_count: int = 0
    dangerous_names: tuple[str, ...] = ()
    locations: tuple[MatchLocation, ...] = ()

    @property
    def is_flagged(self) -> bool:
        return self.secret_count > 0 or bool(self.dangerous_names)


@dataclass(frozen=True)
class FlaggedFile:
    relative_path: str
    dangerous_names: tuple[str, ...] = ()
    secret_count: int = 0
    locations: tuple[MatchLocation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.relative_path,
            "secret_count": self.secret_count,
            "dangerous_patterns": list(self.dangerous_names),
            "locations": [{"pattern": loc.name, "line": loc.line} for loc in self.locations],
        }


@dataclass(frozen=True)
class SkippedFile:
    relative_path: str
    reason: str


@dataclass
class AggregateReport:
    """Summary of one audit run over a directory tree."""

    root: Path
    total_secret_count: int = 0
    files_scanned: int = 0
    flagged_files: list[FlaggedFile] = field(default_factory=list)
    skipped_files: list[SkippedFile] = field(default_factory=list)

    @property
    def has_findings(self) -> bool:
        return self.total_secret_count > 0 or bool(self.flagged_files)

    @property
    def dangerous_files(self) -> list[FlaggedFile]:
        return [f for f in self.flagged_files if f.dangerous_names]

    def add(self, relative_path: str, result: ScanResult) -> None:
        """Fold one file's result into the report."""
        self.files_scanned += 1
        self.total_secret_count += result.secret_count
        if result.is_flagged:
            self.flagged_files.append(
                FlaggedFile(
                    relative_path=relative_path,
                    dangerous_names=result.dangerous_names,
                    secret_count=result.secret_count,
                    locations=result.locations,
                )
            )

    def skip(self, relative_path: str, reason: str) -> None:
        self.skipped_files.append(SkippedFile(relative_path, reason))

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to a dictionary for JSON serialization."""
        return {
            "total_secret_count": self.total_secret_count,
            "files_scanned": self.files_scanned,
            "flagged_files": [f.to_dict() for f in self.flagged_files],
            "skipped_files": [
                {"file": s.relative_path, "reason": s.reason} for s in self.skipped_files
            ],
        }
