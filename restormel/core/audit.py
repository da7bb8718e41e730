"""
Restormel Report Aggregator

Runs the walker, scans every candidate file in walk order, and folds the
per-file results into one AggregateReport. Unreadable files are recorded
as skipped and the run continues.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from restormel.core.errors import FileAccessError
from restormel.core.finding import AggregateReport
from restormel.core.scanner import FileScanner
from restormel.core.walker import WalkConfig, walk

logger = logging.getLogger(__name__)


def relative_display_path(file_path: Path, root_dir: Path) -> str:
    """Path of a file relative to the root, with forward slashes."""
    return Path(os.path.relpath(file_path, root_dir)).as_posix()


def aggregate(
    file_paths: Iterable[Path],
    root_dir: Path,
    scanner: Optional[FileScanner] = None,
) -> AggregateReport:
    """
    Scan each file and build the report.

    Args:
        file_paths: Files to scan, in the order they should be reported.
        root_dir: Directory that relative display paths are computed from.
        scanner: Scanner to use. Defaults to one with the default catalog.
    """
    scanner = scanner or FileScanner()
    root_dir = root_dir.resolve()
    report = AggregateReport(root=root_dir)

    for file_path in file_paths:
        rel = relative_display_path(file_path, root_dir)
        try:
            result = scanner.scan(file_path)
        except FileAccessError as exc:
            logger.warning("Skipping %s: %s", rel, exc.reason)
            report.skip(rel, exc.reason)
            continue
        report.add(rel, result)

    logger.debug(
        "Scanned %d file(s), %d flagged, %d skipped",
        report.files_scanned,
        len(report.flagged_files),
        len(report.skipped_files),
    )
    return report


def should_fail(report: AggregateReport, fail_on: str = "never") -> bool:
    """
    Decide whether findings should fail the run.

    ``never`` keeps findings advisory, ``dangerous`` fails when any file uses
    a dangerous API, ``any`` fails on any flagged file.
    """
    if fail_on == "dangerous":
        return bool(report.dangerous_files)
    if fail_on == "any":
        return bool(report.flagged_files)
    return False


def run_audit(config: WalkConfig, scanner: Optional[FileScanner] = None) -> AggregateReport:
    """Walk the tree described by ``config`` and aggregate the findings."""
    files = walk(config)
    logger.debug("Found %d candidate file(s) under %s", len(files), config.root_dir)
    return aggregate(files, config.root_dir, scanner)
