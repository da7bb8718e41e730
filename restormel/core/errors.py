"""
Restormel Errors

Exceptions raised by the audit core. A FileAccessError affects a single
file and is recoverable; PatternError and ConfigError are startup faults.
"""

from __future__ import annotations

from pathlib import Path


class RestormelError(Exception):
    """Base class for all Restormel errors."""


class FileAccessError(RestormelError):
    """A candidate file could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class PatternError(RestormelError):
    """A detection pattern failed to compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


class ConfigError(RestormelError):
    """The configuration file could not be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"invalid configuration {path}: {reason}")
